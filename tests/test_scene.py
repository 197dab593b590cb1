import math

import pytest

from cubscape.mapfile import SceneError
from cubscape.scene import (
    SCREEN_WIDTH,
    MapData,
    Player,
    Scene,
    build_scene,
    load_scene,
    rgb_to_int,
)

HEADER = [
    "NO ./north.png",
    "SO ./south.png",
    "WE ./west.png",
    "EA ./east.png",
    "F 220,100,0",
    "C 225,30,0",
]


def make_lines(mark="N"):
    return HEADER + ["111111", "100001", f"10{mark}001", "111111"]


def test_rgb_to_int_white():
    assert rgb_to_int((255, 255, 255)) == 0xFFFFFF


def test_rgb_to_int_none_is_zero():
    assert rgb_to_int(None) == 0


def test_rgb_to_int_channels_round_trip():
    value = rgb_to_int((12, 34, 56))
    assert ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF) == (12, 34, 56)


def test_rgb_to_int_masks_channels():
    assert rgb_to_int((256, 0, 0)) == rgb_to_int((0, 0, 0))


def test_build_scene_texture_paths():
    scene = build_scene(make_lines())
    assert scene.map.north_texture == "./north.png"
    assert scene.map.south_texture == "./south.png"
    assert scene.map.west_texture == "./west.png"
    assert scene.map.east_texture == "./east.png"


def test_build_scene_colors():
    scene = build_scene(make_lines())
    assert scene.map.floor_colors == (220, 100, 0)
    assert scene.map.ceiling_colors == (225, 30, 0)
    assert scene.floor_color == rgb_to_int((220, 100, 0))
    assert scene.ceiling_color == rgb_to_int((225, 30, 0))


def test_build_scene_grid_is_map_part():
    lines = make_lines()
    scene = build_scene(lines)
    assert scene.map.grid == lines[6:]
    assert scene.map.lines_total == len(lines)


def test_build_scene_player_tile_centre():
    scene = build_scene(make_lines())
    player = scene.player
    assert (player.pos_x, player.pos_y) == (2, 2)
    assert player.tile_pos_x // scene.map.unit_size == player.pos_x
    assert player.tile_pos_y // scene.map.unit_size == player.pos_y
    assert player.tile_pos_x % scene.map.unit_size == scene.map.unit_size // 2


@pytest.mark.parametrize("mark, camera", [("E", 0), ("N", 90), ("W", 180), ("S", 270)])
def test_build_scene_camera_from_mark(mark, camera):
    player = build_scene(make_lines(mark)).player
    assert player.camera_position == camera
    assert player.camera_position_rad == pytest.approx(math.radians(camera))


def test_build_scene_field_of_view_and_projection():
    scene = build_scene(make_lines())
    assert scene.player.field_of_view_deg == 60
    assert scene.player.field_of_view_rad == pytest.approx(math.radians(60))
    assert scene.raycast.angle_btw_rays_rad * SCREEN_WIDTH == pytest.approx(
        scene.player.field_of_view_rad
    )
    assert scene.raycast.dist_to_plane * math.tan(
        scene.player.field_of_view_rad
    ) == pytest.approx(SCREEN_WIDTH // 2)


def test_defaults_follow_unit_size():
    scene = Scene()
    assert scene.map.unit_size == 64
    assert scene.player.eyes_height == scene.map.unit_size // 2
    assert scene.player.move_speed == 10
    assert scene.player.turn_speed == 30
    assert Player().camera_position == 0
    assert MapData().north_texture is None


def test_build_scene_missing_texture():
    lines = [line for line in make_lines() if not line.startswith("NO ")]
    with pytest.raises(SceneError):
        build_scene(lines)


def test_build_scene_missing_color():
    lines = [line for line in make_lines() if not line.startswith("C ")]
    with pytest.raises(SceneError):
        build_scene(lines)


def test_build_scene_missing_player():
    lines = HEADER + ["1111", "1001", "1111"]
    with pytest.raises(SceneError):
        build_scene(lines)


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text("\n".join(HEADER) + "\n\n" + "\n".join(make_lines()[6:]) + "\n")
    scene = load_scene(path)
    assert scene.map.grid == make_lines()[6:]
    assert scene.player.camera_position == 90


def test_load_scene_open_map_raises(tmp_path):
    path = tmp_path / "open.cub"
    path.write_text("\n".join(HEADER + ["1111", "10N0", "1111"]) + "\n")
    with pytest.raises(SceneError):
        load_scene(path)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(SceneError):
        load_scene(tmp_path / "absent.cub")