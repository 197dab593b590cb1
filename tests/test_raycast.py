import math

import pytest

from cubscape.raycast import (
    RaySlice,
    alpha_angle,
    cast_rays,
    closest_wall_distance,
    correct_fishbowl,
    ray_angle,
    slice_bounds,
)
from cubscape.scene import SCREEN_HEIGHT, SCREEN_WIDTH, build_scene

LINES = [
    "NO ./north.png",
    "SO ./south.png",
    "WE ./west.png",
    "EA ./east.png",
    "F 10,20,30",
    "C 40,50,60",
    "111",
    "1N1",
    "111",
]


@pytest.fixture
def scene():
    return build_scene(LINES)


def test_first_ray_starts_half_fov_left_of_camera(scene):
    player = scene.player
    expected = player.camera_position_rad - player.field_of_view_rad / 2
    assert ray_angle(scene, 0) == pytest.approx(expected)


def test_rays_sweep_the_whole_field_of_view(scene):
    player = scene.player
    last = ray_angle(scene, SCREEN_WIDTH)
    assert last == pytest.approx(player.camera_position_rad + player.field_of_view_rad / 2)


def test_ray_angles_increase(scene):
    angles = [ray_angle(scene, i) for i in range(0, SCREEN_WIDTH, 100)]
    assert angles == sorted(angles)


@pytest.mark.parametrize("offset", [0.0, math.pi / 2, math.pi, 3 * math.pi / 2])
def test_alpha_angle_removes_quadrant(offset):
    assert alpha_angle(offset + 0.1) == pytest.approx(0.1)


def test_alpha_angle_stays_within_quarter_turn():
    for step in range(100):
        angle = step * 2 * math.pi / 100
        assert 0 <= alpha_angle(angle) < math.pi / 2 + 1e-9


def test_closest_wall_distance_keeps_larger_intersection(scene):
    distance = closest_wall_distance(scene, math.pi / 4)
    assert distance == pytest.approx(63 * math.sqrt(2))


def test_closest_wall_distance_is_not_negative(scene):
    for step in range(1, 40):
        assert closest_wall_distance(scene, step * 0.15) >= 0


def test_fishbowl_correction_keeps_centre_ray(scene):
    assert correct_fishbowl(42.0, 1.2, 1.2) == 42.0


def test_fishbowl_correction_is_symmetric():
    left = correct_fishbowl(100.0, 1.0 - 0.3, 1.0)
    right = correct_fishbowl(100.0, 1.0 + 0.3, 1.0)
    assert left == pytest.approx(right)
    assert left < 100.0


def test_slice_is_centred_on_screen(scene):
    height, start, end = slice_bounds(scene, 5.0)
    assert end - start == pytest.approx(height)
    assert start + end == pytest.approx(SCREEN_HEIGHT)


def test_slice_shrinks_with_distance(scene):
    near, _, _ = slice_bounds(scene, 4.0)
    far, _, _ = slice_bounds(scene, 40.0)
    assert near > far


def test_slice_rejects_zero_distance(scene):
    with pytest.raises(ValueError):
        slice_bounds(scene, 0)


def test_cast_rays_covers_every_column(scene):
    slices = list(cast_rays(scene))
    assert len(slices) == SCREEN_WIDTH
    assert [s.index for s in slices] == list(range(SCREEN_WIDTH))
    assert all(isinstance(s, RaySlice) for s in slices)


def test_cast_rays_slices_are_consistent(scene):
    for ray in list(cast_rays(scene))[::64]:
        assert ray.angle == pytest.approx(ray_angle(scene, ray.index))
        assert ray.end - ray.start == pytest.approx(ray.height)