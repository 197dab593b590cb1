"""The game state built from a validated scene file."""

from __future__ import annotations

import math
import os
from collections.abc import Sequence
from dataclasses import dataclass, field

from cubscape.mapfile import (
    SceneError,
    find_position,
    get_path,
    parse_rgb,
    read_scene_lines,
)
from cubscape.validate import (
    MAP_START,
    MISSING_COLOR,
    MISSING_PLAYER,
    MISSING_TEXTURE,
    check_for_errors,
)

SCREEN_WIDTH = 640 * 2
SCREEN_HEIGHT = 400 * 2
UNIT_SIZE = 64
FIELD_OF_VIEW_DEG = 60
MOVE_SPEED = 10
TURN_SPEED = 30

_CAMERA_BY_MARK = {"E": 0, "N": 90, "W": 180}
_CAMERA_DEFAULT = 270


def rgb_to_int(rgb: Sequence[int] | None) -> int:
    """Pack three color channels into a 0xRRGGBB integer; None gives 0."""
    if rgb is None:
        return 0
    red, green, blue = rgb[0], rgb[1], rgb[2]
    return ((red & 0xFF) << 16) + ((green & 0xFF) << 8) + (blue & 0xFF)


@dataclass
class MapData:
    """The scene's raw lines, the map grid, texture paths and colors."""

    lines: list[str] = field(default_factory=list)
    grid: list[str] = field(default_factory=list)
    north_texture: str | None = None
    south_texture: str | None = None
    west_texture: str | None = None
    east_texture: str | None = None
    floor_colors: tuple[int, int, int] | None = None
    ceiling_colors: tuple[int, int, int] | None = None
    unit_size: int = UNIT_SIZE

    @property
    def lines_total(self) -> int:
        return len(self.lines)


@dataclass
class Player:
    """Where the player stands and looks, and how fast they move."""

    pos_x: int = 0
    pos_y: int = 0
    tile_pos_x: float = 0.0
    tile_pos_y: float = 0.0
    camera_position: int = 0
    camera_position_rad: float = 0.0
    move_speed: int = MOVE_SPEED
    turn_speed: int = TURN_SPEED
    field_of_view_deg: int = 0
    field_of_view_rad: float = 0.0
    eyes_height: int = UNIT_SIZE // 2


@dataclass
class Raycast:
    """Projection constants shared by every cast ray."""

    angle_btw_rays_rad: float = 0.0
    dist_to_plane: float = 0.0


@dataclass
class Scene:
    """Everything the game needs: map, player and projection."""

    map: MapData = field(default_factory=MapData)
    player: Player = field(default_factory=Player)
    raycast: Raycast = field(default_factory=Raycast)

    @property
    def floor_color(self) -> int:
        return rgb_to_int(self.map.floor_colors)

    @property
    def ceiling_color(self) -> int:
        return rgb_to_int(self.map.ceiling_colors)


def _fill_texture_paths(map_data: MapData) -> None:
    for line in map_data.lines:
        if "NO " in line:
            map_data.north_texture = get_path(line)
        if "SO " in line:
            map_data.south_texture = get_path(line)
        if "WE " in line:
            map_data.west_texture = get_path(line)
        if "EA " in line:
            map_data.east_texture = get_path(line)
    paths = (
        map_data.north_texture,
        map_data.south_texture,
        map_data.west_texture,
        map_data.east_texture,
    )
    if any(path is None for path in paths):
        raise SceneError(MISSING_TEXTURE)


def _fill_colors(map_data: MapData) -> None:
    for line in map_data.lines:
        if "F " in line:
            map_data.floor_colors = parse_rgb(line)
        if "C " in line:
            map_data.ceiling_colors = parse_rgb(line)
    if map_data.floor_colors is None or map_data.ceiling_colors is None:
        raise SceneError(MISSING_COLOR)


def _place_player(grid: Sequence[str], unit_size: int) -> Player:
    position = find_position(grid)
    if position is None:
        raise SceneError(MISSING_PLAYER)
    x, y = position
    camera = _CAMERA_BY_MARK.get(grid[y][x], _CAMERA_DEFAULT)
    return Player(
        pos_x=x,
        pos_y=y,
        tile_pos_x=float(x * unit_size + unit_size // 2),
        tile_pos_y=float(y * unit_size + unit_size // 2),
        camera_position=camera,
        camera_position_rad=math.radians(camera),
        field_of_view_deg=FIELD_OF_VIEW_DEG,
        field_of_view_rad=math.radians(FIELD_OF_VIEW_DEG),
        eyes_height=unit_size // 2,
    )


def _projection(field_of_view_rad: float) -> Raycast:
    return Raycast(
        angle_btw_rays_rad=field_of_view_rad / SCREEN_WIDTH,
        dist_to_plane=(SCREEN_WIDTH // 2) / math.tan(field_of_view_rad),
    )


def build_scene(lines: Sequence[str]) -> Scene:
    """Build the game state from a scene's non-empty lines."""
    map_data = MapData(lines=list(lines))
    _fill_texture_paths(map_data)
    _fill_colors(map_data)
    map_data.grid = list(map_data.lines[MAP_START:])
    player = _place_player(map_data.grid, map_data.unit_size)
    return Scene(map=map_data, player=player, raycast=_projection(player.field_of_view_rad))


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read, validate and build the scene stored at path."""
    lines = read_scene_lines(path)
    check_for_errors(lines)
    return build_scene(lines)