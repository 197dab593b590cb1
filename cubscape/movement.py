"""Moving and turning the player on the map grid."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Sequence

from cubscape.scene import UNIT_SIZE, Player, Scene


class Action(enum.Enum):
    """What the player asked for during one frame."""

    FORWARD = "forward"
    BACKWARD = "backward"
    STRAFE_LEFT = "strafe_left"
    STRAFE_RIGHT = "strafe_right"
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"
    QUIT = "quit"


_MOVE_OFFSETS = (
    (Action.FORWARD, 0),
    (Action.BACKWARD, 180),
    (Action.STRAFE_LEFT, 270),
    (Action.STRAFE_RIGHT, 90),
)


def deg_to_rad(angle: float) -> float:
    """Convert degrees to radians."""
    return angle * math.pi / 180.0


def rad_to_deg(angle: float) -> int:
    """Convert a whole number of radians to whole degrees, truncating both."""
    return int(int(angle) * 180.0 / math.pi)


def degrees_to_radians(value: float) -> float:
    """Convert degrees to radians."""
    return value * (math.pi / 180)


def is_passable(grid: Sequence[str], y: float, x: float) -> bool:
    """Return True unless the point lies in a wall tile or off the grid."""
    col = math.floor(x / UNIT_SIZE)
    row = math.floor(y / UNIT_SIZE)
    if row < 0 or col < 0 or row >= len(grid) or col >= len(grid[row]):
        return False
    return grid[row][col] != "1"


def move_player(scene: Scene, offset: int) -> bool:
    """Step the player at offset degrees from the camera; False if a wall blocks."""
    player = scene.player
    angle = deg_to_rad((player.camera_position + offset) % 360)
    y = player.tile_pos_y + math.sin(angle) * player.move_speed
    x = player.tile_pos_x + math.cos(angle) * player.move_speed
    if not is_passable(scene.map.grid, y, x):
        return False
    player.tile_pos_y = y
    player.tile_pos_x = x
    return True


def turn_left(player: Player) -> None:
    """Rotate the camera by the turn speed, counter to turn_right."""
    player.camera_position = (player.camera_position - player.turn_speed + 360) % 360


def turn_right(player: Player) -> None:
    """Rotate the camera by the turn speed."""
    player.camera_position = (player.camera_position + player.turn_speed) % 360


def apply_actions(scene: Scene, actions: Iterable[Action]) -> bool:
    """Apply one frame of actions in a fixed order; return False on quit."""
    wanted = set(actions)
    if Action.QUIT in wanted:
        return False
    for action, offset in _MOVE_OFFSETS:
        if action in wanted:
            move_player(scene, offset)
    if Action.TURN_LEFT in wanted:
        turn_left(scene.player)
    if Action.TURN_RIGHT in wanted:
        turn_right(scene.player)
    return True