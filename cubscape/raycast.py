"""Casting rays across the field of view to size the wall slices."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from cubscape.scene import SCREEN_HEIGHT, SCREEN_WIDTH, Scene

PI = math.pi


@dataclass(frozen=True)
class RaySlice:
    """One screen column: its ray, the wall distance and the slice to draw."""

    index: int
    angle: float
    distance: float
    corrected: float
    height: float
    start: float
    end: float


def ray_angle(scene: Scene, index: int) -> float:
    """Return the angle in radians of the ray cast for a screen column."""
    fov = scene.player.field_of_view_rad
    step = fov / SCREEN_WIDTH
    return (scene.player.camera_position_rad - fov / 2) + index * step


def alpha_angle(ray_angle: float) -> float:
    """Reduce a ray angle to its offset within its quadrant."""
    if ray_angle < PI / 2:
        return ray_angle
    if ray_angle < PI:
        return ray_angle - PI / 2
    if ray_angle < 3 * PI / 2:
        return ray_angle - PI
    return ray_angle - 3 * PI / 2


def _over_tan(value: float, alpha: float) -> float:
    tangent = math.tan(alpha)
    if tangent == 0:
        return math.inf
    return value / tangent


def _wall_distance(pos_x: int, intersection_x: float, alpha: float) -> float:
    if not math.isfinite(intersection_x):
        return math.inf
    return abs(pos_x - int(intersection_x)) / math.cos(alpha)


def _horizontal_distance(scene: Scene, ray: float, alpha: float) -> float:
    unit = scene.map.unit_size
    pos_y = scene.player.pos_y
    base = (pos_y // unit) * unit
    first_y = base - 1 if ray < PI else base + unit
    first_x = _over_tan(pos_y - first_y, alpha)
    return _wall_distance(scene.player.pos_x, first_x, alpha)


def _vertical_distance(scene: Scene, ray: float, alpha: float) -> float:
    unit = scene.map.unit_size
    pos_x = scene.player.pos_x
    base = (pos_x // unit) * unit
    facing_left = PI / 2 < ray < 3 * PI / 2
    first_x = base - 1 if facing_left else base + unit
    return _wall_distance(pos_x, first_x, alpha)


def closest_wall_distance(scene: Scene, ray_angle: float) -> float:
    """Return the wall distance kept for a ray from its two first intersections.

    The first horizontal and vertical grid crossings are taken as walls, and
    the larger of the two distances is kept.
    """
    alpha = alpha_angle(ray_angle)
    horizontal = _horizontal_distance(scene, ray_angle, alpha)
    vertical = _vertical_distance(scene, ray_angle, alpha)
    return horizontal if horizontal > vertical else vertical


def correct_fishbowl(distance: float, ray_angle: float, camera_angle: float) -> float:
    """Project a distance onto the camera direction to undo the fisheye."""
    return distance * math.cos(abs(ray_angle - camera_angle))


def _round_half_away(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def slice_bounds(scene: Scene, corrected_distance: float) -> tuple[float, float, float]:
    """Return (height, start, end) of the wall slice for a corrected distance."""
    if corrected_distance == 0:
        raise ValueError("the corrected wall distance must not be zero")
    ratio = _round_half_away(scene.map.unit_size / corrected_distance)
    height = ratio * scene.raycast.dist_to_plane
    start = SCREEN_HEIGHT // 2 - height / 2
    return height, start, start + height


def cast_rays(scene: Scene) -> Iterator[RaySlice]:
    """Yield the wall slice of every screen column, left to right."""
    camera = scene.player.camera_position_rad
    for index in range(SCREEN_WIDTH):
        angle = ray_angle(scene, index)
        distance = closest_wall_distance(scene, angle)
        corrected = correct_fishbowl(distance, angle, camera)
        height, start, end = slice_bounds(scene, corrected)
        yield RaySlice(index, angle, distance, corrected, height, start, end)