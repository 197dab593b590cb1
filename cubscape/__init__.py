"""Raycasting maze explorer for .cub scene files, with RGBA and XPM42 image helpers."""

__version__ = "0.1.0"
__all__ = [
    "app",
    "image",
    "mapfile",
    "movement",
    "pixels",
    "raycast",
    "renderqueue",
    "scene",
    "validate",
    "xpm42",
]