"""Reading a .cub scene file and picking apart its lines."""

from __future__ import annotations

import os
import re
from collections.abc import Sequence

PLAYER_MARKS = "NSEW"

FILE_ERROR = "Cannot open the scene file"
EMPTY_FILE = "The scene file is empty"
INVALID_RGB_AMOUNT = "A color needs exactly three RGB values"
INVALID_RGB_VALUES = "Invalid RGB values"
MISSING_PATH = "A texture line has no path"

_WHITESPACE = frozenset("\t\n\v\f\r ")
_DIGITS = frozenset("0123456789")
_ATOI = re.compile(r"[\t\n\v\f\r ]*([+-]?)([0-9]*)")


class SceneError(Exception):
    """Raised when a scene file cannot be read or is not valid."""


def is_empty_line(line: str) -> bool:
    """Return True if the line holds nothing but whitespace."""
    return all(char in _WHITESPACE for char in line)


def read_scene_lines(path: str | os.PathLike[str]) -> list[str]:
    """Return the non-empty lines of a scene file, without line endings."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise SceneError(FILE_ERROR) from exc
    lines = [line for line in text.split("\n") if not is_empty_line(line)]
    if not lines:
        raise SceneError(EMPTY_FILE)
    return lines


def find_position(grid: Sequence[str]) -> tuple[int, int] | None:
    """Return (x, y) of the first player mark in the grid, or None."""
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char in PLAYER_MARKS:
                return x, y
    return None


def remove_extra_spaces(text: str) -> str:
    """Keep digits, commas and minus signs from the first digit onwards."""
    start = next((i for i, char in enumerate(text) if char in _DIGITS), len(text))
    return "".join(char for char in text[start:] if char in _DIGITS or char in ",-")


def _split(text: str, separator: str) -> list[str]:
    return [part for part in text.split(separator) if part]


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def parse_rgb(line: str) -> tuple[int, int, int]:
    """Parse the three color channels of an F or C line."""
    parts = _split(remove_extra_spaces(line), ",")
    if len(parts) < 3:
        raise SceneError(INVALID_RGB_AMOUNT)
    values = tuple(_atoi(part) for part in parts[:3])
    if any(value > 255 for value in values):
        raise SceneError(INVALID_RGB_VALUES)
    return values  # type: ignore[return-value]


def get_path(line: str) -> str:
    """Return the second space-separated word of a texture line."""
    words = _split(line, " ")
    if len(words) < 2:
        raise SceneError(MISSING_PATH)
    return words[1]


def count_width(grid: Sequence[str]) -> int:
    """Return the length of the longest row."""
    return max((len(row) for row in grid), default=0)