"""Checks that a scene's lines form a complete, closed map."""

from __future__ import annotations

from collections.abc import Sequence

from cubscape.mapfile import (
    INVALID_RGB_AMOUNT,
    INVALID_RGB_VALUES,
    PLAYER_MARKS,
    SceneError,
    find_position,
    remove_extra_spaces,
)

MAP_START = 6
MAP_SYMBOLS = frozenset("NSWE10 ")
TEXTURE_IDS = ("NO ", "SO ", "WE ", "EA ")
COLOR_IDS = ("F ", "C ")

MISSING_TEXTURE = "A texture path is missing"
TEXTURE_DUPLICATE = "A texture path is given more than once"
NON_PNG_TEXTURE = "Textures must be .png files"
MISSING_COLOR = "A floor or ceiling color is missing"
COLOR_DUPLICATE = "A color is given more than once"
WRONG_ORDER = "Textures and colors must come before the map"
MISSING_MAP = "The map is missing"
MISSING_PLAYER = "The map has no player"
MULTIPLE_PLAYERS = "The map has more than one player"
EXTRA_SYMBOLS = "The map holds an unknown symbol"
NO_WALL = "The map is not closed by walls"
SPACE_FOUND = "The map has a space inside it"

_DIGITS = frozenset("0123456789")


def is_valid_filename(name: str) -> bool:
    """Return True if the name ends in .cub."""
    return name.endswith(".cub")


def is_png_file(text: str) -> bool:
    """Return True if the text ends in .png."""
    return text.endswith(".png")


def check_numeric(line: str) -> list[str]:
    """Return the three color fields of a line, raising if they are malformed."""
    parts = [part for part in remove_extra_spaces(line).split(",") if part]
    if len(parts) != 3:
        raise SceneError(INVALID_RGB_AMOUNT)
    for part in parts:
        # The last character of each field is left unchecked.
        if not all(char in _DIGITS for char in part[:-1]):
            raise SceneError(INVALID_RGB_VALUES)
    return parts


def count_identifiers(lines: Sequence[str], identifier: str) -> int:
    """Count lines holding the identifier; -1 for a texture that is not a .png."""
    counter = 0
    for line in lines:
        if identifier not in line:
            continue
        counter += 1
        if identifier[0] in "FC":
            check_numeric(line)
        if identifier[0] in PLAYER_MARKS and not is_png_file(line):
            return -1
    return counter


def check_paths(lines: Sequence[str]) -> None:
    """Raise unless each texture appears exactly once as a .png."""
    counts = [count_identifiers(lines, ident) for ident in TEXTURE_IDS]
    if 0 in counts:
        raise SceneError(MISSING_TEXTURE)
    if any(count > 1 for count in counts):
        raise SceneError(TEXTURE_DUPLICATE)
    if -1 in counts:
        raise SceneError(NON_PNG_TEXTURE)


def check_colors(lines: Sequence[str]) -> None:
    """Raise unless floor and ceiling colors each appear exactly once."""
    counts = [count_identifiers(lines, ident) for ident in COLOR_IDS]
    if 0 in counts:
        raise SceneError(MISSING_COLOR)
    if any(count > 1 for count in counts):
        raise SceneError(COLOR_DUPLICATE)


def _find_line_index(lines: Sequence[str], identifier: str) -> int:
    return next((i for i, line in enumerate(lines) if identifier in line), -1)


def check_order(lines: Sequence[str]) -> None:
    """Raise if an identifier first appears after the six header lines."""
    for identifier in TEXTURE_IDS + COLOR_IDS:
        if _find_line_index(lines, identifier) >= MAP_START:
            raise SceneError(WRONG_ORDER)


def _check_player(rows: Sequence[str]) -> None:
    players = sum(char in PLAYER_MARKS for row in rows for char in row)
    if players == 0:
        raise SceneError(MISSING_PLAYER)
    if players > 1:
        raise SceneError(MULTIPLE_PLAYERS)


def _check_extra_symbols(rows: Sequence[str]) -> None:
    if any(char not in MAP_SYMBOLS for row in rows for char in row):
        raise SceneError(EXTRA_SYMBOLS)


def _flood_fill(rows: Sequence[str], start: tuple[int, int]) -> None:
    grid = [list(row) for row in rows]
    stack = [start]
    while stack:
        x, y = stack.pop()
        if x < 0 or y < 0 or y >= len(grid) or x > len(grid[y]):
            raise SceneError(NO_WALL)
        row = grid[y]
        cell = row[x] if x < len(row) else ""
        if cell == " ":
            raise SceneError(SPACE_FOUND)
        if cell in ("", "1", "X"):
            continue
        row[x] = "X"
        # Pushed in reverse so that x + 1 is explored first.
        stack.extend(((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)))


def check_map(lines: Sequence[str]) -> tuple[int, int]:
    """Validate the map part and return the player's (x, y) within it."""
    if len(lines) <= MAP_START:
        raise SceneError(MISSING_MAP)
    rows = list(lines[MAP_START:])
    _check_player(rows)
    _check_extra_symbols(rows)
    position = find_position(rows)
    _flood_fill(rows, position)
    return position


def check_for_errors(lines: Sequence[str]) -> list[str]:
    """Run every check on a scene's lines and return its map rows."""
    check_paths(lines)
    check_colors(lines)
    check_order(lines)
    check_map(lines)
    return list(lines[MAP_START:])