"""Reading images in the XPM42 text format."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import BinaryIO

from cubscape.image import MAX_DIMENSION, Texture
from cubscape.pixels import (
    BPP,
    ErrorCode,
    GraphicsError,
    draw_pixel,
    fnv_hash,
    rgba_to_mono,
)

MAGIC = b"!XPM42\n"
MAX_CPP = 10
TABLE_SIZE = 0xFFFF
_HEADER_CHUNK = 63

_INT = re.compile(rb"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_CHAR = re.compile(rb"\s*(\S)")
_HEX = re.compile(rb"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]*)")
_SPACES = b" \t\n\v\f\r"


@dataclass
class Xpm:
    """A decoded XPM42 image with its header fields."""

    texture: Texture
    color_count: int
    cpp: int
    mode: str


def _invalid() -> GraphicsError:
    return GraphicsError(ErrorCode.INVXPM)


def _c_int(sign: bytes, digits: bytes) -> int:
    if digits[:2].lower() == b"0x":
        value = int(digits[2:], 16)
    elif len(digits) > 1 and digits.startswith(b"0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    return -value if sign == b"-" else value


def _scan_header(line: bytes) -> tuple[list[int], str | None]:
    values: list[int] = []
    pos = 0
    for _ in range(4):
        match = _INT.match(line, pos)
        if not match:
            break
        values.append(_c_int(match.group(1), match.group(2)))
        pos = match.end()
    mode = None
    if len(values) == 4:
        match = _CHAR.match(line, pos)
        if match:
            mode = match.group(1).decode("latin-1")
    return values, mode


def _hex_channel(channel: bytes) -> int:
    match = _HEX.match(channel)
    digits = match.group(2)
    value = int(digits, 16) if digits else 0
    if match.group(1) == b"-":
        value = -value
    return value & 0xFF


def _parse_entry(line: bytes, cpp: int, mode: str, table: dict[int, int]) -> None:
    if line.rfind(b" ") != cpp:
        raise _invalid()
    if line[cpp] not in _SPACES or line[cpp + 1 : cpp + 2] != b"#":
        raise _invalid()
    if not line[cpp + 2 : cpp + 3].isalnum():
        raise _invalid()
    start = cpp + 2
    color = 0
    for shift, index in ((24, 0), (16, 2), (8, 4), (0, 6)):
        color |= _hex_channel(line[start + index : start + index + 2]) << shift
    key = fnv_hash(line[:cpp]) % TABLE_SIZE
    table[key] = rgba_to_mono(color) if mode == "m" else color


def _read_pixels(stream: BinaryIO, xpm: Xpm, table: dict[int, int]) -> None:
    texture = xpm.texture
    cpp = xpm.cpp
    for y in range(texture.height):
        line = stream.readline()
        if not line:
            raise _invalid()
        if line.endswith(b"\n"):
            line = line[:-1]
        if len(line) != texture.width * cpp:
            raise _invalid()
        for x in range(texture.width):
            key = fnv_hash(line[x * cpp : (x + 1) * cpp]) % TABLE_SIZE
            offset = (y * texture.width + x) * BPP
            draw_pixel(texture.pixels, offset, table.get(key, 0))


def parse_xpm42(stream: BinaryIO) -> Xpm:
    """Decode an XPM42 image from a binary stream."""
    if stream.readline(_HEADER_CHUNK) != MAGIC:
        raise _invalid()
    header = stream.readline(_HEADER_CHUNK)
    if not header:
        raise _invalid()
    values, mode = _scan_header(header)
    if len(values) < 4 or mode not in ("c", "m"):
        raise _invalid()
    width, height, color_count, cpp = values
    if not (0 <= width <= MAX_DIMENSION and 0 <= height <= MAX_DIMENSION):
        raise _invalid()
    if not 1 <= cpp <= MAX_CPP or color_count < 0:
        raise _invalid()
    texture = Texture(width, height, bytearray(width * height * BPP))
    xpm = Xpm(texture, color_count, cpp, mode)
    table: dict[int, int] = {}
    for _ in range(color_count):
        line = stream.readline()
        if not line:
            raise _invalid()
        _parse_entry(line, cpp, mode, table)
    _read_pixels(stream, xpm, table)
    return xpm


def load_xpm42(path: str | os.PathLike[str]) -> Xpm:
    """Read an XPM42 image from a file whose name contains .xpm42."""
    if ".xpm42" not in os.fspath(path):
        raise GraphicsError(ErrorCode.INVEXT)
    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise GraphicsError(ErrorCode.INVFILE) from exc
    with stream:
        return parse_xpm42(stream)