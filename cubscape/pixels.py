"""Pixel packing, color helpers and graphics error codes."""

from __future__ import annotations

import enum
import struct

FNV_PRIME = 0x100000001B3
FNV_OFFSET = 0xCBF29CE484222325
_MASK64 = (1 << 64) - 1
BPP = 4


class ErrorCode(enum.IntEnum):
    """Error codes reported by the graphics layer."""

    SUCCESS = 0
    INVEXT = 1
    INVFILE = 2
    INVPNG = 3
    INVXPM = 4
    INVPOS = 5
    INVDIM = 6
    INVIMG = 7
    VERTFAIL = 8
    FRAGFAIL = 9
    SHDRFAIL = 10
    MEMFAIL = 11
    GLADFAIL = 12
    GLFWFAIL = 13
    WINFAIL = 14
    STRTOOBIG = 15


_MESSAGES = {
    ErrorCode.SUCCESS: "No Errors",
    ErrorCode.INVEXT: "File has invalid extension",
    ErrorCode.INVFILE: "Failed to open the file",
    ErrorCode.INVPNG: "PNG file is invalid or corrupted",
    ErrorCode.INVXPM: "XPM42 file is invalid or corrupted",
    ErrorCode.INVPOS: "The specified X or Y positions are out of bounds",
    ErrorCode.INVDIM: "The specified Width or Height dimensions are out of bounds",
    ErrorCode.INVIMG: "The provided image is invalid, might indicate mismanagement of images",
    ErrorCode.VERTFAIL: "Failed to compile the vertex shader.",
    ErrorCode.FRAGFAIL: "Failed to compile the fragment shader.",
    ErrorCode.SHDRFAIL: "Failed to compile the shaders.",
    ErrorCode.MEMFAIL: "Failed to allocate memory",
    ErrorCode.GLADFAIL: "Failed to initialize GLAD",
    ErrorCode.GLFWFAIL: "Failed to initialize GLFW",
    ErrorCode.WINFAIL: "Failed to create window",
    ErrorCode.STRTOOBIG: "String is too big to be drawn",
}


def strerror(code: int) -> str:
    """Return the English description of an error code."""
    return _MESSAGES[ErrorCode(code)]


class GraphicsError(Exception):
    """Raised by the graphics layer; carries its error code."""

    def __init__(self, code: ErrorCode) -> None:
        self.code = ErrorCode(code)
        super().__init__(strerror(self.code))


def draw_pixel(buffer: bytearray, offset: int, color: int) -> None:
    """Store a 0xRRGGBBAA color as four bytes starting at offset."""
    if offset < 0 or offset + BPP > len(buffer):
        raise IndexError("pixel lies outside the buffer")
    buffer[offset : offset + BPP] = (color & 0xFFFFFFFF).to_bytes(BPP, "big")


def fnv_hash(data: bytes | str) -> int:
    """Return the 64-bit FNV-1a hash, treating bytes as signed characters."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    value = FNV_OFFSET
    for byte in data:
        if byte >= 0x80:
            byte |= _MASK64 ^ 0xFF
        value = ((value ^ byte) * FNV_PRIME) & _MASK64
    return value


def _float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


_RED_WEIGHT = _float32(0.299)
_GREEN_WEIGHT = _float32(0.587)
_BLUE_WEIGHT = _float32(0.114)


def _weighted(weight: float, channel: int) -> int:
    return int(_float32(weight * channel)) & 0xFF


def rgba_to_mono(color: int) -> int:
    """Convert a 0xRRGGBBAA color to grayscale, keeping its alpha."""
    red = _weighted(_RED_WEIGHT, (color >> 24) & 0xFF)
    green = _weighted(_GREEN_WEIGHT, (color >> 16) & 0xFF)
    blue = _weighted(_BLUE_WEIGHT, (color >> 8) & 0xFF)
    gray = (red + green + blue) & 0xFF
    return (gray << 24) | (gray << 16) | (gray << 8) | (color & 0xFF)