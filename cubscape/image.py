"""RGBA images, textures loaded from PNG files and font atlas offsets."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field

from PIL import Image as PILImage

from cubscape.pixels import BPP, ErrorCode, GraphicsError, draw_pixel

MAX_DIMENSION = 0x7FFF
FONT_WIDTH = 10


def _float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _check_dimensions(width: int, height: int) -> None:
    if not width or not height or width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise GraphicsError(ErrorCode.INVDIM)
    if width < 0 or height < 0:
        raise GraphicsError(ErrorCode.INVDIM)


@dataclass
class Texture:
    """Raw pixel data, four bytes per pixel in RGBA order, row by row."""

    width: int
    height: int
    pixels: bytearray
    bytes_per_pixel: int = BPP


@dataclass
class Instance:
    """One placement of an image on the screen."""

    x: int
    y: int
    z: int
    enabled: bool = True


@dataclass(init=False)
class Image:
    """A drawable RGBA buffer that can be placed on screen several times."""

    width: int
    height: int
    pixels: bytearray
    instances: list[Instance] = field(default_factory=list)
    enabled: bool = True

    def __init__(self, width: int, height: int) -> None:
        _check_dimensions(width, height)
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height * BPP)
        self.instances = []
        self.enabled = True

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise GraphicsError(ErrorCode.INVPOS)
        return (y * self.width + x) * BPP

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at (x, y) to a 0xRRGGBBAA color."""
        draw_pixel(self.pixels, self._offset(x, y), color)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the 0xRRGGBBAA color of the pixel at (x, y)."""
        offset = self._offset(x, y)
        return int.from_bytes(self.pixels[offset : offset + BPP], "big")

    def resize(self, width: int, height: int) -> None:
        """Scale the image to a new size by nearest-neighbour sampling."""
        _check_dimensions(width, height)
        if width == self.width and height == self.height:
            return
        wstep = _float32(self.width / width)
        hstep = _float32(self.height / height)
        columns = [int(_float32(i * wstep)) for i in range(width)]
        rows = [int(_float32(j * hstep)) for j in range(height)]
        origin = self.pixels
        result = bytearray(width * height * BPP)
        out = 0
        for src_y in rows:
            base = src_y * self.width
            for src_x in columns:
                start = (base + src_x) * BPP
                result[out : out + BPP] = origin[start : start + BPP]
                out += BPP
        self.pixels = result
        self.width = width
        self.height = height

    def add_instance(self, x: int, y: int, z: int) -> int:
        """Place the image at (x, y) with depth z; return the instance index."""
        self.instances.append(Instance(x, y, z))
        return len(self.instances) - 1


def texture_to_image(texture: Texture) -> Image:
    """Return a new image holding a copy of the texture's pixels."""
    image = Image(texture.width, texture.height)
    bpp = texture.bytes_per_pixel
    row = texture.width * bpp
    if len(texture.pixels) < row * texture.height:
        raise GraphicsError(ErrorCode.INVIMG)
    for i in range(texture.height):
        target = i * image.width * bpp
        image.pixels[target : target + row] = texture.pixels[i * row : (i + 1) * row]
    return image


def load_png(path: str | os.PathLike[str]) -> Texture:
    """Decode a PNG file into an RGBA texture."""
    try:
        with PILImage.open(path) as source:
            if source.format != "PNG":
                raise GraphicsError(ErrorCode.INVPNG)
            rgba = source.convert("RGBA")
    except GraphicsError:
        raise
    except (OSError, ValueError, SyntaxError) as exc:
        raise GraphicsError(ErrorCode.INVPNG) from exc
    return Texture(rgba.width, rgba.height, bytearray(rgba.tobytes()))


def get_texoffset(char: str) -> int:
    """Return the x offset of a character in the font atlas, -1 if unprintable."""
    code = ord(char)
    if not 32 <= code <= 126:
        return -1
    # Each glyph is followed by a two-pixel separator in the atlas.
    return (FONT_WIDTH + 2) * (code - 32)