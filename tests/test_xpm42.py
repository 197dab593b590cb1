import io

import pytest

from cubscape.pixels import ErrorCode, GraphicsError
from cubscape.xpm42 import load_xpm42, parse_xpm42

SAMPLE = b"!XPM42\n2 1 2 1 c\n# #FF0000FF\n. #00FF00FF\n#.\n"


def _parse(data):
    return parse_xpm42(io.BytesIO(data))


def _expect_invalid(data):
    with pytest.raises(GraphicsError) as info:
        _parse(data)
    assert info.value.code is ErrorCode.INVXPM


def test_parse_color_image():
    xpm = _parse(SAMPLE)
    assert (xpm.texture.width, xpm.texture.height) == (2, 1)
    assert (xpm.color_count, xpm.cpp, xpm.mode) == (2, 1, "c")
    assert bytes(xpm.texture.pixels) == bytes.fromhex("FF0000FF00FF00FF")


def test_parse_two_chars_per_pixel_and_hex_header():
    data = b"!XPM42\n0x2 2 2 2 c\nab #01020304\ncd #0A0B0C0D\nabcd\ncdab\n"
    xpm = _parse(data)
    assert xpm.cpp == 2
    assert bytes(xpm.texture.pixels) == bytes.fromhex(
        "01020304" "0A0B0C0D" "0A0B0C0D" "01020304"
    )


def test_last_line_without_newline():
    xpm = _parse(SAMPLE.rstrip(b"\n"))
    assert bytes(xpm.texture.pixels) == bytes.fromhex("FF0000FF00FF00FF")


def test_monochrome_mode_gives_gray_and_keeps_alpha():
    data = b"!XPM42\n1 1 1 1 m\n# #FF804020\n#\n"
    xpm = _parse(data)
    red, green, blue, alpha = xpm.texture.pixels
    assert red == green == blue
    assert alpha == 0x20
    assert xpm.mode == "m"


def test_unknown_pixel_is_transparent():
    data = b"!XPM42\n1 1 1 1 c\n# #FFFFFFFF\n.\n"
    xpm = _parse(data)
    assert bytes(xpm.texture.pixels) == bytes(4)


@pytest.mark.parametrize(
    "data",
    [
        b"!XPM41\n2 1 2 1 c\n",
        b"!XPM42",
        b"!XPM42\n",
        b"!XPM42\n2 1 2 1 x\n# #FF0000FF\n. #00FF00FF\n#.\n",
        b"!XPM42\n2 1 2 1\n# #FF0000FF\n. #00FF00FF\n#.\n",
        b"!XPM42\n2 1 2 11 c\n",
        b"!XPM42\n40000 1 1 1 c\n# #FF0000FF\n",
        b"!XPM42\n2 1 2\n",
    ],
)
def test_invalid_headers(data):
    _expect_invalid(data)


@pytest.mark.parametrize(
    "entry",
    [
        b"#  #FF0000FF\n",
        b"# FF0000FF\n",
        b"#\t#FF0000FF\n",
        b"# #-F0000FF\n",
    ],
)
def test_invalid_color_entries(entry):
    _expect_invalid(b"!XPM42\n1 1 1 1 c\n" + entry + b"#\n")


def test_missing_color_line():
    _expect_invalid(b"!XPM42\n1 1 2 1 c\n# #FF0000FF\n")


def test_wrong_data_length():
    _expect_invalid(b"!XPM42\n2 1 1 1 c\n# #FF0000FF\n###\n")


def test_missing_data_line():
    _expect_invalid(b"!XPM42\n1 2 1 1 c\n# #FF0000FF\n#\n")


def test_load_from_file(tmp_path):
    path = tmp_path / "sprite.xpm42"
    path.write_bytes(SAMPLE)
    xpm = load_xpm42(path)
    assert bytes(xpm.texture.pixels) == bytes.fromhex("FF0000FF00FF00FF")


def test_load_wrong_extension(tmp_path):
    path = tmp_path / "sprite.xpm"
    path.write_bytes(SAMPLE)
    with pytest.raises(GraphicsError) as info:
        load_xpm42(path)
    assert info.value.code is ErrorCode.INVEXT


def test_load_missing_file(tmp_path):
    with pytest.raises(GraphicsError) as info:
        load_xpm42(tmp_path / "absent.xpm42")
    assert info.value.code is ErrorCode.INVFILE


def test_load_invalid_content(tmp_path):
    path = tmp_path / "bad.xpm42"
    path.write_bytes(b"hello\n")
    with pytest.raises(GraphicsError) as info:
        load_xpm42(path)
    assert info.value.code is ErrorCode.INVXPM