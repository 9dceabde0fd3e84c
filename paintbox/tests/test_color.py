import pytest
from PySide6.QtGui import QColor

from paintbox.core.color import (
    BLACK,
    PALETTE,
    TRANSPARENT,
    Color,
    coerce_color,
    parse_channel,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", 0),
        ("128", 128),
        ("255", 255),
        (" 42 ", 0),
        ("+42", 42),
        ("1_0", 0),
        ("\u0664\u0662", 0),
        ("\u00b2", 0),
        ("256", 0),
        ("-1", 0),
        ("abc", 0),
        ("", 0),
        ("12.5", 0),
    ],
)
def test_parse_channel(text, expected):
    assert parse_channel(text) == expected


def test_rgb_is_opaque():
    color = Color.rgb(1, 2, 3)
    assert color == (1, 2, 3, 255)
    assert color.is_opaque


def test_qcolor_round_trip():
    color = Color(10, 20, 30, 40)
    assert Color.from_qcolor(color.to_qcolor()) == color
    assert coerce_color(QColor(255, 0, 0)) == (255, 0, 0, 255)


def test_coerce_color_accepts_tuples():
    assert coerce_color((1, 2, 3)) == Color(1, 2, 3, 255)
    assert coerce_color((1, 2, 3, 0)) == Color(1, 2, 3, 0)
    assert coerce_color(TRANSPARENT) is TRANSPARENT
    with pytest.raises(ValueError):
        coerce_color((1, 2))


def test_palette_colors_are_opaque():
    assert PALETTE["Black"] == BLACK
    assert PALETTE["Brown"] == (139, 69, 19, 255)
    assert all(color.is_opaque for color in PALETTE.values())


def test_name():
    assert Color.rgb(255, 0, 16).name() == "#ff0010"
