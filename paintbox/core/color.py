from __future__ import annotations

from typing import NamedTuple

from PySide6.QtGui import QColor


def clamp_channel(value: int) -> int:
    return max(0, min(255, int(value)))


def parse_unsigned(text: object) -> int | None:
    """Parse a plain ASCII decimal integer, optionally prefixed with "+".

    Whitespace, underscores, signs other than a single leading "+" and
    non-ASCII digits are rejected with ``None``.
    """
    text = str(text)
    digits = text[1:] if text.startswith("+") else text
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    return int(digits)


def parse_channel(text: object) -> int:
    """Parse a single channel from user text.

    Anything that is not an integer in the 0-255 range becomes 0.
    """
    value = parse_unsigned(text)
    if value is None or value > 255:
        return 0
    return clamp_channel(value)


class Color(NamedTuple):
    """An 8-bit RGBA color, laid out the same way as a canvas pixel."""

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> "Color":
        return cls(clamp_channel(r), clamp_channel(g), clamp_channel(b), 255)

    @classmethod
    def from_qcolor(cls, color: QColor) -> "Color":
        return cls(color.red(), color.green(), color.blue(), color.alpha())

    def to_qcolor(self) -> QColor:
        return QColor(self.r, self.g, self.b, self.a)

    def name(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def is_opaque(self) -> bool:
        return self.a == 255


WHITE = Color(255, 255, 255, 255)
BLACK = Color(0, 0, 0, 255)
GRAY = Color(128, 128, 128, 255)
TRANSPARENT = Color(0, 0, 0, 0)


PALETTE: dict[str, Color] = {
    "Red": Color.rgb(255, 0, 0),
    "Green": Color.rgb(0, 255, 0),
    "Blue": Color.rgb(0, 0, 255),
    "Cyan": Color.rgb(0, 255, 255),
    "Brown": Color.rgb(139, 69, 19),
    "Yellow": Color.rgb(255, 255, 0),
    "Orchid": Color.rgb(196, 55, 140),
    "Slate Blue": Color.rgb(72, 61, 139),
    "Black": BLACK,
}

BACKGROUND_PRESETS: dict[str, Color] = {
    "White": WHITE,
    "Gray": GRAY,
    "Transparent": TRANSPARENT,
}


def coerce_color(value) -> Color:
    """Accept a :class:`Color`, a 3/4 tuple or a :class:`QColor`."""
    if isinstance(value, Color):
        return value
    if isinstance(value, QColor):
        return Color.from_qcolor(value)
    components = tuple(value)
    if len(components) == 3:
        return Color.rgb(*components)
    if len(components) == 4:
        r, g, b, a = components
        return Color(clamp_channel(r), clamp_channel(g), clamp_channel(b), clamp_channel(a))
    raise ValueError(f"Cannot interpret {value!r} as an RGBA color.")
