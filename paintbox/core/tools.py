from enum import Enum


class Tool(Enum):
    """Which color source a stamp uses."""

    BRUSH = "brush"
    ERASER = "eraser"


class BrushShape(Enum):
    """Footprint of a single stamp."""

    SQUARE = "square"
    CIRCLE = "circle"
