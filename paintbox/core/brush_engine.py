from __future__ import annotations

import logging

import numpy as np
from PySide6.QtCore import QRectF

from paintbox.core.color import Color
from paintbox.core.pixel_canvas import PixelCanvas
from paintbox.core.tools import BrushShape, Tool


logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT_WIDTH = 800
DEFAULT_VIEWPORT_HEIGHT = 600


def disc_mask_in_box(center_x: int, center_y: int, radius: int, box) -> np.ndarray:
    """Closed disc mask restricted to the half-open ``box`` ``(x0, y0, x1, y1)``.

    Only the box is materialised, so the cost is bounded by its area rather
    than by the radius.
    """
    x0, y0, x1, y1 = box
    dx = np.arange(x0, x1, dtype=np.int64) - center_x
    dy = np.arange(y0, y1, dtype=np.int64) - center_y
    return dx[np.newaxis, :] ** 2 + dy[:, np.newaxis] ** 2 <= radius * radius


class BrushEngine:
    """Stamps square or circular footprints onto a :class:`PixelCanvas`.

    Pointer positions arrive in viewport coordinates (the on-screen size of
    the canvas widget) and are scaled into canvas pixels. Dirty rectangles
    are scaled back the other way with the same factors.
    """

    def __init__(
        self,
        viewport_width: int = DEFAULT_VIEWPORT_WIDTH,
        viewport_height: int = DEFAULT_VIEWPORT_HEIGHT,
    ) -> None:
        if viewport_width <= 0 or viewport_height <= 0:
            raise ValueError(
                f"Viewport dimensions must be positive, got {viewport_width}x{viewport_height}."
            )
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height

    def scale_factors(self, canvas: PixelCanvas) -> tuple[float, float]:
        return (
            canvas.width / self.viewport_width,
            canvas.height / self.viewport_height,
        )

    def to_canvas(self, canvas: PixelCanvas, x: float, y: float) -> tuple[int, int]:
        sx, sy = self.scale_factors(canvas)
        # int() truncates toward zero, also for negative positions.
        return int(x * sx), int(y * sy)

    def to_viewport_rect(self, canvas: PixelCanvas, rect) -> QRectF:
        if rect is None:
            return QRectF()
        sx, sy = self.scale_factors(canvas)
        x0, y0, x1, y1 = rect
        return QRectF(x0 / sx, y0 / sy, (x1 - x0) / sx, (y1 - y0) / sy)

    @staticmethod
    def color_for(tool: Tool, brush_color: Color, background_color: Color) -> Color:
        if tool == Tool.ERASER:
            return background_color
        return brush_color

    def stamp(
        self,
        canvas: PixelCanvas,
        center_x: int,
        center_y: int,
        radius: int,
        shape: BrushShape,
        color: Color,
    ) -> QRectF:
        """Paint one footprint centered on a canvas pixel.

        Returns the changed area in viewport coordinates; the rect is empty
        when the footprint misses the canvas entirely.
        """
        radius = max(0, int(radius))
        center_x = int(center_x)
        center_y = int(center_y)
        if shape == BrushShape.CIRCLE:
            box = canvas.clip_rect(
                center_x - radius,
                center_y - radius,
                center_x + radius + 1,
                center_y + radius + 1,
            )
            written = None
            if box is not None:
                mask = disc_mask_in_box(center_x, center_y, radius, box)
                written = canvas.fill_mask(box[0], box[1], mask, color)
        else:
            written = canvas.fill_rect(
                center_x - radius,
                center_y - radius,
                center_x + radius + 1,
                center_y + radius + 1,
                color,
            )
        logger.debug(
            "Stamped %s r=%d at (%d, %d) -> %s", shape.value, radius, center_x, center_y, written
        )
        return self.to_viewport_rect(canvas, written)

    def stamp_at_pointer(
        self,
        canvas: PixelCanvas,
        pointer_x: float,
        pointer_y: float,
        radius: int,
        shape: BrushShape,
        color: Color,
    ) -> QRectF:
        center_x, center_y = self.to_canvas(canvas, pointer_x, pointer_y)
        return self.stamp(canvas, center_x, center_y, radius, shape, color)
