from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QRectF, Signal, Slot

from paintbox.core.brush_engine import BrushEngine
from paintbox.core.color import BLACK, WHITE, Color, coerce_color, parse_channel, parse_unsigned
from paintbox.core.pixel_canvas import DEFAULT_OUTPUT_PATH, PixelCanvas
from paintbox.core.tools import BrushShape, Tool


logger = logging.getLogger(__name__)

DEFAULT_BRUSH_SIZE = 5
# Largest size that fits the Qt int carried by brush_size_changed.
MAX_BRUSH_SIZE = 2**31 - 1
COLOR_CHANNELS = ("r", "g", "b")


class PaintState(QObject):
    """Current tool, brush and colors, plus the stroke in progress.

    Pointer positions passed to the stroke methods are in viewport
    coordinates. ``canvas_changed`` carries the viewport rect that needs a
    repaint; an empty rect means the whole canvas changed.
    """

    tool_changed = Signal(object)
    brush_shape_changed = Signal(object)
    brush_size_changed = Signal(int)
    brush_color_changed = Signal(object)
    background_color_changed = Signal(object)
    color_inputs_changed = Signal()
    canvas_changed = Signal(QRectF)

    def __init__(
        self,
        canvas: PixelCanvas,
        brush_engine: BrushEngine | None = None,
        *,
        brush_size: int = DEFAULT_BRUSH_SIZE,
        brush_shape: BrushShape = BrushShape.SQUARE,
        tool: Tool = Tool.BRUSH,
        output_path: str = DEFAULT_OUTPUT_PATH,
    ):
        super().__init__()
        if brush_size <= 0:
            raise ValueError("Brush size must be positive.")
        self.canvas = canvas
        self.brush_engine = brush_engine or BrushEngine()
        self.output_path = output_path
        self.tool = tool
        self.brush_shape = brush_shape
        self.brush_size = brush_size
        self.brush_color = BLACK
        self.background_color = WHITE
        self.is_drawing = False
        self.brush_size_input = str(brush_size)
        self.color_inputs = {channel: "0" for channel in COLOR_CHANNELS}

    # ------------------------------------------------------------------
    # Strokes
    # ------------------------------------------------------------------
    def current_color(self) -> Color:
        return self.brush_engine.color_for(self.tool, self.brush_color, self.background_color)

    def _stamp(self, x: float, y: float) -> QRectF:
        dirty = self.brush_engine.stamp_at_pointer(
            self.canvas,
            x,
            y,
            self.brush_size,
            self.brush_shape,
            self.current_color(),
        )
        if not dirty.isEmpty():
            self.canvas_changed.emit(dirty)
        return dirty

    def begin_stroke(self, x: float, y: float) -> QRectF:
        self.is_drawing = True
        return self._stamp(x, y)

    def continue_stroke(self, x: float, y: float) -> QRectF | None:
        if not self.is_drawing:
            return None
        return self._stamp(x, y)

    def end_stroke(self) -> None:
        self.is_drawing = False

    # ------------------------------------------------------------------
    # Text inputs
    # ------------------------------------------------------------------
    @Slot(str)
    def set_brush_size_input(self, text):
        self.brush_size_input = text

    def commit_brush_size_input(self, text=None) -> bool:
        """Apply the pending brush size text.

        Invalid or non-positive input is dropped and the current size kept.
        """
        if text is not None:
            self.brush_size_input = text
        size = parse_unsigned(self.brush_size_input)
        if size is None or size > MAX_BRUSH_SIZE:
            logger.debug("Ignoring brush size input %r", self.brush_size_input)
            return False
        if size <= 0:
            logger.debug("Ignoring non-positive brush size %d", size)
            return False
        self.set_brush_size(size)
        return True

    def set_color_channel_input(self, channel: str, text) -> None:
        if channel not in COLOR_CHANNELS:
            raise ValueError(f"Unknown color channel {channel!r}")
        self.color_inputs[channel] = text

    def commit_color_input(self) -> Color:
        r, g, b = (parse_channel(self.color_inputs[channel]) for channel in COLOR_CHANNELS)
        self._set_brush_color(Color.rgb(r, g, b))
        return self.brush_color

    # ------------------------------------------------------------------
    # Direct selections
    # ------------------------------------------------------------------
    @Slot(object)
    def select_tool(self, tool: Tool):
        self.tool = Tool(tool)
        self.tool_changed.emit(self.tool)

    @Slot(object)
    def select_brush_shape(self, shape: BrushShape):
        self.brush_shape = BrushShape(shape)
        self.brush_shape_changed.emit(self.brush_shape)

    @Slot(int)
    def set_brush_size(self, size: int):
        if size <= 0:
            raise ValueError("Brush size must be positive.")
        self.brush_size = size
        self.brush_size_input = str(size)
        self.brush_size_changed.emit(self.brush_size)

    @Slot(object)
    def select_palette_color(self, color):
        color = coerce_color(color)
        self.color_inputs = {
            "r": str(color.r),
            "g": str(color.g),
            "b": str(color.b),
        }
        self.color_inputs_changed.emit()
        self._set_brush_color(color)

    def _set_brush_color(self, color: Color):
        self.brush_color = color
        self.brush_color_changed.emit(self.brush_color)

    @Slot(object)
    def set_background_color(self, color):
        # Changing the background repaints the whole canvas right away.
        self.background_color = coerce_color(color)
        self.canvas.fill(self.background_color)
        self.background_color_changed.emit(self.background_color)
        self.canvas_changed.emit(QRectF())

    @Slot()
    def clear_canvas(self):
        self.canvas.fill(WHITE)
        self.canvas_changed.emit(QRectF())

    def save(self, path=None) -> str:
        return self.canvas.save_to_file(path or self.output_path)
