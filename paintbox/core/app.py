import logging

from PySide6.QtCore import QObject, Signal, Slot

from paintbox.core.brush_engine import BrushEngine
from paintbox.core.pixel_canvas import CanvasSaveError, PixelCanvas
from paintbox.core.paint_state import PaintState
from paintbox.core.settings_controller import SettingsController


logger = logging.getLogger(__name__)


class App(QObject):
    """Owns the canvas, brush engine and paint state for one window."""

    image_saved = Signal(str)
    save_failed = Signal(str)
    exit_triggered = Signal()

    def __init__(self, settings_controller=None):
        super().__init__()
        self.settings_controller = settings_controller or SettingsController()
        settings = self.settings_controller

        self.canvas = PixelCanvas(settings.canvas_width, settings.canvas_height)
        self.brush_engine = BrushEngine(settings.viewport_width, settings.viewport_height)
        self.paint_state = PaintState(
            self.canvas,
            self.brush_engine,
            brush_size=settings.brush_size,
            brush_shape=settings.brush_shape,
            tool=settings.tool,
            output_path=settings.output_path,
        )
        logger.info(
            "Created %dx%d canvas shown at %dx%d",
            self.canvas.width,
            self.canvas.height,
            self.brush_engine.viewport_width,
            self.brush_engine.viewport_height,
        )

    @property
    def viewport_size(self):
        return self.brush_engine.viewport_width, self.brush_engine.viewport_height

    @property
    def repaint_interval_ms(self):
        return self.settings_controller.repaint_interval_ms

    @Slot()
    def save_image(self, path=None) -> bool:
        try:
            saved_path = self.paint_state.save(path)
        except CanvasSaveError as e:
            self.save_failed.emit(str(e))
            return False
        self.image_saved.emit(saved_path)
        return True

    @Slot()
    def clear_canvas(self):
        self.paint_state.clear_canvas()

    @Slot()
    def save_settings(self) -> bool:
        self.settings_controller.update_from_paint_state(self.paint_state)
        return self.settings_controller.save_settings()

    @Slot()
    def exit(self):
        logger.info("Exit requested")
        self.exit_triggered.emit()
