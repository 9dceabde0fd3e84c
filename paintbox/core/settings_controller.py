import configparser
import logging
import os

from paintbox.core.tools import BrushShape, Tool


logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = "settings.ini"


class SettingsController:
    """Reads and persists ``settings.ini``."""

    DEFAULT_CANVAS_SETTINGS = {
        "width": 800,
        "height": 600,
    }

    DEFAULT_VIEWPORT_SETTINGS = {
        "width": 800,
        "height": 600,
    }

    DEFAULT_BRUSH_SETTINGS = {
        "size": 5,
        "shape": BrushShape.SQUARE,
        "tool": Tool.BRUSH,
    }

    DEFAULT_GENERAL_SETTINGS = {
        "output_path": "output.png",
        "repaint_interval_ms": 16,
    }

    def __init__(self, path=DEFAULT_SETTINGS_PATH):
        self.path = path
        self.config = configparser.ConfigParser()
        self.config.read(self.path)

        for section in ("General", "Canvas", "Viewport", "Brush"):
            if not self.config.has_section(section):
                self.config.add_section(section)

        self.canvas_width = self._get_positive_int(
            "Canvas", "width", self.DEFAULT_CANVAS_SETTINGS["width"]
        )
        self.canvas_height = self._get_positive_int(
            "Canvas", "height", self.DEFAULT_CANVAS_SETTINGS["height"]
        )
        self.viewport_width = self._get_positive_int(
            "Viewport", "width", self.DEFAULT_VIEWPORT_SETTINGS["width"]
        )
        self.viewport_height = self._get_positive_int(
            "Viewport", "height", self.DEFAULT_VIEWPORT_SETTINGS["height"]
        )
        self.brush_size = self._get_positive_int(
            "Brush", "size", self.DEFAULT_BRUSH_SETTINGS["size"]
        )
        self.brush_shape = self._get_enum(
            "Brush", "shape", BrushShape, self.DEFAULT_BRUSH_SETTINGS["shape"]
        )
        self.tool = self._get_enum(
            "Brush", "tool", Tool, self.DEFAULT_BRUSH_SETTINGS["tool"]
        )
        self.output_path = self.config.get(
            "General",
            "output_path",
            fallback=self.DEFAULT_GENERAL_SETTINGS["output_path"],
        ).strip() or self.DEFAULT_GENERAL_SETTINGS["output_path"]
        self.repaint_interval_ms = self._get_positive_int(
            "General",
            "repaint_interval_ms",
            self.DEFAULT_GENERAL_SETTINGS["repaint_interval_ms"],
        )
        self._sync_to_config()

    def _get_positive_int(self, section, option, default):
        try:
            value = self.config.getint(section, option, fallback=default)
        except ValueError:
            logger.warning(
                "Invalid value for [%s] %s in %s; using %s", section, option, self.path, default
            )
            return default
        if value <= 0:
            logger.warning(
                "Non-positive value for [%s] %s in %s; using %s", section, option, self.path, default
            )
            return default
        return value

    def _get_enum(self, section, option, enum_cls, default):
        raw = self.config.get(section, option, fallback=default.value)
        try:
            return enum_cls(raw.strip().lower())
        except ValueError:
            logger.warning(
                "Unknown %s %r in %s; using %s", enum_cls.__name__, raw, self.path, default.value
            )
            return default

    def _sync_to_config(self):
        self.config.set("Canvas", "width", str(self.canvas_width))
        self.config.set("Canvas", "height", str(self.canvas_height))
        self.config.set("Viewport", "width", str(self.viewport_width))
        self.config.set("Viewport", "height", str(self.viewport_height))
        self.config.set("Brush", "size", str(self.brush_size))
        self.config.set("Brush", "shape", self.brush_shape.value)
        self.config.set("Brush", "tool", self.tool.value)
        self.config.set("General", "output_path", self.output_path)
        self.config.set("General", "repaint_interval_ms", str(self.repaint_interval_ms))

    def update_from_paint_state(self, paint_state):
        """Remember the brush settings that should survive a restart."""
        self.brush_size = paint_state.brush_size
        self.brush_shape = paint_state.brush_shape
        self.tool = paint_state.tool

    def save_settings(self) -> bool:
        """Persist settings to disk. Returns ``False`` if the file could not be written."""
        self._sync_to_config()
        try:
            directory = os.path.dirname(os.fspath(self.path))
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w") as configfile:
                self.config.write(configfile)
        except OSError as e:
            logger.error("Could not write %s: %s", self.path, e)
            return False
        return True
