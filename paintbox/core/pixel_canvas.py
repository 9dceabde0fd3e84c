from __future__ import annotations

from contextlib import contextmanager
import logging
import os
from typing import Iterator, NamedTuple

import numpy as np
from PIL import Image
from PySide6.QtCore import QReadWriteLock
from PySide6.QtGui import QImage

from paintbox.core.color import WHITE, Color, coerce_color


logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = "output.png"


class CanvasSaveError(OSError):
    """Raised when the canvas could not be written to disk."""

    def __init__(self, path, reason):
        super().__init__(f"Could not save image to {path}: {reason}")
        self.path = path
        self.reason = reason


class RawBuffer(NamedTuple):
    """Snapshot of the canvas pixels handed to the presentation layer."""

    width: int
    height: int
    data: bytes


class PixelCanvas:
    """Fixed-size RGBA bitmap.

    Pixels live in a dense, row-major ``uint8`` array of shape
    ``(height, width, 4)``. Every access goes through a
    :class:`QReadWriteLock` so a render pass on another thread never sees a
    half written stamp.
    """

    def __init__(self, width: int, height: int, fill: Color = WHITE) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(
                f"Canvas dimensions must be positive, got {width}x{height}."
            )
        self._width = int(width)
        self._height = int(height)
        self._lock = QReadWriteLock()
        self._pixels = np.empty((self._height, self._width, 4), dtype=np.uint8)
        self._pixels[:, :] = coerce_color(fill)

    @classmethod
    def from_file(cls, path) -> "PixelCanvas":
        with Image.open(path) as image:
            rgba = image.convert("RGBA")
            canvas = cls(rgba.width, rgba.height)
            canvas._pixels[:, :, :] = np.asarray(rgba, dtype=np.uint8)
        return canvas

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        return 0, 0, self._width, self._height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def clip_rect(self, x0: int, y0: int, x1: int, y1: int):
        """Intersect the half-open rectangle with the canvas bounds.

        Returns ``None`` when the intersection is empty.
        """
        x0 = max(0, int(x0))
        y0 = max(0, int(y0))
        x1 = min(self._width, int(x1))
        y1 = min(self._height, int(y1))
        if x0 >= x1 or y0 >= y1:
            return None
        return x0, y0, x1, y1

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------
    @contextmanager
    def read_locked(self) -> Iterator[np.ndarray]:
        self._lock.lockForRead()
        try:
            yield self._pixels
        finally:
            self._lock.unlock()

    @contextmanager
    def write_locked(self) -> Iterator[np.ndarray]:
        self._lock.lockForWrite()
        try:
            yield self._pixels
        finally:
            self._lock.unlock()

    # ------------------------------------------------------------------
    # Pixel access
    # ------------------------------------------------------------------
    def get_pixel(self, x: int, y: int) -> Color:
        # Out of range coordinates read the nearest edge pixel.
        x = max(0, min(self._width - 1, int(x)))
        y = max(0, min(self._height - 1, int(y)))
        with self.read_locked() as pixels:
            r, g, b, a = (int(c) for c in pixels[y, x])
        return Color(r, g, b, a)

    def set_pixel(self, x: int, y: int, color) -> None:
        if not self.contains(x, y):
            return
        color = coerce_color(color)
        with self.write_locked() as pixels:
            pixels[int(y), int(x)] = color

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, color):
        """Fill the half-open rectangle ``[x0, x1) x [y0, y1)``.

        Returns the clipped rectangle that was written, or ``None`` when it
        lies entirely outside the canvas.
        """
        clipped = self.clip_rect(x0, y0, x1, y1)
        if clipped is None:
            return None
        color = coerce_color(color)
        cx0, cy0, cx1, cy1 = clipped
        with self.write_locked() as pixels:
            pixels[cy0:cy1, cx0:cx1] = color
        return clipped

    def fill(self, color) -> None:
        color = coerce_color(color)
        logger.info("Filling %dx%d canvas with %s", self._width, self._height, color)
        self.fill_rect(0, 0, self._width, self._height, color)

    def fill_mask(self, x0: int, y0: int, mask: np.ndarray, color):
        """Write ``color`` wherever ``mask`` is true.

        The mask's top-left corner is placed at ``(x0, y0)``; the parts that
        fall outside the canvas are dropped. Returns the clipped rectangle
        covered by the mask, or ``None``.
        """
        mask_height, mask_width = mask.shape
        clipped = self.clip_rect(x0, y0, x0 + mask_width, y0 + mask_height)
        if clipped is None:
            return None
        color = coerce_color(color)
        cx0, cy0, cx1, cy1 = clipped
        sub_mask = mask[cy0 - y0:cy1 - y0, cx0 - x0:cx1 - x0]
        with self.write_locked() as pixels:
            pixels[cy0:cy1, cx0:cx1][sub_mask] = color
        return clipped

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------
    def to_array(self) -> np.ndarray:
        with self.read_locked() as pixels:
            snapshot = pixels.copy()
        snapshot.flags.writeable = False
        return snapshot

    def to_raw_buffer(self) -> RawBuffer:
        with self.read_locked() as pixels:
            data = pixels.tobytes()
        return RawBuffer(self._width, self._height, data)

    def to_qimage(self) -> QImage:
        buffer = self.to_raw_buffer()
        image = QImage(
            buffer.data,
            buffer.width,
            buffer.height,
            buffer.width * 4,
            QImage.Format_RGBA8888,
        )
        # Detach from the temporary bytes object.
        return image.copy()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save_to_file(self, path=DEFAULT_OUTPUT_PATH) -> str:
        """Encode the canvas as PNG at ``path``.

        Codec and filesystem failures are raised as :class:`CanvasSaveError`.
        """
        path = os.fspath(path)
        with self.read_locked() as pixels:
            image = Image.fromarray(pixels.copy())
        try:
            image.save(path, format="PNG")
        except (OSError, ValueError) as e:
            logger.error("Failed to save canvas to %s: %s", path, e)
            raise CanvasSaveError(path, e) from e
        logger.info("Saved %dx%d canvas to %s", self._width, self._height, path)
        return path
