from PySide6.QtCore import QRectF, Qt, QTimer, Slot
from PySide6.QtGui import QMouseEvent, QPainter
from PySide6.QtWidgets import QWidget


class CanvasView(QWidget):
    """Shows the pixel canvas at the viewport size and feeds it pointer input.

    Repaints are coalesced: dirty rects reported while the repaint timer is
    pending are merged and flushed together.
    """

    def __init__(self, paint_state, viewport_size=(800, 600), repaint_interval_ms=16, parent=None):
        super().__init__(parent)
        self.paint_state = paint_state
        self.setFixedSize(*viewport_size)
        self.setAttribute(Qt.WA_OpaquePaintEvent)

        self._pending_rect = QRectF()
        self._full_repaint_pending = False
        self._repaint_timer = QTimer(self)
        self._repaint_timer.setSingleShot(True)
        self._repaint_timer.setInterval(repaint_interval_ms)
        self._repaint_timer.timeout.connect(self.flush_repaint)

        self.paint_state.canvas_changed.connect(self.schedule_repaint)

    # ------------------------------------------------------------------
    # Repaint scheduling
    # ------------------------------------------------------------------
    @Slot(QRectF)
    def schedule_repaint(self, rect):
        if rect.isEmpty():
            self._full_repaint_pending = True
        else:
            self._pending_rect = self._pending_rect.united(rect)
        if not self._repaint_timer.isActive():
            self._repaint_timer.start()

    @Slot()
    def flush_repaint(self):
        if self._full_repaint_pending:
            self.update()
        elif not self._pending_rect.isEmpty():
            # Scaling can blur one pixel past the rect edges.
            self.update(self._pending_rect.toAlignedRect().adjusted(-1, -1, 1, 1))
        self._pending_rect = QRectF()
        self._full_repaint_pending = False

    @property
    def has_pending_repaint(self):
        return self._full_repaint_pending or not self._pending_rect.isEmpty()

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self.paint_state.background_color.to_qcolor())
        painter.drawImage(self.rect(), self.paint_state.canvas.to_qimage())
        painter.end()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return
        pos = event.position()
        self.paint_state.begin_stroke(pos.x(), pos.y())

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()
        self.paint_state.continue_stroke(pos.x(), pos.y())

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return
        self.paint_state.end_stroke()
