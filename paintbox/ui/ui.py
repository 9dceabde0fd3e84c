from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import QHBoxLayout, QMainWindow, QMessageBox, QWidget

from paintbox.ui.canvas_view import CanvasView
from paintbox.ui.tool_panel import ToolPanel


class MainWindow(QMainWindow):
    def __init__(self, app):
        super().__init__()
        self.app = app
        self.setWindowTitle("Paintbox")
        self.resize(1200, 800)

        central = QWidget(self)
        layout = QHBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)

        self.tool_panel = ToolPanel(app, central)
        self.canvas_view = CanvasView(
            app.paint_state,
            viewport_size=app.viewport_size,
            repaint_interval_ms=app.repaint_interval_ms,
            parent=central,
        )
        layout.addWidget(self.tool_panel)
        layout.addStretch(1)
        layout.addWidget(self.canvas_view, 0, Qt.AlignCenter)
        layout.addStretch(1)
        self.setCentralWidget(central)

        self.app.image_saved.connect(self.on_image_saved)
        self.app.save_failed.connect(self.on_save_failed)
        self.app.exit_triggered.connect(self.close)

    @Slot(str)
    def on_image_saved(self, path):
        self.statusBar().showMessage(f"Saved {path}", 3000)

    @Slot(str)
    def on_save_failed(self, message):
        message_box = QMessageBox(self)
        message_box.setIcon(QMessageBox.Critical)
        message_box.setText("Failed to save image.")
        message_box.setInformativeText(message)
        message_box.setStandardButtons(QMessageBox.Ok)
        message_box.exec()

    def closeEvent(self, event):
        self.app.save_settings()
        super().closeEvent(event)
