from functools import partial

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from paintbox.core.color import BACKGROUND_PRESETS, PALETTE
from paintbox.core.tools import BrushShape, Tool


class ToolPanel(QWidget):
    """Column of tool, brush, color and file controls."""

    def __init__(self, app, parent=None):
        super().__init__(parent)
        self.app = app
        self.paint_state = app.paint_state
        self.setFixedWidth(200)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignTop)

        layout.addWidget(self._heading("Tools", 18))
        layout.addSpacing(10)
        self.brush_button = self._button("Brush", partial(self.paint_state.select_tool, Tool.BRUSH))
        self.eraser_button = self._button("Eraser", partial(self.paint_state.select_tool, Tool.ERASER))
        layout.addWidget(self.brush_button)
        layout.addWidget(self.eraser_button)

        layout.addSpacing(10)
        layout.addWidget(self._heading("Brush Shape"))
        self.square_button = self._button(
            "Square", partial(self.paint_state.select_brush_shape, BrushShape.SQUARE)
        )
        self.circle_button = self._button(
            "Circle", partial(self.paint_state.select_brush_shape, BrushShape.CIRCLE)
        )
        layout.addWidget(self.square_button)
        layout.addWidget(self.circle_button)

        layout.addSpacing(10)
        layout.addWidget(self._heading("Brush Size"))
        self.brush_size_edit = QLineEdit(self.paint_state.brush_size_input)
        self.brush_size_edit.setPlaceholderText("Enter size (px)")
        self.brush_size_edit.textEdited.connect(self.paint_state.set_brush_size_input)
        self.brush_size_edit.returnPressed.connect(self.commit_brush_size)
        layout.addWidget(self.brush_size_edit)

        layout.addSpacing(10)
        layout.addWidget(self._heading("Brush Color"))
        color_row = QHBoxLayout()
        self.channel_edits = {}
        for channel in ("r", "g", "b"):
            edit = QLineEdit(self.paint_state.color_inputs[channel])
            edit.setPlaceholderText(f"{channel.upper()} (0-255)")
            edit.setFixedWidth(60)
            edit.textEdited.connect(partial(self.paint_state.set_color_channel_input, channel))
            edit.returnPressed.connect(self.paint_state.commit_color_input)
            self.channel_edits[channel] = edit
            color_row.addWidget(edit)
        layout.addLayout(color_row)

        layout.addSpacing(10)
        layout.addWidget(self._heading("Color Palette"))
        self.palette_buttons = {}
        for name, color in PALETTE.items():
            button = self._button(name, partial(self.paint_state.select_palette_color, color))
            self.palette_buttons[name] = button
            layout.addWidget(button)

        layout.addSpacing(10)
        layout.addWidget(self._heading("Background Color"))
        self.background_buttons = {}
        for name, color in BACKGROUND_PRESETS.items():
            button = self._button(name, partial(self.paint_state.set_background_color, color))
            self.background_buttons[name] = button
            layout.addWidget(button)

        layout.addSpacing(10)
        self.save_button = self._button("Save Image", self.app.save_image)
        self.clear_button = self._button("Clear Canvas", self.app.clear_canvas)
        self.exit_button = self._button("EXIT", self.app.exit)
        layout.addWidget(self.save_button)
        layout.addWidget(self.clear_button)
        layout.addWidget(self.exit_button)

        self.paint_state.brush_size_changed.connect(self.update_brush_size_edit)
        self.paint_state.color_inputs_changed.connect(self.update_channel_edits)

    def _heading(self, text, point_size=16):
        label = QLabel(text)
        font = QFont(label.font())
        font.setPointSize(point_size)
        label.setFont(font)
        return label

    def _button(self, text, callback):
        button = QPushButton(text)
        # clicked passes a "checked" flag; drop it.
        button.clicked.connect(lambda checked=False: callback())
        return button

    def commit_brush_size(self):
        self.paint_state.commit_brush_size_input(self.brush_size_edit.text())

    def update_brush_size_edit(self, size):
        self.brush_size_edit.setText(str(size))

    def update_channel_edits(self):
        for channel, edit in self.channel_edits.items():
            edit.setText(self.paint_state.color_inputs[channel])
