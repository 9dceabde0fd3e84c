from unittest.mock import Mock

import pytest
from PySide6.QtCore import QRectF

from paintbox.core.brush_engine import BrushEngine
from paintbox.core.color import BLACK, GRAY, TRANSPARENT, WHITE, Color, PALETTE
from paintbox.core.pixel_canvas import CanvasSaveError, PixelCanvas
from paintbox.core.paint_state import PaintState
from paintbox.core.tools import BrushShape, Tool

RED = Color.rgb(255, 0, 0)


@pytest.fixture
def canvas():
    return PixelCanvas(800, 600)


@pytest.fixture
def state(canvas):
    return PaintState(canvas, BrushEngine(800, 600))


def test_defaults(state):
    assert state.tool == Tool.BRUSH
    assert state.brush_shape == BrushShape.SQUARE
    assert state.brush_size == 5
    assert state.brush_color == BLACK
    assert state.background_color == WHITE
    assert state.is_drawing is False
    assert state.brush_size_input == "5"
    assert state.color_inputs == {"r": "0", "g": "0", "b": "0"}


def test_begin_stroke_paints_immediately(state, canvas):
    dirty = state.begin_stroke(100, 100)
    assert state.is_drawing is True
    assert canvas.get_pixel(100, 100) == BLACK
    assert dirty == QRectF(95, 95, 11, 11)


def test_continue_stroke_only_while_drawing(state, canvas):
    assert state.continue_stroke(200, 200) is None
    assert canvas.get_pixel(200, 200) == WHITE

    state.begin_stroke(100, 100)
    state.continue_stroke(200, 200)
    assert canvas.get_pixel(200, 200) == BLACK

    state.end_stroke()
    assert state.is_drawing is False
    assert state.continue_stroke(300, 300) is None
    assert canvas.get_pixel(300, 300) == WHITE


def test_stroke_emits_canvas_changed(state):
    spy = Mock()
    state.canvas_changed.connect(spy)
    state.begin_stroke(10, 10)
    spy.assert_called_once()
    assert spy.call_args[0][0] == QRectF(5, 5, 11, 11)


def test_end_to_end_square_stamp(state, canvas, tmp_path):
    state.begin_stroke(100, 100)
    state.end_stroke()
    pixels = canvas.to_array()
    assert (pixels[95:106, 95:106] == BLACK).all()
    assert canvas.get_pixel(80, 80) == WHITE
    assert canvas.get_pixel(94, 100) == WHITE
    assert canvas.get_pixel(106, 100) == WHITE

    path = state.save(tmp_path / "output.png")
    assert PixelCanvas.from_file(path).to_raw_buffer() == canvas.to_raw_buffer()


def test_circle_stroke(state, canvas):
    state.select_brush_shape(BrushShape.CIRCLE)
    state.begin_stroke(100, 100)
    assert canvas.get_pixel(105, 100) == BLACK
    assert canvas.get_pixel(105, 105) == WHITE


@pytest.mark.parametrize(
    "text", ["0", "abc", "", "-3", "4.5", "1_0", " 12 ", "\u0661\u0662", "99999999999"]
)
def test_invalid_brush_size_is_ignored(state, text):
    state.commit_brush_size_input("7")
    assert state.commit_brush_size_input(text) is False
    assert state.brush_size == 7


def test_brush_size_commit(state):
    spy = Mock()
    state.brush_size_changed.connect(spy)
    assert state.commit_brush_size_input("12") is True
    assert state.brush_size == 12
    spy.assert_called_once_with(12)


def test_brush_size_commit_uses_pending_text(state):
    state.set_brush_size_input("9")
    state.commit_brush_size_input()
    assert state.brush_size == 9


def test_set_brush_size_rejects_non_positive(state):
    with pytest.raises(ValueError):
        state.set_brush_size(0)


def test_commit_color_input(state):
    spy = Mock()
    state.brush_color_changed.connect(spy)
    state.set_color_channel_input("r", "200")
    state.set_color_channel_input("g", "999")
    state.set_color_channel_input("b", "x")
    assert state.commit_color_input() == Color(200, 0, 0, 255)
    assert state.brush_color == Color(200, 0, 0, 255)
    spy.assert_called_once_with(Color(200, 0, 0, 255))


def test_unknown_color_channel(state):
    with pytest.raises(ValueError):
        state.set_color_channel_input("a", "10")


def test_select_palette_color_updates_inputs(state):
    spy = Mock()
    state.color_inputs_changed.connect(spy)
    state.select_palette_color(PALETTE["Brown"])
    assert state.brush_color == Color(139, 69, 19, 255)
    assert state.color_inputs == {"r": "139", "g": "69", "b": "19"}
    spy.assert_called_once()


def test_select_tool_and_shape(state):
    tool_spy = Mock()
    shape_spy = Mock()
    state.tool_changed.connect(tool_spy)
    state.brush_shape_changed.connect(shape_spy)
    state.select_tool(Tool.ERASER)
    state.select_brush_shape(BrushShape.CIRCLE)
    assert state.tool == Tool.ERASER
    assert state.brush_shape == BrushShape.CIRCLE
    tool_spy.assert_called_once_with(Tool.ERASER)
    shape_spy.assert_called_once_with(BrushShape.CIRCLE)


def test_set_background_color_fills_canvas(state, canvas):
    state.begin_stroke(100, 100)
    state.end_stroke()
    spy = Mock()
    state.canvas_changed.connect(spy)

    state.set_background_color(GRAY)
    assert state.background_color == GRAY
    assert canvas.to_raw_buffer().data == bytes(GRAY) * (800 * 600)
    assert spy.call_args[0][0].isEmpty()

    state.set_background_color(TRANSPARENT)
    assert canvas.to_raw_buffer().data == bytes(TRANSPARENT) * (800 * 600)


def test_clear_canvas_ignores_background(state, canvas):
    state.set_background_color(GRAY)
    state.clear_canvas()
    assert state.background_color == GRAY
    assert (canvas.to_array() == WHITE).all()


def test_eraser_restores_background(state, canvas):
    state.set_background_color(GRAY)
    state.clear_canvas()
    state.select_palette_color(RED)
    state.begin_stroke(50, 50)
    state.end_stroke()
    assert canvas.get_pixel(50, 50) == RED

    state.select_tool(Tool.ERASER)
    state.begin_stroke(50, 50)
    state.end_stroke()
    # Erasing reveals the background, not the white the pixel had before.
    assert canvas.get_pixel(50, 50) == GRAY


def test_save_propagates_error(state, tmp_path):
    with pytest.raises(CanvasSaveError):
        state.save(tmp_path / "nope" / "output.png")


def test_save_uses_default_output_path(canvas, tmp_path):
    state = PaintState(canvas, output_path=str(tmp_path / "default.png"))
    assert state.save() == str(tmp_path / "default.png")
    assert (tmp_path / "default.png").exists()


def test_huge_circle_brush_paints_whole_canvas(state, canvas):
    assert state.commit_brush_size_input("100000") is True
    state.select_brush_shape(BrushShape.CIRCLE)
    dirty = state.begin_stroke(400, 300)
    assert dirty == QRectF(0, 0, 800, 600)
    assert (canvas.to_array() == BLACK).all()
