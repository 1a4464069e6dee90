import pytest

from polarplot.canvas import AggCanvas, Canvas, RecordingCanvas


def test_canvas_is_abstract():
    with pytest.raises(TypeError):
        Canvas(100, 100)


def test_incomplete_canvas_fails_on_creation():
    class LinesOnly(Canvas):
        def stroke_line(self, x1, y1, x2, y2):
            pass

    with pytest.raises(TypeError):
        LinesOnly(100, 100)


@pytest.mark.parametrize("canvas_class", [RecordingCanvas, AggCanvas])
def test_concrete_canvases_implement_every_primitive(canvas_class):
    canvas = canvas_class(40, 30)
    assert (canvas.width, canvas.height) == (40, 30)


def test_rotation_is_restored_with_the_state():
    canvas = RecordingCanvas()
    canvas.save()
    canvas.rotate(125, 125, 90)
    x, y = canvas.transform.transform((125, 0))
    assert (x, y) == pytest.approx((250.0, 125.0))
    canvas.restore()
    assert canvas.transform.to_values() == (1, 0, 0, 1, 0, 0)
