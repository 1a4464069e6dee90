import datetime

import numpy as np
import pytest

from polarplot.canvas import RecordingCanvas
from polarplot.data import ChartItem
from polarplot.tools.helpers import (
    clamp,
    draw_text_with_background,
    order_items_by_angle,
    subdivide_points,
    subdivide_points_radial,
)


@pytest.mark.parametrize("minimum, maximum", [
    (1, 5),
    (2 ** 40, 2 ** 62),
    (-1.5, 2.5),
])
def test_clamp(minimum, maximum):
    below = minimum - 1
    above = maximum + 1
    inside = (minimum + maximum) / 2
    if isinstance(minimum, int):
        inside = (minimum + maximum) // 2
    assert clamp(minimum, maximum, below) == minimum
    assert clamp(minimum, maximum, above) == maximum
    assert clamp(minimum, maximum, inside) == inside
    assert clamp(minimum, maximum, minimum) == minimum
    assert clamp(minimum, maximum, maximum) == maximum


def test_clamp_keeps_the_value_type():
    assert type(clamp(0, 10, 5)) is int
    assert type(clamp(0.0, 10.0, 5.0)) is float


def test_clamp_works_on_datetimes():
    start = datetime.date(2020, 1, 1)
    end = datetime.date(2020, 12, 31)
    assert clamp(start, end, datetime.date(2019, 6, 1)) == start
    assert clamp(start, end, datetime.date(2021, 6, 1)) == end
    assert clamp(start, end, datetime.date(2020, 6, 1)) == \
        datetime.date(2020, 6, 1)


def test_order_items_by_angle():
    source = [ChartItem(300, 1), ChartItem(0, 2), ChartItem(90, 3)]
    assert [item.angle for item in order_items_by_angle(source)] == \
        [0, 90, 300]
    assert [item.angle for item in order_items_by_angle(source, False)] == \
        [300, 90, 0]
    assert [item.angle for item in source] == [300, 0, 90]


def test_text_background_is_wider_than_the_text():
    canvas = RecordingCanvas()
    draw_text_with_background(canvas, "-100", 50.0, 60.0, font_size=8.0,
                              background="white", color="black")
    width, height = canvas.measure_text("-100", 8.0)
    assert width > 0 and height > 0

    rect, = canvas.ops("fill_rect")
    text, = canvas.ops("fill_text")
    x, y, rect_width, rect_height = rect.args
    assert rect.fill == "white"
    assert rect_width == pytest.approx(1.2 * width)
    assert rect_height == pytest.approx(height)
    assert x + rect_width / 2 == pytest.approx(50.0)
    assert y + rect_height / 2 == pytest.approx(60.0)
    assert text.args == ("-100", 50.0, 60.0)
    assert text.fill == "black"
    assert canvas.calls.index(rect) < canvas.calls.index(text)
    assert canvas.calls[0].op == "save"
    assert canvas.calls[-1].op == "restore"


SQUARE = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


def test_subdivided_curve_passes_through_control_points():
    result = subdivide_points(SQUARE, 8)
    assert result.shape == (25, 2)
    assert result[::8] == pytest.approx(np.array(SQUARE))


def test_subdivided_curve_stays_near_a_straight_line():
    line = [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]
    result = subdivide_points(line, 4)
    assert result[:, 0] == pytest.approx(result[:, 1])


def test_radial_subdivision_is_smooth_across_the_seam():
    loop = [(np.cos(t), np.sin(t))
            for t in np.linspace(0, 2 * np.pi, 9)]
    result = subdivide_points_radial(loop, 6)
    assert result[0] == pytest.approx(result[-1])
    assert np.hypot(result[:, 0], result[:, 1]) == pytest.approx(
        np.ones(len(result)), abs=0.02)


@pytest.mark.parametrize("subdivide", [subdivide_points,
                                       subdivide_points_radial])
def test_subdivision_needs_three_points(subdivide):
    with pytest.raises(ValueError):
        subdivide([(0, 0), (1, 1)], 4)
    with pytest.raises(ValueError):
        subdivide(SQUARE, 0)
