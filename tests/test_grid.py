import matplotlib.transforms as mtransforms
import numpy as np
import pytest

from polarplot.canvas import RecordingCanvas
from polarplot.config import Bounds, ChartStyle
from polarplot.projections.polar import ChartGeometry, PolarGrid, project

PI = "π"


@pytest.fixture
def geometry():
    return ChartGeometry.from_canvas_size(250, 250)


def draw(bounds, geometry, radians=False, style=None):
    canvas = RecordingCanvas(250, 250)
    PolarGrid(style).draw(canvas, geometry, bounds, radians)
    return canvas


def pixel(call, x, y):
    """ Position of user point (x, y) under the transform of *call*. """
    return mtransforms.Affine2D.from_values(*call.transform).transform((x, y))


@pytest.mark.parametrize("step, spokes", [(15, 24), (30, 12), (45, 8),
                                          (90, 4)])
def test_one_spoke_and_label_per_step(geometry, step, spokes):
    canvas = draw(Bounds(-100, 20, step), geometry)
    assert canvas.count("stroke_line") == spokes
    assert canvas.count("fill_text") == spokes + 2


def test_spokes_line_up_with_projected_angles(geometry):
    bounds = Bounds(-100, 20, 30)
    canvas = draw(bounds, geometry)
    for i, call in enumerate(canvas.ops("stroke_line")):
        x1, y1, x2, y2 = call.args
        assert pixel(call, x2, y2) == pytest.approx(np.array(geometry.center))
        outer = project(i * 30, bounds.upper_radius, geometry.center,
                        geometry.outer_radius, bounds.lower_radius,
                        bounds.radius_range)
        assert pixel(call, x1, y1) == pytest.approx(np.array(outer))
        assert call.stroke == "lightgray"


def test_default_rings(geometry):
    canvas = draw(Bounds(-100, 20, 30), geometry)
    ovals = canvas.ops("stroke_oval")
    assert len(ovals) == 11
    diameters = [call.args[2] for call in ovals]
    expected = [max(225.0 - 25.0 * i, 0.0) for i in range(11)]
    assert diameters == pytest.approx(expected)
    for call in ovals:
        x, y, width, height = call.args
        assert x + width / 2 == pytest.approx(125.0)
        assert y + height / 2 == pytest.approx(125.0)


def test_default_rings_label_both_bounds(geometry):
    canvas = draw(Bounds(-100, 20, 90), geometry)
    texts = [call.args[0] for call in canvas.ops("fill_text")]
    assert texts[:2] == ["-100", "20"]


def test_axis_labels_in_degrees(geometry):
    canvas = draw(Bounds(-100, 20, 30), geometry)
    texts = [call.args[0] for call in canvas.ops("fill_text")][2:]
    assert texts == [str(angle) for angle in range(0, 360, 30)]


def test_axis_labels_in_radians(geometry):
    canvas = draw(Bounds(-100, 20, 45), geometry, radians=True)
    texts = [call.args[0] for call in canvas.ops("fill_text")][2:]
    assert texts == ["0", PI + "/4", PI + "/2", "3" + PI + "/4", PI,
                     "5" + PI + "/4", "3" + PI + "/2", "7" + PI + "/4"]


def test_axis_labels_sit_at_the_outer_edge_of_their_spoke(geometry):
    canvas = draw(Bounds(-100, 20, 90), geometry)
    labels = canvas.ops("fill_text")[2:]
    edge = 0.48 * geometry.size
    expected = [(125.0, 125.0 - edge), (125.0 + edge, 125.0),
                (125.0, 125.0 + edge), (125.0 - edge, 125.0)]
    for call, position in zip(labels, expected):
        _, x, y = call.args
        assert pixel(call, x, y) == pytest.approx(np.array(position))


def test_every_label_has_an_opaque_background(geometry):
    canvas = draw(Bounds(-100, 20, 30, threshold_visible=True,
                         threshold_radius=0), geometry)
    for index, call in enumerate(canvas.calls):
        if call.op != "fill_text":
            continue
        rect = canvas.calls[index - 2]
        assert rect.op == "fill_rect"
        assert rect.fill == "white"
        width, height = canvas.measure_text(call.args[0], geometry.font_size)
        assert rect.args[2] == pytest.approx(1.2 * width)
        assert rect.args[3] == pytest.approx(height)


def test_custom_rings(geometry):
    bounds = Bounds(-100, 20, 30, ring_values=[-75, -50, -25, 0])
    canvas = draw(bounds, geometry)
    ovals = canvas.ops("stroke_oval")
    assert len(ovals) == 4
    for call, value in zip(ovals, bounds.ring_values):
        radius = (value + 100) / 120 * 112.5
        assert call.args == pytest.approx(
            (125 - radius, 125 - radius, 2 * radius, 2 * radius))
    texts = [call.args[0] for call in canvas.ops("fill_text")]
    assert texts[:5] == ["-75", "-50", "-25", "0", "-100"]
    assert "20" not in texts


def test_threshold_ring_is_drawn_last_in_its_color(geometry):
    bounds = Bounds(-100, 20, 30, threshold_radius=0,
                    threshold_visible=True, threshold_color="red",
                    ring_values=[-75, -50, -25, 0, 20])
    canvas = draw(bounds, geometry)
    ovals = canvas.ops("stroke_oval")
    assert len(ovals) == 6
    assert [call.stroke for call in ovals] == ["lightgray"] * 5 + ["red"]
    radius = 100 / 120 * 112.5
    assert ovals[-1].args[2] == pytest.approx(2 * radius)


def test_hidden_threshold_ring_is_not_drawn(geometry):
    bounds = Bounds(-100, 20, 30, threshold_radius=0,
                    threshold_color="red")
    canvas = draw(bounds, geometry)
    assert all(call.stroke != "red" for call in canvas.ops("stroke_oval"))


def test_style_overrides_grid_colors(geometry):
    style = ChartStyle(grid_color="gray", label_background="yellow")
    canvas = draw(Bounds(-100, 20, 90), geometry, style=style)
    assert {call.stroke for call in canvas.ops("stroke_line")} == {"gray"}
    assert {call.fill for call in canvas.ops("fill_rect")} == {"yellow"}


def test_grid_leaves_the_canvas_state_balanced(geometry):
    canvas = draw(Bounds(-100, 20, 30, threshold_visible=True), geometry)
    assert canvas.count("save") == canvas.count("restore")
    assert canvas.transform.to_values() == (1, 0, 0, 1, 0, 0)


def test_half_value_bound_labels_round_away_from_zero(geometry):
    canvas = draw(Bounds(-2.5, 12.5, 90), geometry)
    texts = [call.args[0] for call in canvas.ops("fill_text")]
    assert texts[:2] == ["-3", "13"]


def test_rings_below_the_lower_bound_collapse_onto_the_center(geometry):
    bounds = Bounds(-100, 20, 30, ring_values=[-150, -50],
                    threshold_radius=-120, threshold_visible=True)
    canvas = draw(bounds, geometry)
    below, inside, threshold = canvas.ops("stroke_oval")
    assert below.args == pytest.approx((125.0, 125.0, 0.0, 0.0))
    assert threshold.args == pytest.approx((125.0, 125.0, 0.0, 0.0))
    assert inside.args[2] > 0
    labels = {call.args[0]: call for call in canvas.ops("fill_text")}
    _, x, y = labels["-150"].args
    assert (x, y) == pytest.approx((125.0, 125.0))
