"""
Drawing of polar data series and their markers.
"""

import logging

import numpy as np

from .config import ChartStyle
from .data import Symbol
from .tools.interpolate import closing_segment, interpolate

_log = logging.getLogger(__name__)


def draw_symbol(canvas, x, y, fill, stroke, symbol, size):
    """
    Draw a marker of *size* pixels centered on ``(x, y)``.

    `Symbol.NONE` draws nothing; unknown symbols are drawn as circles.
    """
    if symbol is Symbol.NONE:
        return
    half = size * 0.5
    canvas.save()
    canvas.set_stroke(stroke)
    if symbol is Symbol.SQUARE:
        canvas.set_fill(fill)
        canvas.fill_rect(x - half, y - half, size, size)
        canvas.stroke_rect(x - half, y - half, size, size)
    elif symbol is Symbol.TRIANGLE:
        canvas.set_fill(fill)
        canvas.begin_path()
        canvas.move_to(x, y - half)
        canvas.line_to(x + half, y + half)
        canvas.line_to(x - half, y + half)
        canvas.line_to(x, y - half)
        canvas.close_path()
        canvas.fill()
        canvas.stroke()
    elif symbol is Symbol.STAR:
        canvas.set_fill(None)
        canvas.stroke_line(x - half, y, x + half, y)
        canvas.stroke_line(x, y - half, x, y + half)
        canvas.stroke_line(x - half, y - half, x + half, y + half)
        canvas.stroke_line(x + half, y - half, x - half, y + half)
    elif symbol is Symbol.CROSS:
        canvas.set_fill(None)
        canvas.stroke_line(x - half, y, x + half, y)
        canvas.stroke_line(x, y - half, x, y + half)
    else:
        canvas.set_fill(fill)
        canvas.fill_oval(x - half, y - half, size, size)
        canvas.stroke_oval(x - half, y - half, size, size)
    canvas.restore()


class SeriesRenderer:
    """
    Draws one polar series: the interpolated curve, then the markers of the
    original points.
    """

    def __init__(self, style=None):
        self.style = style if style is not None else ChartStyle()

    def project(self, items, transform, fold_turn=None):
        """
        Project *items* to an (N, 2) array of pixel coordinates.

        With *fold_turn*, angles past one full turn are moved back by a turn
        before projection instead of being clamped.
        """
        angles = np.array([item.angle for item in items], dtype="float64")
        radii = np.array([item.radius for item in items], dtype="float64")
        if fold_turn is not None:
            angles = np.where(angles > fold_turn, angles - fold_turn, angles)
        return transform.transform(np.column_stack([angles, radii]))

    def draw(self, canvas, series, geometry, bounds):
        if not series.items:
            _log.debug("Skipping empty series %r", series.name)
            return

        transform = geometry.transform(bounds, series.radians)
        points = self.project(series.items, transform)
        curve = self.project(
            interpolate(series.items, False, series.radians), transform)
        if series.wrap and len(series.items) > 1:
            # only the synthetic points of the closing segment are folded
            closing = closing_segment(series.items, series.radians)
            curve = np.concatenate([
                curve,
                self.project(closing[:1], transform),
                self.project(closing[1:], transform, series.turn),
            ])
        _log.debug("Series %r: %d points, %d after interpolation",
                   series.name, len(points), len(curve))

        canvas.save()
        canvas.set_fill(series.fill)
        canvas.set_stroke(series.stroke)
        canvas.set_line_width(series.stroke_width
                              if series.stroke_width is not None
                              else geometry.line_width)
        canvas.set_line_join("round")
        if series.wrap:
            vertices = curve.tolist()
            canvas.begin_path()
            canvas.move_to(*vertices[0])
            for x, y in vertices:
                canvas.line_to(x, y)
            canvas.close_path()
            canvas.fill()
            canvas.stroke()
        else:
            canvas.stroke_polyline(curve[:, 0].tolist(), curve[:, 1].tolist())
        canvas.restore()

        if series.symbols_visible:
            self.draw_symbols(canvas, series, points, geometry)

    def draw_symbols(self, canvas, series, points, geometry):
        """
        Draw the markers of the original series points.

        An item with its own symbol uses its own fill and stroke; the others
        use the series symbol and symbol colors.
        """
        size = (series.symbol_size if series.symbol_size is not None
                else geometry.symbol_size)
        for item, (x, y) in zip(series.items, points.tolist()):
            if item.symbol is None:
                symbol = series.symbol
                fill, stroke = series.symbol_fill, series.symbol_stroke
            else:
                symbol = item.symbol
                fill = item.fill if item.fill is not None \
                    else series.symbol_fill
                stroke = item.stroke if item.stroke is not None \
                    else series.symbol_stroke
            draw_symbol(canvas, x, y, fill, stroke, symbol, size)
