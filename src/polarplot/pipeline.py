"""
Repaint orchestration of a polar chart.
"""

import logging

import numpy as np

from .config import Bounds, ChartStyle
from .projections.polar import ChartGeometry, PolarGrid
from .series import SeriesRenderer

_log = logging.getLogger(__name__)


class PolarChartPipeline:
    """
    Draws polar series and their grid onto a canvas.

    Every call to `render` recomputes the full chart from the series and
    the bounds, so repeated repaints with the same inputs issue the same
    draw calls. The pipeline keeps no reference to the canvas.

    Parameters
    ----------
    bounds : `Bounds`, optional
        Default radial limits and grid layout.
    style : `ChartStyle`, optional
        Visual constants.
    """

    def __init__(self, bounds=None, style=None):
        self.bounds = bounds if bounds is not None else Bounds()
        self.style = style if style is not None else ChartStyle()
        self.grid = PolarGrid(self.style)
        self.series_renderer = SeriesRenderer(self.style)

    def geometry(self, width, height):
        return ChartGeometry.from_canvas_size(width, height, self.style)

    @staticmethod
    def uses_radians(series_list):
        """ Whether grid labels should be in radians. """
        return any(series.radians for series in series_list)

    @staticmethod
    def data_range(series_list):
        """
        Return ``(min_angle, max_angle, min_radius, max_radius)`` over all
        non-empty series.
        """
        items = [item for series in series_list for item in series.items]
        if not items:
            raise ValueError("No data in the series")
        angles = np.array([item.angle for item in items], dtype="float64")
        radii = np.array([item.radius for item in items], dtype="float64")
        return angles.min(), angles.max(), radii.min(), radii.max()

    def render(self, series_list, canvas, bounds=None):
        """
        Draw the chart on *canvas*.

        Parameters
        ----------
        series_list : list of `Series`
            Nothing is drawn when it is None or empty. Empty series are
            skipped.
        canvas : `Canvas`
            Render target; its ``width`` and ``height`` give the chart size.
        bounds : `Bounds`, optional
            Overrides the pipeline bounds for this repaint.
        """
        if not series_list:
            _log.debug("No series to render")
            return
        if bounds is None:
            bounds = self.bounds

        width, height = canvas.width, canvas.height
        geometry = self.geometry(width, height)
        _log.debug("Rendering %d series on a %gx%g canvas",
                   len(series_list), width, height)

        canvas.clear_rect(0, 0, width, height)
        canvas.save()
        canvas.set_fill(self.style.background)
        canvas.fill_rect(0, 0, width, height)
        canvas.restore()

        self.grid.draw(canvas, geometry, bounds,
                       self.uses_radians(series_list))
        for series in series_list:
            self.series_renderer.draw(canvas, series, geometry, bounds)

    def pixel_to_data(self, x, y, width, height, radians=False, bounds=None):
        """
        Convert a canvas pixel to ``(angle, radius)`` data coordinates.

        The angle is in ``[0, full turn)`` of the requested unit.
        """
        if bounds is None:
            bounds = self.bounds
        transform = self.geometry(width, height).transform(bounds, radians)
        angle, radius = transform.inverted().transform((x, y))
        return float(angle), float(radius)
