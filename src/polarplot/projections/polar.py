"""
Polar projection of chart data onto a pixel canvas.

This module holds the geometric core of a polar chart:

- `PolarPlotTransform` maps ``(angle, radius)`` data onto canvas pixels and
  `InvertedPolarPlotTransform` maps pixels back to data.
- `AngleFormatter` and `RadialFormatter` produce the tick label texts.
- `PolarGrid` draws the spokes, rings and labels behind the data.

Angles grow clockwise from the top of the chart ("north" is angle zero) and
the radial axis is linear between the lower and the upper radius bounds.
"""

from collections import namedtuple
import decimal
import logging

import numpy as np

import matplotlib.ticker as mticker
import matplotlib.transforms as mtransforms

from ..config import ChartStyle
from ..tools.helpers import clamp, draw_text_with_background

_log = logging.getLogger(__name__)

# Rotation of angle zero; puts zero at the top of the chart.
BASELINE = np.pi

RenderPoint = namedtuple("RenderPoint", ["x", "y"])


def _full_turn(radians):
    return 2 * np.pi if radians else 360.0


class PolarPlotTransform(mtransforms.Transform):
    r"""
    The polar chart transform.

    Maps data :math:`\theta, r` onto the canvas pixel coordinates

    .. math::

        x = x_c - \sin(\pi + \phi) \rho, \quad y = y_c + \cos(\pi + \phi) \rho

    where :math:`\phi` is the angle in radians, clamped to one full turn, and
    :math:`\rho` the radius scaled so that the lower radius bound lands on the
    center and the upper bound on the outer ring.
    """

    input_dims = output_dims = 2
    has_inverse = True

    def __init__(self, center, outer_radius, lower_radius, radius_range,
                 offset=0.0, radians=False):
        """
        Parameters
        ----------
        center : (float, float)
            Chart center in pixels.
        outer_radius : float
            Pixel radius of the upper radius bound.
        lower_radius : float
            Data radius projected to the center.
        radius_range : float
            Data radius span between the lower and the upper bound.
        offset : float
            Pixel radius added to every projected radius.
        radians : bool
            Whether input angles are in radians rather than degrees.

        Raises
        ------
        ValueError
            If *radius_range* is zero.
        """
        super().__init__()
        if radius_range == 0:
            raise ValueError("radius_range must be non-zero")
        self._center = tuple(center)
        self._outer_radius = outer_radius
        self._lower_radius = lower_radius
        self._radius_range = radius_range
        self._offset = offset
        self._radians = radians

    __str__ = mtransforms._make_str_method(
        "_center", "_outer_radius", "_lower_radius", "_radius_range",
        offset="_offset", radians="_radians")

    def transform_non_affine(self, values):
        # docstring inherited
        theta, r = np.transpose(values)
        theta = np.clip(theta, 0.0, _full_turn(self._radians))
        phi = theta if self._radians else np.deg2rad(theta)
        r = self._offset + (
            (r - self._lower_radius) / self._radius_range) * self._outer_radius
        xc, yc = self._center
        x = xc - np.sin(BASELINE + phi) * r
        y = yc + np.cos(BASELINE + phi) * r
        return np.column_stack([x, y])

    def inverted(self):
        # docstring inherited
        return InvertedPolarPlotTransform(
            self._center, self._outer_radius, self._lower_radius,
            self._radius_range, self._offset, self._radians)


class InvertedPolarPlotTransform(mtransforms.Transform):
    """
    The inverse of the polar chart transform, mapping canvas pixels back to
    *angle* and *radius*. Angles are returned in ``[0, full turn)``.
    """

    input_dims = output_dims = 2
    has_inverse = True

    def __init__(self, center, outer_radius, lower_radius, radius_range,
                 offset=0.0, radians=False):
        super().__init__()
        self._center = tuple(center)
        self._outer_radius = outer_radius
        self._lower_radius = lower_radius
        self._radius_range = radius_range
        self._offset = offset
        self._radians = radians

    __str__ = mtransforms._make_str_method(
        "_center", "_outer_radius", "_lower_radius", "_radius_range",
        offset="_offset", radians="_radians")

    def transform_non_affine(self, xy):
        # docstring inherited
        x, y = np.transpose(xy)
        xc, yc = self._center
        dx = x - xc
        dy = y - yc
        rho = np.hypot(dx, dy)
        phi = np.arctan2(dx, -dy) % (2 * np.pi)
        theta = phi if self._radians else np.rad2deg(phi)
        r = self._lower_radius + (
            (rho - self._offset) / self._outer_radius) * self._radius_range
        return np.column_stack([theta, r])

    def inverted(self):
        # docstring inherited
        return PolarPlotTransform(
            self._center, self._outer_radius, self._lower_radius,
            self._radius_range, self._offset, self._radians)


def project(angle, radius, center, outer_radius, lower_radius, radius_range,
            offset=0.0, radians=False):
    """
    Project a single ``(angle, radius)`` data point onto the canvas.

    See `PolarPlotTransform` for the meaning of the parameters.

    Returns
    -------
    `RenderPoint`
    """
    transform = PolarPlotTransform(center, outer_radius, lower_radius,
                                   radius_range, offset, radians)
    x, y = transform.transform((angle, radius))
    return RenderPoint(float(x), float(y))


class ChartGeometry(namedtuple("ChartGeometry", [
        "width", "height", "size", "center_x", "center_y", "circle_size",
        "outer_radius", "offset", "font_size", "line_width", "symbol_size"])):
    """
    Pixel layout of a chart on a canvas of the given size.

    All lengths derive from *size*, the smaller canvas dimension; the chart
    is centered on the canvas.
    """
    __slots__ = ()

    @classmethod
    def from_canvas_size(cls, width, height, style=None):
        if style is None:
            style = ChartStyle()
        size = min(width, height)
        circle_size = style.circle_scale * size
        return cls(
            width=width,
            height=height,
            size=size,
            center_x=0.5 * width,
            center_y=0.5 * height,
            circle_size=circle_size,
            outer_radius=0.5 * circle_size,
            offset=0.0,
            font_size=style.font_scale * size,
            line_width=style.line_width_scale * size,
            symbol_size=clamp(style.min_symbol_size, style.max_symbol_size,
                              style.symbol_scale * size),
        )

    @property
    def center(self):
        return self.center_x, self.center_y

    def transform(self, bounds, radians=False):
        """ Return the `PolarPlotTransform` of *bounds* on this layout. """
        return PolarPlotTransform(
            self.center, self.outer_radius, bounds.lower_radius,
            bounds.radius_range, self.offset, radians)


_PI = "\N{GREEK SMALL LETTER PI}"

# Exact labels of the multiples of 15 degrees.
_RADIAN_LABELS = [
    (0, "0"),
    (15, f"{_PI}/12"),
    (30, f"{_PI}/6"),
    (45, f"{_PI}/4"),
    (60, f"{_PI}/3"),
    (75, f"5{_PI}/12"),
    (90, f"{_PI}/2"),
    (105, f"7{_PI}/12"),
    (120, f"2{_PI}/3"),
    (135, f"3{_PI}/4"),
    (150, f"5{_PI}/6"),
    (165, f"11{_PI}/12"),
    (180, _PI),
    (195, f"13{_PI}/12"),
    (210, f"7{_PI}/6"),
    (225, f"5{_PI}/4"),
    (240, f"4{_PI}/3"),
    (255, f"17{_PI}/12"),
    (270, f"3{_PI}/2"),
    (285, f"19{_PI}/12"),
    (300, f"5{_PI}/3"),
    (315, f"7{_PI}/4"),
    (330, f"11{_PI}/6"),
    (345, f"23{_PI}/12"),
    (360, "0"),
]
_RADIAN_TABLE = np.deg2rad([degrees for degrees, _ in _RADIAN_LABELS])
_RADIAN_EPSILON = 0.001

# Wide enough to quantize any finite float.
_DECIMAL_CONTEXT = decimal.Context(prec=400)


def format_fixed(value, decimals=0):
    """
    Format *value* with *decimals* fractional digits, rounding halves away
    from zero (``2.5 -> "3"``, ``-12.5 -> "-13"``, ``0.125 -> "0.13"``).

    The shortest decimal representation of *value* is rounded, so 0.125 and
    1.005 round up as written rather than as their binary approximations.
    """
    value = float(value)
    if not np.isfinite(value):
        return f"{value:.{decimals}f}"
    exponent = decimal.Decimal(1).scaleb(-decimals)
    rounded = decimal.Decimal(repr(value)).quantize(
        exponent, decimal.ROUND_HALF_UP, _DECIMAL_CONTEXT)
    return f"{rounded:f}"


def format_angle(angle, radians=False):
    """
    Format an angle as a tick label.

    Degrees are rounded to an integer, halves away from zero. Radians matching a multiple of 15
    degrees within 0.001 are written as a fraction of pi (``"3π/4"``), other
    radian values with two decimals.
    """
    if not radians:
        return format_fixed(angle)
    matches = np.flatnonzero(np.abs(_RADIAN_TABLE - angle) <= _RADIAN_EPSILON)
    if len(matches):
        return _RADIAN_LABELS[matches[0]][1]
    return format_fixed(angle, 2)


class AngleFormatter(mticker.Formatter):
    """
    Used to format the angular tick labels.
    """

    def __init__(self, radians=False):
        self.radians = radians

    def __call__(self, x, pos=None):
        return format_angle(x, self.radians)


class RadialFormatter(mticker.Formatter):
    """
    Used to format the radial ring labels.
    """

    def __call__(self, x, pos=None):
        return format_fixed(x)


class PolarGrid:
    """
    Background geometry of a polar chart.

    Draws, in order: the spokes, the concentric rings with their labels, the
    threshold ring, and one angle label per spoke. Nothing here depends on
    the data series except the angular unit of the labels.
    """

    # Default ring layout.
    num_rings = 11
    ring_step_scale = 1 / 20

    def __init__(self, style=None):
        self.style = style if style is not None else ChartStyle()
        self.radial_formatter = RadialFormatter()

    def draw(self, canvas, geometry, bounds, radians=False):
        _log.debug("Drawing polar grid: %d spokes, %s rings, radians=%s",
                   bounds.num_sectors,
                   len(bounds.ring_values) if bounds.ring_values
                   else "default", radians)
        transform = geometry.transform(bounds, radians)
        self.draw_spokes(canvas, geometry, bounds)
        self.draw_rings(canvas, geometry, bounds, transform)
        if bounds.threshold_visible:
            self.draw_circle(canvas, geometry, transform,
                             bounds.threshold_radius, 1.0,
                             bounds.threshold_color)
        self.draw_axis_labels(canvas, geometry, bounds, radians)

    def draw_spokes(self, canvas, geometry, bounds):
        xc, yc = geometry.center
        step = bounds.angle_step.value
        canvas.save()
        canvas.set_stroke(self.style.grid_color)
        for _ in range(bounds.num_sectors):
            canvas.stroke_line(xc, yc - geometry.outer_radius, xc, yc)
            canvas.rotate(xc, yc, step)
        canvas.restore()

    def draw_rings(self, canvas, geometry, bounds, transform):
        xc, yc = geometry.center
        if not bounds.ring_values:
            canvas.save()
            canvas.set_line_width(self.style.ring_line_width)
            canvas.set_stroke(self.style.grid_color)
            ring_step = geometry.size * self.ring_step_scale
            for i in range(self.num_rings):
                r = max(geometry.outer_radius - i * ring_step, 0.0)
                canvas.stroke_oval(xc - r, yc - r, 2 * r, 2 * r)
            canvas.restore()

            self.draw_label(canvas, geometry, bounds.lower_radius,
                            xc, yc - geometry.size * 0.018)
            self.draw_label(canvas, geometry, bounds.upper_radius,
                            xc, yc - geometry.circle_size * 0.48)
        else:
            for value in bounds.ring_values:
                self.draw_circle(canvas, geometry, transform, value, 1.0,
                                 self.style.grid_color)
            self.draw_label(canvas, geometry, bounds.lower_radius,
                            xc, yc - geometry.size * 0.018)

    def draw_circle(self, canvas, geometry, transform, value, line_width,
                    color):
        """
        Draw and label the ring of data radius *value*.

        Values below the lower radius bound collapse onto the center.
        """
        xc, yc = geometry.center
        _, y = transform.transform((0.0, value))
        r = max(float(yc - y), 0.0)
        canvas.save()
        canvas.set_line_width(line_width)
        canvas.set_stroke(color)
        canvas.stroke_oval(xc - r, yc - r, 2 * r, 2 * r)
        self.draw_label(canvas, geometry, value, xc, yc - r)
        canvas.restore()

    def draw_axis_labels(self, canvas, geometry, bounds, radians=False):
        xc, yc = geometry.center
        step = bounds.angle_step.value
        formatter = AngleFormatter(radians)
        y = yc - 0.48 * geometry.size
        canvas.save()
        for i in range(bounds.num_sectors):
            angle = i * step
            if radians:
                angle = np.deg2rad(angle)
            draw_text_with_background(
                canvas, formatter(angle), xc, y,
                font_size=geometry.font_size,
                background=self.style.label_background,
                color=self.style.label_color)
            canvas.rotate(xc, yc, step)
        canvas.restore()

    def draw_label(self, canvas, geometry, value, x, y):
        draw_text_with_background(
            canvas, self.radial_formatter(value), x, y,
            font_size=geometry.font_size,
            background=self.style.label_background,
            color=self.style.label_color)
