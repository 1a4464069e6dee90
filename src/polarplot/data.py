"""
Data model of a polar chart: items, series and the closed enumerations
used to describe them.
"""

from collections import namedtuple
from enum import Enum

import numpy as np


class Symbol(Enum):
    """ Marker drawn at an original data point. """
    NONE = "none"
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    STAR = "star"
    CROSS = "cross"


class ChartType(Enum):
    """ Angular unit of a polar series. """
    POLAR_DEGREES = "polar_degrees"
    POLAR_RADIANS = "polar_radians"


class PolarTickStep(Enum):
    """ Permitted angular spacing, in degrees, between grid spokes. """
    FIVE = 5
    TEN = 10
    FIFTEEN = 15
    THIRTY = 30
    FORTY_FIVE = 45
    SIXTY = 60
    NINETY = 90


ChartItem = namedtuple(
    "ChartItem", ["angle", "radius", "name", "fill", "stroke", "symbol"],
    defaults=("", None, None, None))
ChartItem.__doc__ = """\
A single polar sample.

The angle and radius are in the unit of the owning series. ``symbol=None``
inherits the series symbol while ``Symbol.NONE`` suppresses the marker of
this point.
"""


class Series:
    """
    An ordered sequence of `ChartItem` drawn as one polar curve.

    Items are expected in ascending angle order; the order is not enforced.
    The series is never modified by rendering.

    Parameters
    ----------
    items : iterable of `ChartItem` or ``(angle, radius)`` pairs
    chart_type : `ChartType`
        Whether angles are in degrees or radians.
    fill, stroke : color
        Area fill (closed series only) and line color.
    wrap : bool
        Close the curve by joining the last point to the first one.
    symbol : `Symbol`
        Default marker of the series items.
    symbol_size : float, optional
        Marker size in pixels; chart default when omitted.
    """

    def __init__(self, items=(), chart_type=ChartType.POLAR_DEGREES,
                 fill="none", stroke="black", *, wrap=False,
                 symbol=Symbol.CIRCLE, symbol_size=None, stroke_width=None,
                 symbol_fill="white", symbol_stroke="black",
                 symbols_visible=False, name=""):
        self.items = [
            item if isinstance(item, ChartItem) else ChartItem(*item)
            for item in items
        ]
        self.chart_type = ChartType(chart_type)
        self.fill = fill
        self.stroke = stroke
        self.wrap = wrap
        self.symbol = Symbol(symbol)
        self.symbol_size = symbol_size
        self.stroke_width = stroke_width
        self.symbol_fill = symbol_fill
        self.symbol_stroke = symbol_stroke
        self.symbols_visible = symbols_visible
        self.name = name

    def __repr__(self):
        return (f"{type(self).__name__}(name={self.name!r}, "
                f"items={len(self.items)}, chart_type={self.chart_type.name})")

    def __len__(self):
        return len(self.items)

    @property
    def radians(self):
        return self.chart_type is ChartType.POLAR_RADIANS

    @property
    def turn(self):
        """ Full turn in the series angular unit. """
        return 2 * np.pi if self.radians else 360.0

    def _values(self, field):
        return np.array([getattr(item, field) for item in self.items],
                        dtype="float64")

    @property
    def min_angle(self):
        return self._values("angle").min()

    @property
    def max_angle(self):
        return self._values("angle").max()

    @property
    def min_radius(self):
        return self._values("radius").min()

    @property
    def max_radius(self):
        return self._values("radius").max()
