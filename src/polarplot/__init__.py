"""
   PolarPlot - polar charts of degree or radian data series.
"""

from .canvas import AggCanvas, Canvas, DrawCall, RecordingCanvas
from .config import Bounds, ChartStyle
from .data import ChartItem, ChartType, PolarTickStep, Series, Symbol
from .pipeline import PolarChartPipeline
from .projections import (
    AngleFormatter,
    ChartGeometry,
    PolarGrid,
    PolarPlotTransform,
    format_angle,
    project,
)
from .series import SeriesRenderer, draw_symbol
from .tools import clamp, interpolate

__version__ = "0.1.0"
