"""
   PolarPlot polar projection, tick formatters and grid.
"""

from .polar import (
    AngleFormatter,
    ChartGeometry,
    InvertedPolarPlotTransform,
    PolarGrid,
    PolarPlotTransform,
    RadialFormatter,
    RenderPoint,
    format_angle,
    format_fixed,
    project,
)
