"""
   PolarPlot interpolation and drawing helpers.
"""

from .helpers import (
    clamp,
    draw_text_with_background,
    order_items_by_angle,
    subdivide_points,
    subdivide_points_radial,
)
from .interpolate import closing_segment, interpolate
