"""
Per-repaint configuration of a polar chart.

`Bounds` carries the data-space limits and grid options, `ChartStyle` the
visual constants. Both are plain objects handed to the pipeline on every
repaint; changing them does not trigger anything by itself.
"""

from matplotlib import _api

from .data import PolarTickStep


class Bounds:
    """
    Radial limits and grid layout of a polar chart.

    Parameters
    ----------
    lower_radius, upper_radius : float
        Data values projected to the chart center and to the outer ring.
    angle_step : `PolarTickStep` or int
        Spacing between spokes in degrees.
    threshold_radius : float
        Data value of the highlighted threshold ring.
    threshold_visible : bool
        Whether the threshold ring is drawn.
    threshold_color : color
        Stroke color of the threshold ring.
    ring_values : sequence of float, optional
        Data values of custom rings replacing the default ring layout.

    Raises
    ------
    ValueError
        If the radial range is empty or *angle_step* is not permitted.
    """

    def __init__(self, lower_radius=0.0, upper_radius=100.0,
                 angle_step=PolarTickStep.FORTY_FIVE, *,
                 threshold_radius=100.0, threshold_visible=False,
                 threshold_color="red", ring_values=None):
        if upper_radius == lower_radius:
            raise ValueError(
                f"The radial range is empty: lower_radius == upper_radius "
                f"== {lower_radius!r}")
        if not isinstance(angle_step, PolarTickStep):
            _api.check_in_list([step.value for step in PolarTickStep],
                               angle_step=angle_step)
            angle_step = PolarTickStep(angle_step)
        self.lower_radius = lower_radius
        self.upper_radius = upper_radius
        self.angle_step = angle_step
        self.threshold_radius = threshold_radius
        self.threshold_visible = threshold_visible
        self.threshold_color = threshold_color
        self.ring_values = (
            tuple(ring_values) if ring_values is not None else None)

    def __repr__(self):
        return (f"{type(self).__name__}(lower_radius={self.lower_radius!r}, "
                f"upper_radius={self.upper_radius!r}, "
                f"angle_step={self.angle_step.value})")

    @property
    def radius_range(self):
        return self.upper_radius - self.lower_radius

    @property
    def num_sectors(self):
        return int(360 // self.angle_step.value)

    def replace(self, **kwargs):
        """ Return a copy with the given fields changed. """
        values = dict(
            lower_radius=self.lower_radius,
            upper_radius=self.upper_radius,
            angle_step=self.angle_step,
            threshold_radius=self.threshold_radius,
            threshold_visible=self.threshold_visible,
            threshold_color=self.threshold_color,
            ring_values=self.ring_values,
        )
        values.update(kwargs)
        return type(self)(**values)


class ChartStyle:
    """
    Visual constants of the chart.

    The class attributes are the defaults; any of them can be overridden
    per instance with a keyword argument of the same name.
    """
    background = "none"
    grid_color = "lightgray"
    ring_line_width = 0.5
    label_background = "white"
    label_color = "black"

    # Fractions of the chart size (the smaller canvas dimension).
    circle_scale = 0.9
    font_scale = 0.025
    line_width_scale = 0.0025
    symbol_scale = 0.016

    min_symbol_size = 2.0
    max_symbol_size = 6.0

    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            if key.startswith("_") or not hasattr(type(self), key) \
                    or callable(getattr(type(self), key)):
                raise ValueError(f"{key!r} is not a valid chart style option")
            setattr(self, key, value)

    def replace(self, **kwargs):
        """ Return a copy with the given options changed. """
        return type(self)(**{**vars(self), **kwargs})
