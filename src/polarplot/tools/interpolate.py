"""
Angular interpolation of sparse polar series.
"""

import logging

import numpy as np

from ..data import ChartItem

_log = logging.getLogger(__name__)

# Angle differences this close to a whole number of steps count as whole.
_STEP_TOLERANCE = 1e-9


def interpolate(items, wrap=False, radians=False):
    """
    Refine a polar series so that there is a point at every unit step.

    The unit step is one degree, or its radian equivalent when *radians* is
    set. Each consecutive pair of items contributes its first item, one
    linearly interpolated item per whole step strictly between the two
    angles, and its second item. A pair sharing the same angle contributes
    the two endpoints only, which keeps a sharp radial step in the curve.

    Parameters
    ----------
    items : sequence of `ChartItem`
        Points sorted by ascending angle, all within one full turn.
    wrap : bool
        Also interpolate from the last item back to the first one, whose
        angle is moved up by one full turn so the segment closes the loop
        instead of running backwards through zero.
    radians : bool
        Whether the angles are in radians.

    Returns
    -------
    list of `ChartItem`
        The original items are returned unchanged if there are fewer than
        two of them.
    """
    if len(items) < 2:
        return items

    turn = 2 * np.pi if radians else 360.0
    _check_order(items, turn)

    step = np.deg2rad(1.0) if radians else 1.0
    result = []
    for p1, p2 in zip(items[:-1], items[1:]):
        result.extend(_interpolate_segment(p1, p2, step))

    if wrap:
        result.extend(closing_segment(items, radians))

    return result


def closing_segment(items, radians=False):
    """
    Interpolate the segment joining the last item back to the first one.

    The segment starts at the last item and ends at a copy of the first item
    whose angle is one full turn larger, so every item after the first one
    is synthetic and may lie beyond a full turn.
    """
    turn = 2 * np.pi if radians else 360.0
    step = np.deg2rad(1.0) if radians else 1.0
    first = items[0]
    first_shifted = first._replace(angle=first.angle + turn)
    return _interpolate_segment(items[-1], first_shifted, step)


def _interpolate_segment(p1, p2, step):
    theta1, r1 = p1.angle, p1.radius
    theta2, r2 = p2.angle, p2.radius

    segment = [p1]
    if theta1 != theta2:
        steps = (theta2 - theta1) / step
        whole = np.round(steps)
        if abs(steps - whole) < _STEP_TOLERANCE:
            steps = whole
        thetas = theta1 + np.arange(1, steps) * step
        radii = r1 + (r2 - r1) * (thetas - theta1) / (theta2 - theta1)
        segment.extend(
            ChartItem(theta, r) for theta, r in zip(thetas.tolist(),
                                                    radii.tolist()))
    segment.append(p2)
    return segment


def _check_order(items, turn):
    angles = np.array([item.angle for item in items], dtype="float64")
    if np.any(np.diff(angles) < 0):
        _log.warning("Series angles are not in ascending order; "
                     "interpolation spans will be wrong")
    if angles.min() < 0 or angles.max() > turn:
        _log.warning("Series angles lie outside [0, %g]; interpolation "
                     "spans will be wrong", turn)
