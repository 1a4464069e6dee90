"""
Small helpers shared by the grid and series renderers.
"""

import numpy as np


def clamp(minimum, maximum, value):
    """
    Limit *value* to ``[minimum, maximum]``.

    Works for any ordered type: ints of any size, floats, datetimes.
    """
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def order_items_by_angle(items, ascending=True):
    """ Return *items* sorted by angle. """
    return sorted(items, key=lambda item: item.angle, reverse=not ascending)


def draw_text_with_background(canvas, text, x, y, *, font_size,
                              background="white", color="black"):
    """
    Draw *text* centered on ``(x, y)`` over an opaque rectangle.

    The rectangle is 1.2 times as wide as the measured text and as high as
    it, so that labels stay legible over the grid lines.
    """
    width, height = canvas.measure_text(text, font_size)
    width *= 1.2
    canvas.save()
    canvas.set_font_size(font_size)
    canvas.set_fill(background)
    canvas.fill_rect(x - width * 0.5, y - height * 0.5, width, height)
    canvas.set_fill(color)
    canvas.fill_text(text, x, y)
    canvas.restore()


def _catmull_rom(p0, p1, p2, p3, t):
    # uniform Catmull-Rom segment between p1 and p2; t has shape (M, 1)
    t2 = t * t
    t3 = t2 * t
    return 0.5 * (
        2 * p1
        + (p2 - p0) * t
        + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t2
        + (3 * p1 - p0 - 3 * p2 + p3) * t3
    )


def _subdivide(points, subdivisions, neighbours):
    points = np.asarray(points, dtype="float64")
    if points.ndim != 2 or len(points) < 3:
        raise ValueError("At least three (x, y) points are required")
    if subdivisions < 1:
        raise ValueError("subdivisions must be a positive integer")

    n = len(points)
    t = (np.arange(subdivisions + 1) / subdivisions)[:, np.newaxis]
    result = np.empty(((n - 1) * subdivisions + 1, 2))
    for i in range(n - 1):
        i0, i3 = neighbours(i, n)
        start = i * subdivisions
        result[start:start + subdivisions + 1] = _catmull_rom(
            points[i0], points[i], points[i + 1], points[i3], t)
    return result


def subdivide_points(points, subdivisions):
    """
    Smooth an open curve with Catmull-Rom splines.

    Parameters
    ----------
    points : (N, 2) array-like
        Control points, N >= 3. The curve passes through every one of them.
    subdivisions : int
        Number of spline steps between two control points.

    Returns
    -------
    ndarray of shape ``((N - 1) * subdivisions + 1, 2)``
    """
    def neighbours(i, n):
        return max(i - 1, 0), min(i + 2, n - 1)

    return _subdivide(points, subdivisions, neighbours)


def subdivide_points_radial(points, subdivisions):
    """
    Smooth a closed curve with Catmull-Rom splines.

    Same as `subdivide_points` except that the last point is expected to
    repeat the first one, and the end segments take their outer neighbours
    from the other end of the loop.
    """
    def neighbours(i, n):
        i0 = n - 2 if i == 0 else i - 1
        i3 = 1 if i == n - 2 else i + 2
        return i0, i3

    return _subdivide(points, subdivisions, neighbours)
