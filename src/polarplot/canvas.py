"""
Render targets for polar charts.

A `Canvas` exposes the primitive drawing operations the chart needs: paths,
rectangles, ovals, lines and text, together with a graphics-state stack and
a rotation about an arbitrary point. Coordinates are pixels with the origin
at the top left corner and y growing downwards, so a positive rotation
turns clockwise on screen.

Two implementations are provided:

- `RecordingCanvas` keeps the list of draw calls, which makes repaints easy
  to inspect and compare.
- `AggCanvas` draws with matplotlib artists on an Agg figure of the same
  pixel size.
"""

from abc import ABC, abstractmethod
from collections import namedtuple
import copy
import functools

import numpy as np

import matplotlib as mpl
import matplotlib.colors as mcolors
import matplotlib.lines as mlines
import matplotlib.patches as mpatches
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.font_manager import FontProperties
from matplotlib.path import Path
import matplotlib.text as mtext
from matplotlib.textpath import TextPath
import matplotlib.transforms as mtransforms


def to_rgba(color):
    """ Convert a color spec to RGBA, treating None and "transparent" as
    fully transparent. """
    if color is None or (isinstance(color, str)
                         and color.lower() in ("none", "transparent")):
        return (0.0, 0.0, 0.0, 0.0)
    return mcolors.to_rgba(color)


@functools.lru_cache(maxsize=512)
def text_extent(text, font_size, family="sans-serif"):
    """
    Return the ``(width, height)`` of *text* rendered at *font_size*.

    The size is in the unit of *font_size* (pixels for the canvases here).
    *family* is a font family name or a tuple of them.
    """
    if not text:
        return 0.0, 0.0
    prop = FontProperties(family=list(family) if isinstance(family, tuple)
                          else family)
    bbox = TextPath((0, 0), text, size=font_size, prop=prop).get_extents()
    return bbox.width, bbox.height


class GraphicsState:
    """ Drawing attributes saved and restored as a unit. """

    def __init__(self):
        self.fill = "black"
        self.stroke = "black"
        self.line_width = 1.0
        self.line_join = "miter"
        self.font_size = 12.0
        self.transform = mtransforms.Affine2D()
        self.rotation = 0.0

    def copy(self):
        state = copy.copy(self)
        state.transform = mtransforms.Affine2D(
            self.transform.get_matrix().copy())
        return state


class Canvas(ABC):
    """
    Base render target.

    Subclasses implement the primitive operations; the graphics state and
    the current path are handled here.
    """

    def __init__(self, width, height, font_family=None):
        self.width = width
        self.height = height
        if font_family is None:
            font_family = mpl.rcParams["font.family"]
        self.font_family = font_family
        self._state = GraphicsState()
        self._stack = []
        self._path = []

    # graphics state

    def save(self):
        self._stack.append(self._state.copy())

    def restore(self):
        if self._stack:
            self._state = self._stack.pop()

    def set_fill(self, color):
        self._state.fill = color

    def set_stroke(self, color):
        self._state.stroke = color

    def set_line_width(self, width):
        self._state.line_width = width

    def set_line_join(self, join):
        self._state.line_join = join

    def set_font_size(self, size):
        self._state.font_size = size

    def rotate(self, x, y, angle):
        """ Rotate subsequent drawing by *angle* degrees around ``(x, y)``. """
        rotation = mtransforms.Affine2D().rotate_deg_around(x, y, angle)
        matrix = np.dot(self._state.transform.get_matrix(),
                        rotation.get_matrix())
        self._state.transform = mtransforms.Affine2D(matrix)
        self._state.rotation += angle

    @property
    def transform(self):
        """ The current user-to-pixel transform. """
        return self._state.transform

    def measure_text(self, text, font_size=None):
        if font_size is None:
            font_size = self._state.font_size
        family = self.font_family
        if isinstance(family, list):
            family = tuple(family)
        return text_extent(text, float(font_size), family)

    # paths

    def begin_path(self):
        self._path = []

    def move_to(self, x, y):
        self._path.append((Path.MOVETO, self._state.transform.transform((x, y))))

    def line_to(self, x, y):
        if not self._path:
            self.move_to(x, y)
            return
        self._path.append((Path.LINETO, self._state.transform.transform((x, y))))

    def close_path(self):
        if self._path:
            self._path.append((Path.CLOSEPOLY, self._path[0][1]))

    def current_path(self):
        """ The current path in pixel coordinates, or None if empty. """
        if not self._path:
            return None
        codes, vertices = zip(*self._path)
        return Path(np.array(vertices), codes)

    @abstractmethod
    def fill(self):
        pass

    @abstractmethod
    def stroke(self):
        pass

    # primitives

    @abstractmethod
    def clear_rect(self, x, y, width, height):
        pass

    @abstractmethod
    def stroke_polyline(self, xs, ys):
        pass

    @abstractmethod
    def fill_rect(self, x, y, width, height):
        pass

    @abstractmethod
    def stroke_rect(self, x, y, width, height):
        pass

    @abstractmethod
    def fill_oval(self, x, y, width, height):
        pass

    @abstractmethod
    def stroke_oval(self, x, y, width, height):
        pass

    @abstractmethod
    def stroke_line(self, x1, y1, x2, y2):
        pass

    @abstractmethod
    def fill_text(self, text, x, y):
        pass


DrawCall = namedtuple("DrawCall", ["op", "args", "fill", "stroke", "transform"])


class RecordingCanvas(Canvas):
    """
    Canvas that only records the calls made on it.

    Every state change and primitive is appended to `calls` as a `DrawCall`
    carrying the fill, stroke and transform in effect at that time.
    """

    def __init__(self, width=250, height=250, font_family=None):
        super().__init__(width, height, font_family)
        self.calls = []

    def _record(self, op, *args):
        self.calls.append(DrawCall(
            op, args, self._state.fill, self._state.stroke,
            tuple(self._state.transform.to_values())))

    def ops(self, *names):
        """ Return the recorded calls of the given operations. """
        return [call for call in self.calls if call.op in names]

    def count(self, name):
        return sum(1 for call in self.calls if call.op == name)

    def save(self):
        self._record("save")
        super().save()

    def restore(self):
        super().restore()
        self._record("restore")

    def set_fill(self, color):
        super().set_fill(color)
        self._record("set_fill", color)

    def set_stroke(self, color):
        super().set_stroke(color)
        self._record("set_stroke", color)

    def set_line_width(self, width):
        super().set_line_width(width)
        self._record("set_line_width", width)

    def set_line_join(self, join):
        super().set_line_join(join)
        self._record("set_line_join", join)

    def set_font_size(self, size):
        super().set_font_size(size)
        self._record("set_font_size", size)

    def rotate(self, x, y, angle):
        super().rotate(x, y, angle)
        self._record("rotate", x, y, angle)

    def begin_path(self):
        super().begin_path()
        self._record("begin_path")

    def move_to(self, x, y):
        super().move_to(x, y)
        self._record("move_to", x, y)

    def line_to(self, x, y):
        super().line_to(x, y)
        self._record("line_to", x, y)

    def close_path(self):
        super().close_path()
        self._record("close_path")

    def fill(self):
        self._record("fill")

    def stroke(self):
        self._record("stroke")

    def clear_rect(self, x, y, width, height):
        self._record("clear_rect", x, y, width, height)

    def stroke_polyline(self, xs, ys):
        self._record("stroke_polyline", tuple(xs), tuple(ys))

    def fill_rect(self, x, y, width, height):
        self._record("fill_rect", x, y, width, height)

    def stroke_rect(self, x, y, width, height):
        self._record("stroke_rect", x, y, width, height)

    def fill_oval(self, x, y, width, height):
        self._record("fill_oval", x, y, width, height)

    def stroke_oval(self, x, y, width, height):
        self._record("stroke_oval", x, y, width, height)

    def stroke_line(self, x1, y1, x2, y2):
        self._record("stroke_line", x1, y1, x2, y2)

    def fill_text(self, text, x, y):
        self._record("fill_text", text, x, y)


class AggCanvas(Canvas):
    """
    Canvas drawing matplotlib artists on an Agg figure.

    The figure is exactly *width* x *height* pixels and its single axes maps
    data coordinates one to one onto pixels, y pointing down.
    """

    def __init__(self, width=250, height=250, dpi=100,
                 font_family=None):
        super().__init__(width, height, font_family)
        self.dpi = dpi
        self.figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        FigureCanvasAgg(self.figure)
        self.axes = self.figure.add_axes((0, 0, 1, 1))
        self.axes.set_axis_off()
        self.axes.set_autoscale_on(False)
        self.axes.set_xlim(0, width)
        self.axes.set_ylim(height, 0)
        self._artists = []

    def _points(self, pixels):
        return pixels * 72.0 / self.dpi

    def _artist_transform(self):
        return self._state.transform.frozen() + self.axes.transData

    def _add(self, artist):
        if isinstance(artist, mpatches.Patch):
            self.axes.add_patch(artist)
        elif isinstance(artist, mlines.Line2D):
            self.axes.add_line(artist)
        else:
            self.axes.add_artist(artist)
        self._artists.append(artist)
        return artist

    def _fill_kw(self):
        return dict(facecolor=to_rgba(self._state.fill), edgecolor="none",
                    linewidth=0)

    def _stroke_kw(self):
        return dict(facecolor="none", edgecolor=to_rgba(self._state.stroke),
                    linewidth=self._points(self._state.line_width),
                    joinstyle=self._state.line_join)

    def fill(self):
        path = self.current_path()
        if path is not None:
            self._add(mpatches.PathPatch(
                path, transform=self.axes.transData, **self._fill_kw()))

    def stroke(self):
        path = self.current_path()
        if path is not None:
            self._add(mpatches.PathPatch(
                path, transform=self.axes.transData, **self._stroke_kw()))

    def clear_rect(self, x, y, width, height):
        if (x, y, width, height) == (0, 0, self.width, self.height):
            for artist in self._artists:
                artist.remove()
            self._artists = []
        else:
            self._add(mpatches.Rectangle(
                (x, y), width, height, facecolor=self.figure.get_facecolor(),
                edgecolor="none", transform=self._artist_transform()))

    def stroke_polyline(self, xs, ys):
        self._add(mlines.Line2D(
            xs, ys, color=to_rgba(self._state.stroke),
            linewidth=self._points(self._state.line_width),
            solid_joinstyle=self._state.line_join,
            transform=self._artist_transform()))

    def fill_rect(self, x, y, width, height):
        self._add(mpatches.Rectangle(
            (x, y), width, height, transform=self._artist_transform(),
            **self._fill_kw()))

    def stroke_rect(self, x, y, width, height):
        self._add(mpatches.Rectangle(
            (x, y), width, height, transform=self._artist_transform(),
            **self._stroke_kw()))

    def fill_oval(self, x, y, width, height):
        self._add(mpatches.Ellipse(
            (x + width * 0.5, y + height * 0.5), width, height,
            transform=self._artist_transform(), **self._fill_kw()))

    def stroke_oval(self, x, y, width, height):
        self._add(mpatches.Ellipse(
            (x + width * 0.5, y + height * 0.5), width, height,
            transform=self._artist_transform(), **self._stroke_kw()))

    def stroke_line(self, x1, y1, x2, y2):
        self.stroke_polyline((x1, x2), (y1, y2))

    def fill_text(self, text, x, y):
        x, y = self._state.transform.transform((x, y))
        self._add(mtext.Text(
            x, y, text, color=to_rgba(self._state.fill),
            fontsize=self._points(self._state.font_size),
            fontfamily=self.font_family,
            horizontalalignment="center", verticalalignment="center",
            rotation=-self._state.rotation, rotation_mode="anchor",
            transform=self.axes.transData))

    def to_array(self):
        """ Render and return the canvas as an (height, width, 4) uint8 array. """
        self.figure.canvas.draw()
        return np.asarray(self.figure.canvas.buffer_rgba()).copy()

    def save_png(self, filename):
        """ Render the canvas to a PNG file. """
        self.figure.savefig(filename, dpi=self.dpi, format="png")
