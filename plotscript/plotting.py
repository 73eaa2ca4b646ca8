"""Layout of discrete and continuous plots.

Data coordinates are scaled so the bounding box is N units wide and N units
tall. The builders return plain lists of point, line and text Expressions; the
special forms wrap them in a discrete-plot Expression for the renderer.

Offsets (in scaled units):
- title A above the box, abscissa label A below, ordinate label B to the left
  (rotated a quarter turn clockwise)
- abscissa tick labels C below the box, ordinate tick labels D to the left
- data points are drawn with size P
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from plotscript.errors import TypeMismatchError
from plotscript.types.atom import Atom
from plotscript.types.expression import Expression, N, A, B, C, D, P

_logger = logging.getLogger("Plotting")

# Continuous-plot refinement: a vertex bending by more than MAX_BEND degrees
# gets both neighbouring segments split, for at most SMOOTHING_PASSES passes.
MAX_BEND = 10.0
SMOOTHING_PASSES = 10

OPTION_KEYS = ("title", "abscissa-label", "ordinate-label", "text-scale")


@dataclass
class PlotOptions:
    title: Optional[str] = None
    abscissa_label: Optional[str] = None
    ordinate_label: Optional[str] = None
    text_scale: float = 1.0


def parse_options(options: Optional[Expression]) -> PlotOptions:
    """Read a list of (list "key" value) pairs into PlotOptions."""
    parsed = PlotOptions()
    if options is None:
        return parsed
    if not options.is_head_list():
        raise TypeMismatchError("plot options must be a list")
    for entry in options.iter_tail():
        if not (entry.is_head_list() and len(entry.tail) == 2 and entry.tail[0].is_head_string()):
            raise TypeMismatchError(f"plot option {entry} is not a (name value) pair")
        key = entry.tail[0].head.value
        value = entry.tail[1]
        if key not in OPTION_KEYS:
            raise TypeMismatchError(f"unknown plot option {key}")
        if key == "text-scale":
            if not (value.is_head_number() and value.head.value > 0):
                raise TypeMismatchError("text-scale option must be a positive number")
            parsed.text_scale = value.head.value
        else:
            if not value.is_head_string():
                raise TypeMismatchError(f"{key} option must be a string")
            setattr(parsed, key.replace("-", "_"), value.head.value)
    return parsed


def tick_label(value: float) -> str:
    return f"{value:.2g}"


def _number(value: float) -> Expression:
    return Expression(Atom.number(value))


def styled_line(start: Expression, end: Expression, thickness: float = 0.0) -> Expression:
    line = Expression.make_line(start, end)
    line.set_property("thickness", _number(thickness))
    return line


class PlotLayout:
    """Maps data coordinates into the N x N plot box and emits plot items."""

    def __init__(self, xmin: float, xmax: float, ymin: float, ymax: float):
        self.xmin, self.xmax = xmin, xmax
        self.ymin, self.ymax = ymin, ymax
        # A flat range still needs a finite scale.
        self.sx = N / ((xmax - xmin) or 1.0)
        self.sy = N / ((ymax - ymin) or 1.0)
        self.left, self.right = xmin * self.sx, xmax * self.sx
        self.bottom, self.top = ymin * self.sy, ymax * self.sy

    def point(self, x: float, y: float) -> Expression:
        return Expression.make_point(x * self.sx, y * self.sy)

    def text(self, label: str, x: float, y: float, scale: float, rotation: float = 0.0) -> Expression:
        item = Expression.make_text(label)
        item.set_property("position", Expression.make_point(x, y))
        item.set_property("text-scale", _number(scale))
        item.set_property("text-rotation", _number(rotation))
        return item

    def frame(self) -> list[Expression]:
        corners = {
            "bottom-left": Expression.make_point(self.left, self.bottom),
            "bottom-right": Expression.make_point(self.right, self.bottom),
            "top-left": Expression.make_point(self.left, self.top),
            "top-right": Expression.make_point(self.right, self.top),
        }
        items = [
            styled_line(corners["top-left"], corners["top-right"]),
            styled_line(corners["bottom-left"], corners["bottom-right"]),
            styled_line(corners["bottom-left"], corners["top-left"]),
            styled_line(corners["bottom-right"], corners["top-right"]),
        ]
        if self.xmin <= 0 <= self.xmax:
            items.append(styled_line(Expression.make_point(0.0, self.bottom), Expression.make_point(0.0, self.top)))
        if self.ymin <= 0 <= self.ymax:
            items.append(styled_line(Expression.make_point(self.left, 0.0), Expression.make_point(self.right, 0.0)))
        return items

    def labels(self, options: PlotOptions) -> list[Expression]:
        scale = options.text_scale
        xmid = (self.left + self.right) / 2
        ymid = (self.bottom + self.top) / 2
        items = [
            self.text(tick_label(self.xmin), self.left, self.bottom - C, scale),
            self.text(tick_label(self.xmax), self.right, self.bottom - C, scale),
            self.text(tick_label(self.ymin), self.left - D, self.bottom, scale),
            self.text(tick_label(self.ymax), self.left - D, self.top, scale),
        ]
        if options.title is not None:
            items.append(self.text(options.title, xmid, self.top + A, scale))
        if options.abscissa_label is not None:
            items.append(self.text(options.abscissa_label, xmid, self.bottom - A, scale))
        if options.ordinate_label is not None:
            items.append(self.text(options.ordinate_label, self.left - B, ymid, scale, -math.pi / 2))
        return items


def layout_discrete(data: list[tuple[float, float]], options: PlotOptions) -> list[Expression]:
    """Points of size P, each with a stem down to the x-axis (or the box edge)."""
    xs = [x for x, _ in data]
    ys = [y for _, y in data]
    layout = PlotLayout(min(xs), max(xs), min(ys), max(ys))
    stem_base = min(max(0.0, layout.ymin), layout.ymax)

    items = layout.frame()
    for x, y in data:
        point = layout.point(x, y)
        point.set_property("size", _number(P))
        items.append(point)
        items.append(styled_line(layout.point(x, y), layout.point(x, stem_base)))
    items.extend(layout.labels(options))
    _logger.debug("discrete plot: %d points, %d items", len(data), len(items))
    return items


def _bent_vertices(xs: np.ndarray, ys: np.ndarray, sx: float, sy: float) -> np.ndarray:
    """Indices of interior vertices whose angle deviates from straight by more than MAX_BEND."""
    pts = np.column_stack((xs * sx, ys * sy))
    v1 = pts[:-2] - pts[1:-1]
    v2 = pts[2:] - pts[1:-1]
    norms = np.linalg.norm(v1, axis=1) * np.linalg.norm(v2, axis=1)
    dots = np.einsum("ij,ij->i", v1, v2)
    # Coincident samples count as straight.
    cosines = np.where(norms == 0, -1.0, dots / np.where(norms == 0, 1.0, norms))
    angles = np.degrees(np.arccos(np.clip(cosines, -1.0, 1.0)))
    return np.nonzero(angles < 180.0 - MAX_BEND)[0] + 1


def _scales(xs: np.ndarray, ys: np.ndarray) -> tuple[float, float]:
    return N / ((xs[-1] - xs[0]) or 1.0), N / ((ys.max() - ys.min()) or 1.0)


def sample_curve(
    fn: Callable[[float], float], xmin: float, xmax: float
) -> tuple[np.ndarray, np.ndarray]:
    """Sample fn on N segments over [xmin, xmax], then refine sharp bends."""
    xs = np.linspace(xmin, xmax, int(N) + 1)
    ys = np.array([fn(x) for x in xs], dtype=float)

    for _ in range(SMOOTHING_PASSES):
        bent = _bent_vertices(xs, ys, *_scales(xs, ys))
        if bent.size == 0:
            break
        split = set()
        for i in bent:
            split.update((int(i) - 1, int(i)))
        new_xs, new_ys = [xs[0]], [ys[0]]
        for j in range(len(xs) - 1):
            if j in split:
                xm = (xs[j] + xs[j + 1]) / 2
                new_xs.append(xm)
                new_ys.append(fn(xm))
            new_xs.append(xs[j + 1])
            new_ys.append(ys[j + 1])
        xs, ys = np.array(new_xs), np.array(new_ys, dtype=float)
    return xs, ys


def layout_continuous(
    fn: Callable[[float], float], xmin: float, xmax: float, options: PlotOptions
) -> list[Expression]:
    xs, ys = sample_curve(fn, xmin, xmax)
    layout = PlotLayout(xmin, xmax, float(ys.min()), float(ys.max()))

    items = layout.frame()
    for j in range(len(xs) - 1):
        items.append(
            styled_line(layout.point(float(xs[j]), float(ys[j])), layout.point(float(xs[j + 1]), float(ys[j + 1])))
        )
    items.extend(layout.labels(options))
    _logger.debug("continuous plot: %d samples, %d items", len(xs), len(items))
    return items
