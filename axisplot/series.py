from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any, Callable, Iterable, Protocol, runtime_checkable

import numpy as np

from axisplot.adapters import normalize_xy
from axisplot.axes import AxesContext
from axisplot.geometry import AxisRange, Point2, ScreenPoint
from axisplot.style import ColorLike, LineStyle, MarkerStyle, coerce_color


LOGGER = logging.getLogger(__name__)
DEFAULT_MAX_SAMPLES = 100_000

PointLike = Point2 | tuple[float, float]


@runtime_checkable
class GeometryAxes(Protocol):
    def render_axes(self, ctx: AxesContext) -> None:
        ...


def _as_point(value: PointLike) -> Point2:
    if isinstance(value, Point2):
        return value
    x, y = value
    return Point2(x, y)


def _xy_arrays(points: list[Point2]) -> tuple[np.ndarray, np.ndarray]:
    n = len(points)
    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=n)
    ys = np.fromiter((p.y for p in points), dtype=np.float64, count=n)
    return xs, ys


class Line:
    """Polyline series drawn in insertion order.

    Style setters return a new ``Line`` so they can be chained
    (``Line().color(RED).width(2)``); ``add_point`` mutates in place.
    """

    def __init__(self, points: Iterable[PointLike] | None = None, style: LineStyle | None = None) -> None:
        self._points: list[Point2] = [] if points is None else [_as_point(p) for p in points]
        self._style = style if style is not None else LineStyle()

    @classmethod
    def from_xy(cls, y: Any = None, *, x: Any = None, data: Any = None, style: LineStyle | None = None) -> "Line":
        xy = normalize_xy(y, x=x, data=data)
        return cls((Point2(float(xv), float(yv)) for xv, yv in zip(xy.x.tolist(), xy.y.tolist())), style=style)

    @property
    def style(self) -> LineStyle:
        return self._style

    @property
    def points(self) -> tuple[Point2, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def color(self, color: ColorLike | str, alpha: float = 1.0) -> "Line":
        return Line(self._points, replace(self._style, color=coerce_color(color, alpha)))

    def width(self, width: int) -> "Line":
        return Line(self._points, replace(self._style, width=width))

    def dash(self, pattern: tuple[int, ...] | None) -> "Line":
        return Line(self._points, replace(self._style, dash=None if pattern is None else tuple(pattern)))

    def add_point(self, point: PointLike) -> None:
        self._points.append(_as_point(point))

    def extend(self, points: Iterable[PointLike]) -> None:
        self._points.extend(_as_point(p) for p in points)

    def render_axes(self, ctx: AxesContext) -> None:
        if len(self._points) < 2:
            return
        sx, sy = ctx.map_arrays(*_xy_arrays(self._points))
        finite = np.isfinite(sx) & np.isfinite(sy)
        xs = sx.tolist()
        ys = sy.tolist()
        ok = finite.tolist()
        # Segments touching a non-finite point are dropped, leaving a gap.
        for i in range(len(xs) - 1):
            if not (ok[i] and ok[i + 1]):
                continue
            ctx.emit_segment(ScreenPoint(xs[i], ys[i]), ScreenPoint(xs[i + 1], ys[i + 1]), self._style)


class Points:
    """Scatter series: one marker per finite point."""

    def __init__(self, points: Iterable[PointLike] | None = None, style: MarkerStyle | None = None) -> None:
        self._points: list[Point2] = [] if points is None else [_as_point(p) for p in points]
        self._style = style if style is not None else MarkerStyle()

    @classmethod
    def from_xy(cls, y: Any = None, *, x: Any = None, data: Any = None, style: MarkerStyle | None = None) -> "Points":
        xy = normalize_xy(y, x=x, data=data)
        return cls((Point2(float(xv), float(yv)) for xv, yv in zip(xy.x.tolist(), xy.y.tolist())), style=style)

    @property
    def style(self) -> MarkerStyle:
        return self._style

    @property
    def points(self) -> tuple[Point2, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def color(self, color: ColorLike | str, alpha: float = 1.0) -> "Points":
        return Points(self._points, replace(self._style, color=coerce_color(color, alpha)))

    def size(self, size: int) -> "Points":
        return Points(self._points, replace(self._style, size=size))

    def add_point(self, point: PointLike) -> None:
        self._points.append(_as_point(point))

    def render_axes(self, ctx: AxesContext) -> None:
        if not self._points:
            return
        sx, sy = ctx.map_arrays(*_xy_arrays(self._points))
        for px, py, ok in zip(sx.tolist(), sy.tolist(), (np.isfinite(sx) & np.isfinite(sy)).tolist()):
            if ok:
                ctx.emit_marker(ScreenPoint(px, py), self._style)


def sample_range(start: float, stop: float, step: float) -> np.ndarray:
    """``start, start + step, ...`` up to and including the last value not past ``stop``."""
    if not step > 0:
        raise ValueError("step must be > 0")
    if stop < start:
        return np.empty(0, dtype=np.float64)
    count = int(np.floor((stop - start) / step + 1e-9)) + 1
    return float(start) + float(step) * np.arange(count, dtype=np.float64)


class FunctionCurve:
    """Lazily sampled ``y = func(x)`` curve.

    Sampling happens on every render pass, across ``x_range`` or, when unset, the
    x range of the axes it is drawn on. At most ``max_samples`` points are taken per
    pass; a range that would need more is sampled with a coarser step.
    """

    def __init__(
        self,
        func: Callable[[Any], Any],
        *,
        step: float,
        x_range: AxisRange | None = None,
        style: LineStyle | None = None,
        vectorized: bool = False,
        max_samples: int = DEFAULT_MAX_SAMPLES,
    ) -> None:
        if not callable(func):
            raise TypeError("func must be callable")
        if not step > 0:
            raise ValueError("step must be > 0")
        if max_samples < 2:
            raise ValueError("max_samples must be >= 2")
        self._max_samples = int(max_samples)
        self._func = func
        self._step = float(step)
        self._x_range = x_range
        self._style = style if style is not None else LineStyle()
        self._vectorized = vectorized

    @property
    def style(self) -> LineStyle:
        return self._style

    def color(self, color: ColorLike | str, alpha: float = 1.0) -> "FunctionCurve":
        return FunctionCurve(
            self._func,
            step=self._step,
            x_range=self._x_range,
            style=replace(self._style, color=coerce_color(color, alpha)),
            vectorized=self._vectorized,
            max_samples=self._max_samples,
        )

    def sample(self, x_range: AxisRange) -> Line:
        step = self._step
        span = float(x_range.max) - float(x_range.min)
        if span / step + 1.0 > self._max_samples:
            step = span / (self._max_samples - 1)
            LOGGER.debug("curve step widened from %g to %g to stay within %d samples", self._step, step, self._max_samples)
        xs = sample_range(float(x_range.min), float(x_range.max), step)
        if self._vectorized:
            ys = np.asarray(self._func(xs), dtype=np.float64)
            if ys.shape != xs.shape:
                raise ValueError(f"vectorized func returned shape {ys.shape}, expected {xs.shape}")
        else:
            ys = np.fromiter((self._func(xv) for xv in xs.tolist()), dtype=np.float64, count=xs.size)
        return Line((Point2(xv, yv) for xv, yv in zip(xs.tolist(), ys.tolist())), style=self._style)

    def render_axes(self, ctx: AxesContext) -> None:
        rng = self._x_range if self._x_range is not None else ctx.bounds.x
        self.sample(rng).render_axes(ctx)
