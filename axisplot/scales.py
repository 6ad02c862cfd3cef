from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from axisplot.geometry import AxesBounds, AxisRange, Point2, Rect, ScreenPoint


@dataclass(frozen=True)
class AxesTransform:
    """Affine data -> screen mapping for one axes region.

    x grows to the right from ``dest.left``; y is flipped so ``bounds.y.max`` lands
    on ``dest.top``. A zero-span axis maps every value onto the anchor edge
    (``dest.left`` / ``dest.top``). Nothing is clipped here.
    """

    bounds: AxesBounds
    dest: Rect

    def map_x(self, x: float) -> float:
        return self.dest.left + _fraction(self.bounds.x, x) * self.dest.width

    def map_y(self, y: float) -> float:
        rng = self.bounds.y
        span = rng.span()
        frac = 0.0 if span == 0 else (rng.max - y) / span
        return self.dest.top + frac * self.dest.height

    def data_to_screen(self, point: Point2) -> ScreenPoint:
        return ScreenPoint(self.map_x(point.x), self.map_y(point.y))

    def map_arrays(self, x: Any, y: Any) -> tuple[np.ndarray, np.ndarray]:
        xs = np.asarray(x, dtype=np.float64)
        ys = np.asarray(y, dtype=np.float64)
        xr = self.bounds.x
        yr = self.bounds.y
        x_span = float(xr.span())
        y_span = float(yr.span())
        fx = np.zeros_like(xs) if x_span == 0 else (xs - float(xr.min)) / x_span
        fy = np.zeros_like(ys) if y_span == 0 else (float(yr.max) - ys) / y_span
        return self.dest.left + fx * self.dest.width, self.dest.top + fy * self.dest.height

    def screen_to_data(self, point: ScreenPoint) -> Point2:
        fx = 0.0 if self.dest.width == 0 else (point.x - self.dest.left) / self.dest.width
        fy = 0.0 if self.dest.height == 0 else (point.y - self.dest.top) / self.dest.height
        xr = self.bounds.x
        yr = self.bounds.y
        return Point2(xr.min + fx * xr.span(), yr.max - fy * yr.span())


def _fraction(rng: AxisRange, value: float) -> float:
    span = rng.span()
    if span == 0:
        return 0.0
    return (value - rng.min) / span


def even_positions(rng: AxisRange, divisions: int) -> np.ndarray:
    if rng.is_degenerate:
        return np.asarray([rng.min], dtype=np.float64)
    lo = float(rng.min)
    hi = float(rng.max)
    if divisions == 0:
        return np.asarray([lo, hi], dtype=np.float64)
    out = np.linspace(lo, hi, divisions + 1, dtype=np.float64)
    # linspace pins both endpoints; clip guards the interior against rounding.
    np.clip(out, lo, hi, out=out)
    out[0] = lo
    out[-1] = hi
    return out


def nice_step(span: float, target: int) -> float:
    """Round 1/2/5 x 10^k step giving roughly ``target`` intervals over ``span``."""
    if target <= 0:
        raise ValueError("target must be > 0")
    if not span > 0:
        raise ValueError("span must be > 0")
    rounded_span = _nice_number(span, _SPAN_STEPS)
    return _nice_number(rounded_span / max(target - 1, 1), _STEP_STEPS)


def nice_positions(rng: AxisRange, target: int) -> np.ndarray:
    """Multiples of :func:`nice_step` that fall inside ``rng``, endpoints as fallback."""
    lo = float(rng.min)
    hi = float(rng.max)
    if rng.is_degenerate:
        return np.asarray([lo], dtype=np.float64)
    step = nice_step(hi - lo, target)
    eps = step * 1e-6
    k = np.arange(np.ceil((lo - eps) / step), np.floor((hi + eps) / step) + 1.0, dtype=np.float64)
    out = np.clip(k * step, lo, hi)
    out[np.isclose(out, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    if out.size < 2:
        return np.asarray([lo, hi], dtype=np.float64)
    return out


# (upper bound on the mantissa, nice mantissa); anything past the last bound is 10.
_SPAN_STEPS = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))
_STEP_STEPS = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))


def _nice_number(value: float, table: tuple[tuple[float, float], ...]) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)
    nice = next((mantissa for bound, mantissa in table if frac <= bound), 10.0)
    return float(nice * (10**exp))
