from __future__ import annotations

from dataclasses import dataclass, replace
import math
import numbers
from typing import Any, Iterator

import numpy as np

from axisplot.errors import ConstructionError, InvalidRangeError, PlotDataError


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class Point2:
    """A point in data space."""

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


def point2(x: float, y: float) -> Point2:
    return Point2(x=x, y=y)


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Rect:
    """Destination rectangle in screen/logical units, y growing downward."""

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("left", "top", "width", "height"):
            value = getattr(self, name)
            if not _is_real(value) or not math.isfinite(value):
                raise ValueError(f"Rect {name} must be a finite number")
        if self.width < 0 or self.height < 0:
            raise ValueError("Rect width/height must be >= 0")

    @classmethod
    def from_size(cls, width: float, height: float) -> "Rect":
        return cls(left=0.0, top=0.0, width=width, height=height)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def inset(self, left: float = 0.0, top: float = 0.0, right: float = 0.0, bottom: float = 0.0) -> "Rect":
        width = max(0.0, self.width - left - right)
        height = max(0.0, self.height - top - bottom)
        return Rect(left=self.left + left, top=self.top + top, width=width, height=height)

    def pixel_bounds(self) -> tuple[int, int, int, int]:
        """Integer (x0, y0, x1, y1) covering the rect, x1/y1 exclusive."""
        x0 = int(math.floor(self.left))
        y0 = int(math.floor(self.top))
        x1 = int(math.ceil(self.right))
        y1 = int(math.ceil(self.bottom))
        return (x0, y0, max(x0, x1), max(y0, y1))


@dataclass(frozen=True)
class AxisRange:
    """Closed 1-D data interval ``[min, max]``; ``min == max`` is a valid zero-span range."""

    min: float
    max: float

    def __post_init__(self) -> None:
        for name in ("min", "max"):
            value = getattr(self, name)
            if not _is_real(value):
                raise InvalidRangeError(f"axis range {name} must be a real number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidRangeError(f"axis range {name} must be finite, got {value!r}")
        if self.min > self.max:
            raise InvalidRangeError(f"axis range min must be <= max: {self.min!r} > {self.max!r}")
        if not math.isfinite(float(self.max) - float(self.min)):
            raise InvalidRangeError(f"axis range span overflows: [{self.min!r}, {self.max!r}]")

    @classmethod
    def from_values(cls, values: Any) -> "AxisRange":
        arr = np.asarray(values, dtype=np.float64).ravel()
        finite = arr[np.isfinite(arr)]
        if finite.size == 0:
            raise PlotDataError("cannot derive an axis range without finite values")
        return cls(float(np.min(finite)), float(np.max(finite)))

    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        return self.max == self.min

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def fraction(self, value: float) -> float:
        span = self.span()
        if span == 0:
            return 0.0
        return (value - self.min) / span

    def lerp(self, t: float) -> float:
        if t == 1.0:
            return self.max
        return self.min + t * self.span()

    def union(self, other: "AxisRange") -> "AxisRange":
        return AxisRange(min(self.min, other.min), max(self.max, other.max))

    def padded(self, ratio: float) -> "AxisRange":
        if ratio < 0:
            raise ValueError("pad ratio must be >= 0")
        if self.is_degenerate:
            delta = max(1.0, abs(self.min) * ratio)
            return AxisRange(self.min - delta, self.max + delta)
        pad = self.span() * ratio
        return AxisRange(self.min - pad, self.max + pad)

    def shifted(self, delta: float) -> "AxisRange":
        return AxisRange(self.min + delta, self.max + delta)

    def zoomed(self, factor: float, anchor: float | None = None) -> "AxisRange":
        if not _is_real(factor) or not math.isfinite(factor) or factor <= 0:
            raise ValueError("zoom factor must be a finite number > 0")
        center = (self.min + self.max) * 0.5 if anchor is None else float(anchor)
        lo = center - (center - self.min) / factor
        hi = center + (self.max - center) / factor
        return AxisRange(min(lo, hi), max(lo, hi))


@dataclass(frozen=True)
class AxesBounds:
    x: AxisRange
    y: AxisRange

    def __post_init__(self) -> None:
        if not isinstance(self.x, AxisRange) or not isinstance(self.y, AxisRange):
            raise ConstructionError("AxesBounds requires AxisRange values for x and y")

    @classmethod
    def from_limits(cls, xmin: float, xmax: float, ymin: float, ymax: float) -> "AxesBounds":
        return cls(x=AxisRange(xmin, xmax), y=AxisRange(ymin, ymax))

    def with_x(self, x: AxisRange) -> "AxesBounds":
        return replace(self, x=x)

    def with_y(self, y: AxisRange) -> "AxesBounds":
        return replace(self, y=y)
