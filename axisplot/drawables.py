from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from axisplot.geometry import Rect, ScreenPoint
from axisplot.style import RGBA, LineStyle, MarkerStyle


@dataclass(frozen=True)
class Segment:
    start: ScreenPoint
    end: ScreenPoint
    style: LineStyle


@dataclass(frozen=True)
class Marker:
    center: ScreenPoint
    style: MarkerStyle


@dataclass(frozen=True)
class GridLine:
    axis: Literal["x", "y"]
    value: float
    start: ScreenPoint
    end: ScreenPoint
    color: RGBA
    width: int = 1


@dataclass(frozen=True)
class FrameRect:
    rect: Rect
    color: RGBA


Drawable: TypeAlias = Segment | Marker | GridLine | FrameRect
