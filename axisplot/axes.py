from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Any

import numpy as np

from axisplot.drawables import Drawable, FrameRect, GridLine, Marker, Segment
from axisplot.errors import ConstructionError, RenderContextError
from axisplot.geometry import AxesBounds, AxisRange, Point2, Rect, ScreenPoint
from axisplot.grid import GridModel
from axisplot.scales import AxesTransform
from axisplot.style import RGBA, LineStyle, MarkerStyle


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxesSnapshot:
    bounds: AxesBounds
    grid: GridModel
    revision: int = 0

    def transform(self, dest: Rect) -> AxesTransform:
        return AxesTransform(bounds=self.bounds, dest=dest)


class AxesModel:
    """Bounds and grid for one axes region.

    All state lives in a single immutable :class:`AxesSnapshot` that mutations
    replace in one assignment; a reader never sees new x with old y. Wrap the
    model in :class:`axisplot.sync.Shared` to hand it to a figure.
    """

    def __init__(self, bounds: AxesBounds, grid: GridModel | None = None) -> None:
        if not isinstance(bounds, AxesBounds):
            raise ConstructionError("AxesModel bounds must be an AxesBounds")
        if grid is not None and not isinstance(grid, GridModel):
            raise ConstructionError("AxesModel grid must be a GridModel")
        self._state = AxesSnapshot(bounds=bounds, grid=grid if grid is not None else GridModel())

    @property
    def bounds(self) -> AxesBounds:
        return self._state.bounds

    @property
    def grid(self) -> GridModel:
        return self._state.grid

    @property
    def revision(self) -> int:
        return self._state.revision

    def snapshot(self) -> AxesSnapshot:
        return self._state

    def set_bounds(self, bounds: AxesBounds) -> None:
        if not isinstance(bounds, AxesBounds):
            raise ConstructionError("AxesModel bounds must be an AxesBounds")
        self._swap(bounds=bounds)

    def set_x_range(self, x: AxisRange) -> None:
        self.set_bounds(self._state.bounds.with_x(x))

    def set_y_range(self, y: AxisRange) -> None:
        self.set_bounds(self._state.bounds.with_y(y))

    def set_grid(self, grid: GridModel) -> None:
        if not isinstance(grid, GridModel):
            raise ConstructionError("AxesModel grid must be a GridModel")
        self._swap(grid=grid)

    def pan(self, dx: float = 0.0, dy: float = 0.0) -> None:
        b = self._state.bounds
        self.set_bounds(AxesBounds(x=b.x.shifted(dx), y=b.y.shifted(dy)))

    def zoom(self, factor: float, anchor: Point2 | None = None) -> None:
        b = self._state.bounds
        ax = None if anchor is None else anchor.x
        ay = None if anchor is None else anchor.y
        self.set_bounds(AxesBounds(x=b.x.zoomed(factor, ax), y=b.y.zoomed(factor, ay)))

    def _swap(self, **changes: Any) -> None:
        current = self._state
        self._state = replace(current, revision=current.revision + 1, **changes)


class AxesContext:
    """Per-pass rendering handle for one axes region.

    Exposes the data -> screen transform and collects drawables. Use it as a
    context manager: leaving the block closes it and freezes :attr:`drawables`.
    """

    def __init__(self, snapshot: AxesSnapshot, dest: Rect) -> None:
        self._snapshot = snapshot
        self._transform = snapshot.transform(dest)
        self._items: list[Drawable] = []
        self._drawables: tuple[Drawable, ...] | None = None
        if snapshot.bounds.x.is_degenerate or snapshot.bounds.y.is_degenerate:
            LOGGER.debug("zero-span axis range anchored to destination edge: %s", snapshot.bounds)

    def __enter__(self) -> "AxesContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def bounds(self) -> AxesBounds:
        return self._snapshot.bounds

    @property
    def grid(self) -> GridModel:
        return self._snapshot.grid

    @property
    def dest(self) -> Rect:
        return self._transform.dest

    @property
    def transform(self) -> AxesTransform:
        return self._transform

    @property
    def closed(self) -> bool:
        return self._drawables is not None

    def data_to_screen(self, point: Point2) -> ScreenPoint:
        return self._transform.data_to_screen(point)

    def map_arrays(self, x: Any, y: Any) -> tuple[np.ndarray, np.ndarray]:
        return self._transform.map_arrays(x, y)

    def emit(self, drawable: Drawable) -> None:
        if self._drawables is not None:
            raise RenderContextError("axes context is closed")
        self._items.append(drawable)

    def emit_segment(self, start: ScreenPoint, end: ScreenPoint, style: LineStyle) -> None:
        self.emit(Segment(start=start, end=end, style=style))

    def emit_marker(self, center: ScreenPoint, style: MarkerStyle) -> None:
        self.emit(Marker(center=center, style=style))

    def emit_frame(self, color: RGBA) -> None:
        self.emit(FrameRect(rect=self.dest, color=color))

    def emit_grid(self, color: RGBA, width: int = 1) -> int:
        xs, ys = self.grid.generate(self.bounds)
        dest = self.dest
        count = 0
        for xv in xs.tolist():
            sx = self._transform.map_x(xv)
            self.emit(GridLine("x", xv, ScreenPoint(sx, dest.top), ScreenPoint(sx, dest.bottom), color, width))
            count += 1
        for yv in ys.tolist():
            sy = self._transform.map_y(yv)
            self.emit(GridLine("y", yv, ScreenPoint(dest.left, sy), ScreenPoint(dest.right, sy), color, width))
            count += 1
        return count

    @property
    def drawables(self) -> tuple[Drawable, ...]:
        if self._drawables is not None:
            return self._drawables
        return tuple(self._items)

    def close(self) -> tuple[Drawable, ...]:
        if self._drawables is None:
            self._drawables = tuple(self._items)
            self._items = []
        return self._drawables
