from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeAlias

from axisplot.errors import LayoutError
from axisplot.figure import FigureModel
from axisplot.geometry import Rect


Layout: TypeAlias = Callable[[Rect, FigureModel], list[list[Rect]]]


@dataclass(frozen=True)
class GridLayout:
    """Plots stacked top to bottom; the axes of one plot sit side by side.

    Each axes cell is inset by the gutters (room the painter may use for ticks and
    labels); gutters shrink on small cells so the data region stays usable.
    """

    margins: tuple[float, float, float, float] = (2.0, 2.0, 2.0, 2.0)
    gap: tuple[float, float] = (8.0, 8.0)
    gutters: tuple[float, float, float, float] = (48.0, 16.0, 16.0, 32.0)

    def __post_init__(self) -> None:
        if any(v < 0 for v in (*self.margins, *self.gap, *self.gutters)):
            raise ValueError("layout margins, gaps and gutters must be >= 0")

    def __call__(self, viewport: Rect, figure: FigureModel) -> list[list[Rect]]:
        plots = figure.plots
        if not plots:
            return []
        margin_left, margin_right, margin_top, margin_bottom = self.margins
        gap_x, gap_y = self.gap
        inner = viewport.inset(margin_left, margin_top, margin_right, margin_bottom)
        rows = self.split(inner, count=len(plots), gap=gap_y, vertical=True)
        out: list[list[Rect]] = []
        for row, plot in zip(rows, plots):
            if len(plot) == 0:
                out.append([])
                continue
            cells = self.split(row, count=len(plot), gap=gap_x, vertical=False)
            out.append([self.data_region(cell) for cell in cells])
        return out

    @staticmethod
    def split(rect: Rect, *, count: int, gap: float, vertical: bool) -> list[Rect]:
        if count <= 0:
            raise ValueError("count must be > 0")
        total = rect.height if vertical else rect.width
        size = (total - gap * (count - 1)) / count
        if size < 1.0:
            raise LayoutError(f"region too small to split into {count} cells: {rect}")
        cells: list[Rect] = []
        for i in range(count):
            offset = i * (size + gap)
            if vertical:
                cells.append(Rect(rect.left, rect.top + offset, rect.width, size))
            else:
                cells.append(Rect(rect.left + offset, rect.top, size, rect.height))
        return cells

    def data_region(self, cell: Rect) -> Rect:
        g_left, g_right, g_top, g_bottom = self.gutters
        left = min(g_left, max(8.0, cell.width / 4))
        right = min(g_right, max(8.0, cell.width / 8))
        top = min(g_top, max(8.0, cell.height / 5))
        bottom = min(g_bottom, max(8.0, cell.height / 4))
        region = cell.inset(left, top, right, bottom)
        if region.width < 1.0 or region.height < 1.0:
            raise LayoutError(f"axes cell too small for a data region: {cell}")
        return region
