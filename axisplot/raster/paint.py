from __future__ import annotations

import numpy as np

from axisplot.config import RenderConfig
from axisplot.drawables import FrameRect, GridLine, Marker, Segment
from axisplot.geometry import Rect
from axisplot.raster.canvas import draw_hline, draw_vline, fill_rect, new_canvas
from axisplot.raster.draw_lines import draw_polyline
from axisplot.raster.draw_markers import draw_markers
from axisplot.render import AxesFrame, FigureFrame
from axisplot.style import LineStyle


class _PixelMapper:
    """Maps logical coordinates inside ``dest`` onto pixel centres of its view."""

    def __init__(self, dest: Rect, width: int, height: int) -> None:
        self._dest = dest
        self._sx = 0.0 if dest.width == 0 else (width - 1) / dest.width
        self._sy = 0.0 if dest.height == 0 else (height - 1) / dest.height

    def xs(self, values: np.ndarray) -> np.ndarray:
        return np.rint((values - self._dest.left) * self._sx)

    def ys(self, values: np.ndarray) -> np.ndarray:
        return np.rint((values - self._dest.top) * self._sy)

    def x(self, value: float) -> int:
        return int(round((value - self._dest.left) * self._sx))

    def y(self, value: float) -> int:
        return int(round((value - self._dest.top) * self._sy))


def paint_frame(
    frame: FigureFrame,
    *,
    width: int | None = None,
    height: int | None = None,
    config: RenderConfig | None = None,
) -> np.ndarray:
    """Rasterize a rendered figure into an ``(H, W, 4)`` uint8 RGBA array."""
    cfg = config if config is not None else RenderConfig()
    _, _, vx1, vy1 = frame.viewport.pixel_bounds()
    canvas = new_canvas(
        width if width is not None else max(1, vx1),
        height if height is not None else max(1, vy1),
        color=cfg.background,
    )
    for axes in frame.axes_frames():
        paint_axes(canvas, axes, plot_background=cfg.plot_background)
    return canvas


def paint_axes(
    canvas: np.ndarray,
    axes: AxesFrame,
    *,
    plot_background: tuple[int, int, int, int] | None = None,
) -> tuple[int, int, int, int] | None:
    """Paint one axes frame clipped to its destination; returns the touched (x, y, w, h)."""
    x0, y0, x1, y1 = axes.dest.pixel_bounds()
    x0 = max(0, x0)
    y0 = max(0, y0)
    x1 = min(canvas.shape[1], x1)
    y1 = min(canvas.shape[0], y1)
    if x1 <= x0 or y1 <= y0:
        return None
    view = canvas[y0:y1, x0:x1]
    h, w = view.shape[:2]
    if plot_background is not None:
        fill_rect(view, 0, 0, w - 1, h - 1, plot_background)

    mapper = _PixelMapper(axes.dest, w, h)
    frames: list[FrameRect] = []
    run_style: LineStyle | None = None
    run_x: list[float] = []
    run_y: list[float] = []

    def flush() -> None:
        nonlocal run_style
        if run_style is not None and len(run_x) >= 2:
            draw_polyline(
                view,
                mapper.xs(np.asarray(run_x, dtype=np.float64)),
                mapper.ys(np.asarray(run_y, dtype=np.float64)),
                color=run_style.color,
                width=run_style.width,
                dash=run_style.dash,
            )
        run_style = None
        run_x.clear()
        run_y.clear()

    for item in axes.drawables:
        if isinstance(item, Segment):
            # Consecutive segments sharing an endpoint and style are one polyline.
            connected = run_style == item.style and run_x and (run_x[-1], run_y[-1]) == (item.start.x, item.start.y)
            if not connected:
                flush()
                run_style = item.style
                run_x.append(item.start.x)
                run_y.append(item.start.y)
            run_x.append(item.end.x)
            run_y.append(item.end.y)
            continue
        flush()
        if isinstance(item, GridLine):
            if item.axis == "x":
                draw_vline(view, mapper.x(item.start.x), mapper.y(item.start.y), mapper.y(item.end.y), item.color)
            else:
                draw_hline(view, mapper.x(item.start.x), mapper.x(item.end.x), mapper.y(item.start.y), item.color)
        elif isinstance(item, Marker):
            draw_markers(
                view,
                mapper.xs(np.asarray([item.center.x], dtype=np.float64)),
                mapper.ys(np.asarray([item.center.y], dtype=np.float64)),
                color=item.style.color,
                size=item.style.size,
            )
        elif isinstance(item, FrameRect):
            frames.append(item)
    flush()

    for item in frames:
        draw_hline(view, 0, w - 1, 0, item.color)
        draw_hline(view, 0, w - 1, h - 1, item.color)
        draw_vline(view, 0, 0, h - 1, item.color)
        draw_vline(view, w - 1, 0, h - 1, item.color)
    return (x0, y0, x1 - x0, y1 - y0)
