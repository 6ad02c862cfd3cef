from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterator, Sequence

from axisplot.axes import AxesContext, AxesModel, AxesSnapshot
from axisplot.config import RenderConfig
from axisplot.drawables import Drawable, GridLine, Marker, Segment
from axisplot.errors import LayoutError
from axisplot.figure import FigureModel
from axisplot.geometry import Rect
from axisplot.layout import GridLayout, Layout
from axisplot.series import GeometryAxes
from axisplot.sync import Shared


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxesFrame:
    snapshot: AxesSnapshot
    dest: Rect
    drawables: tuple[Drawable, ...]

    def segments(self) -> list[Segment]:
        return [d for d in self.drawables if isinstance(d, Segment)]

    def markers(self) -> list[Marker]:
        return [d for d in self.drawables if isinstance(d, Marker)]

    def grid_lines(self) -> list[GridLine]:
        return [d for d in self.drawables if isinstance(d, GridLine)]


@dataclass(frozen=True)
class PlotFrame:
    index: int
    title: str
    axes: tuple[AxesFrame, ...]

    def __iter__(self) -> Iterator[AxesFrame]:
        return iter(self.axes)


@dataclass(frozen=True)
class FigureFrame:
    """Painter-facing result of one render pass."""

    title: str
    viewport: Rect
    plots: tuple[PlotFrame, ...]

    def __iter__(self) -> Iterator[PlotFrame]:
        return iter(self.plots)

    def axes_frames(self) -> list[AxesFrame]:
        return [axes for plot in self.plots for axes in plot.axes]

    @property
    def drawable_count(self) -> int:
        return sum(len(axes.drawables) for axes in self.axes_frames())


def render_axes(
    model: Shared[AxesModel],
    elements: Sequence[GeometryAxes],
    dest: Rect,
    config: RenderConfig | None = None,
) -> AxesFrame:
    """Render one axes region.

    The snapshot is taken under a short read lock that is released before any
    geometry runs, so long point loops never hold the model.
    """
    cfg = config if config is not None else RenderConfig()
    with model.read() as axes_model:
        snapshot = axes_model.snapshot()
    with AxesContext(snapshot, dest) as ctx:
        if cfg.show_grid:
            ctx.emit_grid(cfg.grid_color, cfg.grid_width)
        for element in elements:
            element.render_axes(ctx)
        if cfg.show_frame:
            ctx.emit_frame(cfg.frame_color)
    return AxesFrame(snapshot=snapshot, dest=dest, drawables=ctx.drawables)


def render_figure(
    figure: FigureModel,
    viewport: Rect,
    *,
    layout: Layout | None = None,
    config: RenderConfig | None = None,
) -> FigureFrame:
    cfg = config if config is not None else RenderConfig()
    resolve = layout if layout is not None else GridLayout()
    rects = resolve(viewport, figure)
    plots = figure.plots
    if len(rects) != len(plots):
        raise LayoutError(f"layout returned {len(rects)} plot region(s) for {len(plots)} plot(s)")

    plot_frames: list[PlotFrame] = []
    for plot_index, (plot, plot_rects) in enumerate(zip(plots, rects)):
        entries = plot.axes
        if len(plot_rects) != len(entries):
            raise LayoutError(
                f"layout returned {len(plot_rects)} axes region(s) for plot {plot_index} with {len(entries)} axes"
            )
        axes_frames = tuple(
            render_axes(entry.model, tuple(entry.elements), dest, cfg) for entry, dest in zip(entries, plot_rects)
        )
        plot_frames.append(PlotFrame(index=plot_index, title=plot.title, axes=axes_frames))

    frame = FigureFrame(title=figure.title, viewport=viewport, plots=tuple(plot_frames))
    LOGGER.log(
        logging.INFO if cfg.debug else logging.DEBUG,
        "rendered figure %r: plots=%d axes=%d drawables=%d",
        figure.title,
        len(frame.plots),
        len(frame.axes_frames()),
        frame.drawable_count,
    )
    return frame
