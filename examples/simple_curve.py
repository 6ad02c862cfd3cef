"""Plots y = sin(x) and y = cos(x) over [0, 2π].

The figure is rebuilt from scratch on every pass and each pass defers a request for
the next one, the usual continuous-redraw loop of a windowed host.
"""
from __future__ import annotations

import math

from axisplot import (
    AxesBounds,
    AxesBuilder,
    AxesContext,
    AxesModel,
    AxisRange,
    FigureFrame,
    FigureModel,
    FigureView,
    GridModel,
    Line,
    PlotModel,
    Rect,
    Shared,
    point2,
)
from axisplot.series import sample_range
from axisplot.style import BLUE, RED


class SineCurve:
    def __init__(self, step: float = 0.05) -> None:
        self.step = step

    def render_axes(self, ctx: AxesContext) -> None:
        end = 2.0 * math.pi
        xs = sample_range(0.0, end, self.step).tolist()

        sine = Line().color(BLUE)
        for x in xs:
            sine.add_point(point2(x, math.sin(x)))
        sine.render_axes(ctx)

        cosine = Line().color(RED)
        for x in xs:
            cosine.add_point(point2(x, math.cos(x)))
        cosine.render_axes(ctx)


class CurvePlotApp:
    def __init__(self) -> None:
        self.figure = Shared(FigureModel("Simple Curve Plot - y = sin(x)"))
        bounds = AxesBounds(AxisRange(0.0, 2.0 * math.pi), AxisRange(-1.5, 1.5))
        self.axes_model = Shared(AxesModel(bounds, GridModel.from_numbers(10, 8)))
        self.view = FigureView(self.figure)
        self.view.watch(self.axes_model)

    def build(self, figure: FigureModel) -> None:
        figure.clear_plots()
        figure.add_plot_with(self._build_plot)

    def _build_plot(self, plot: PlotModel) -> None:
        plot.add_axes_with(self.axes_model, self._build_axes)

    def _build_axes(self, axes: AxesBuilder) -> None:
        axes.clear_elements()
        axes.plot(SineCurve())

    def frame(self, viewport: Rect) -> FigureFrame:
        return self.view.run_pass(viewport, self.build, defer_next=True)


def create_app() -> CurvePlotApp:
    return CurvePlotApp()
