from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable

from axisplot.axes import AxesModel
from axisplot.series import GeometryAxes
from axisplot.sync import Shared


LOGGER = logging.getLogger(__name__)


@dataclass
class AxesEntry:
    model: Shared[AxesModel]
    elements: list[GeometryAxes] = field(default_factory=list)


class AxesBuilder:
    """Handle passed to ``add_axes_with`` builders for attaching geometry."""

    def __init__(self, entry: AxesEntry) -> None:
        self._entry = entry

    @property
    def model(self) -> Shared[AxesModel]:
        return self._entry.model

    @property
    def elements(self) -> tuple[GeometryAxes, ...]:
        return tuple(self._entry.elements)

    def plot(self, geometry: GeometryAxes) -> "AxesBuilder":
        if not isinstance(geometry, GeometryAxes):
            raise TypeError(f"geometry must implement render_axes(ctx), got {type(geometry)!r}")
        self._entry.elements.append(geometry)
        return self

    def clear_elements(self) -> "AxesBuilder":
        self._entry.elements.clear()
        return self


class PlotModel:
    def __init__(self, title: str = "") -> None:
        self.title = title
        self._axes: list[AxesEntry] = []

    @property
    def axes(self) -> tuple[AxesEntry, ...]:
        return tuple(self._axes)

    def __len__(self) -> int:
        return len(self._axes)

    def add_axes_with(
        self,
        model: Shared[AxesModel],
        builder: Callable[[AxesBuilder], None] | None = None,
    ) -> AxesBuilder:
        """Attach ``model`` by reference and hand its geometry list to ``builder``.

        Attaching a model that is already part of this plot reuses its entry, so
        existing geometry is kept until the builder calls ``clear_elements``.
        """
        if not isinstance(model, Shared):
            raise TypeError("add_axes_with expects a Shared[AxesModel] handle")
        entry = next((e for e in self._axes if e.model is model), None)
        if entry is None:
            entry = AxesEntry(model=model)
            self._axes.append(entry)
        handle = AxesBuilder(entry)
        if builder is not None:
            builder(handle)
        return handle

    def remove_axes(self, model: Shared[AxesModel]) -> bool:
        for i, entry in enumerate(self._axes):
            if entry.model is model:
                del self._axes[i]
                return True
        return False


class FigureModel:
    """Top-level container of plots, rebuilt from scratch on each render pass."""

    def __init__(self, title: str = "") -> None:
        self.title = title
        self._plots: list[PlotModel] = []

    @property
    def plots(self) -> tuple[PlotModel, ...]:
        return tuple(self._plots)

    @property
    def is_empty(self) -> bool:
        return not self._plots

    def __len__(self) -> int:
        return len(self._plots)

    def clear_plots(self) -> None:
        if self._plots:
            LOGGER.debug("clearing %d plot(s) from figure %r", len(self._plots), self.title)
        self._plots.clear()

    def add_plot_with(self, builder: Callable[[PlotModel], None] | None = None, *, title: str = "") -> PlotModel:
        plot = PlotModel(title=title)
        if builder is not None:
            builder(plot)
        self._plots.append(plot)
        return plot
