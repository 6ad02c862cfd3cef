from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import threading
import time
from typing import Any, Callable

import numpy as np

from axisplot.compile import FramePatch, compile_axes_patches, compile_full_frame
from axisplot.config import RenderConfig
from axisplot.figure import FigureModel
from axisplot.geometry import Rect
from axisplot.layout import Layout
from axisplot.raster import paint_frame
from axisplot.render import FigureFrame, render_figure
from axisplot.sync import Shared


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameRequest:
    request_id: int
    reason: str
    ts_ns: int
    coalesced: int = 0


class FrameScheduler:
    """Coalescing "request next frame" trigger.

    Model changes call :meth:`request_frame`; the owning loop picks the request up
    with :meth:`take_pending` or :meth:`wait_for_request` and runs one pass. At most
    one request is pending: repeated requests before the loop catches up merge.
    """

    def __init__(self, on_request: Callable[[FrameRequest], None] | None = None) -> None:
        self._cv = threading.Condition(threading.Lock())
        self._pending: FrameRequest | None = None
        self._next_id = 1
        self._on_request = on_request

    @property
    def pending(self) -> bool:
        with self._cv:
            return self._pending is not None

    def request_frame(self, reason: str = "model-changed") -> bool:
        with self._cv:
            if self._pending is not None:
                self._pending = replace(self._pending, coalesced=self._pending.coalesced + 1)
                LOGGER.debug("frame request coalesced: reason=%s pending_id=%d", reason, self._pending.request_id)
                return False
            request = FrameRequest(request_id=self._next_id, reason=reason, ts_ns=time.time_ns())
            self._next_id += 1
            self._pending = request
            self._cv.notify_all()
        if self._on_request is not None:
            self._on_request(request)
        return True

    def take_pending(self) -> FrameRequest | None:
        with self._cv:
            request = self._pending
            self._pending = None
            return request

    def wait_for_request(self, timeout: float) -> FrameRequest | None:
        if timeout < 0:
            raise ValueError("timeout must be >= 0")
        with self._cv:
            if self._pending is None:
                self._cv.wait_for(lambda: self._pending is not None, timeout=timeout)
            request = self._pending
            self._pending = None
            return request


class FigureView:
    """Boundary between a shared figure model and the window-facing painter.

    ``rebuild`` holds the figure write lock for the clear-and-rebuild; ``render``
    traverses under a read lock and returns an immutable frame that is painted with
    no lock held.
    """

    def __init__(
        self,
        figure: Shared[FigureModel],
        *,
        layout: Layout | None = None,
        config: RenderConfig | None = None,
        scheduler: FrameScheduler | None = None,
    ) -> None:
        self._figure = figure
        self._layout = layout
        self._config = config if config is not None else RenderConfig()
        self.scheduler = scheduler if scheduler is not None else FrameScheduler()
        self._last_frame: FigureFrame | None = None
        figure.subscribe(lambda: self.notify("figure-changed"))

    @property
    def figure(self) -> Shared[FigureModel]:
        return self._figure

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def last_frame(self) -> FigureFrame | None:
        return self._last_frame

    def watch(self, model: Shared[Any], reason: str = "axes-changed") -> Callable[[], None]:
        return model.subscribe(lambda: self.notify(reason))

    def notify(self, reason: str = "model-changed") -> bool:
        return self.scheduler.request_frame(reason)

    def rebuild(self, builder: Callable[[FigureModel], None]) -> None:
        with self._figure.write(notify=False) as figure:
            builder(figure)

    def render(self, viewport: Rect) -> FigureFrame:
        with self._figure.read() as figure:
            frame = render_figure(figure, viewport, layout=self._layout, config=self._config)
        self._last_frame = frame
        return frame

    def run_pass(
        self,
        viewport: Rect,
        builder: Callable[[FigureModel], None] | None = None,
        *,
        defer_next: bool = False,
    ) -> FigureFrame:
        """One clear/rebuild/render cycle; ``defer_next`` schedules the following pass."""
        self.scheduler.take_pending()
        if builder is not None:
            self.rebuild(builder)
        frame = self.render(viewport)
        if defer_next:
            self.notify("deferred")
        return frame

    def paint(self, viewport: Rect, frame: FigureFrame | None = None) -> np.ndarray:
        target = frame if frame is not None else self.render(viewport)
        return paint_frame(target, config=self._config)

    def present(self, viewport: Rect, *, axes_only: bool = False) -> list[FramePatch]:
        frame = self.render(viewport)
        rgba = paint_frame(frame, config=self._config)
        if axes_only:
            return compile_axes_patches(rgba, frame)
        return [compile_full_frame(rgba)]
