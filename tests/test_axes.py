from __future__ import annotations

import threading
import time
import unittest

from axisplot import (
    AxesBounds,
    AxesContext,
    AxesModel,
    AxisRange,
    ConstructionError,
    GridLine,
    GridModel,
    Rect,
    RenderContextError,
    Shared,
    point2,
)
from axisplot.geometry import ScreenPoint
from axisplot.style import LineStyle


def _model() -> AxesModel:
    return AxesModel(AxesBounds.from_limits(0.0, 10.0, -1.0, 1.0), GridModel.from_numbers(10, 8))


class AxesModelTests(unittest.TestCase):
    def test_constructor_validates_types(self) -> None:
        with self.assertRaises(ConstructionError):
            AxesModel((0.0, 1.0))  # type: ignore[arg-type]
        with self.assertRaises(ConstructionError):
            AxesModel(AxesBounds.from_limits(0.0, 1.0, 0.0, 1.0), grid=(1, 1))  # type: ignore[arg-type]

    def test_default_grid_has_no_divisions(self) -> None:
        model = AxesModel(AxesBounds.from_limits(0.0, 1.0, 0.0, 1.0))
        self.assertEqual((model.grid.x_divisions, model.grid.y_divisions), (0, 0))

    def test_mutations_replace_snapshot_and_bump_revision(self) -> None:
        model = _model()
        before = model.snapshot()
        model.set_x_range(AxisRange(0.0, 20.0))
        after = model.snapshot()
        self.assertIsNot(before, after)
        self.assertEqual(before.bounds.x, AxisRange(0.0, 10.0))
        self.assertEqual(after.bounds.x, AxisRange(0.0, 20.0))
        self.assertEqual(after.bounds.y, before.bounds.y)
        self.assertEqual(after.revision, before.revision + 1)

    def test_set_grid_keeps_bounds(self) -> None:
        model = _model()
        model.set_grid(GridModel.from_numbers(2, 2))
        self.assertEqual(model.grid, GridModel.from_numbers(2, 2))
        self.assertEqual(model.bounds, AxesBounds.from_limits(0.0, 10.0, -1.0, 1.0))
        with self.assertRaises(ConstructionError):
            model.set_grid("dense")  # type: ignore[arg-type]

    def test_pan_and_zoom(self) -> None:
        model = _model()
        model.pan(dx=5.0, dy=1.0)
        self.assertEqual(model.bounds, AxesBounds.from_limits(5.0, 15.0, 0.0, 2.0))
        model.zoom(2.0, anchor=point2(5.0, 0.0))
        self.assertEqual(model.bounds, AxesBounds.from_limits(5.0, 10.0, 0.0, 1.0))

    def test_readers_never_observe_mixed_bounds(self) -> None:
        a = AxesBounds.from_limits(0.0, 1.0, 0.0, 1.0)
        b = AxesBounds.from_limits(10.0, 20.0, 10.0, 20.0)
        shared = Shared(AxesModel(a))
        done = threading.Event()
        torn: list[AxesBounds] = []

        def writer() -> None:
            for i in range(500):
                with shared.write(notify=False) as model:
                    model.set_bounds(b if i % 2 else a)
                time.sleep(0)

        def reader() -> None:
            while not done.is_set():
                with shared.read() as model:
                    bounds = model.snapshot().bounds
                if bounds not in (a, b):
                    torn.append(bounds)

        w = threading.Thread(target=writer)
        readers = [threading.Thread(target=reader) for _ in range(3)]
        for t in readers:
            t.start()
        w.start()
        w.join(timeout=10.0)
        done.set()
        for t in readers:
            t.join(timeout=10.0)
        self.assertEqual(torn, [])


class AxesContextTests(unittest.TestCase):
    def test_grid_emission_counts_and_positions(self) -> None:
        dest = Rect(0.0, 0.0, 100.0, 80.0)
        with AxesContext(_model().snapshot(), dest) as ctx:
            count = ctx.emit_grid((1, 2, 3, 255))
        lines = [d for d in ctx.drawables if isinstance(d, GridLine)]
        self.assertEqual(count, 11 + 9)
        self.assertEqual(len(lines), count)
        xs = [line.start.x for line in lines if line.axis == "x"]
        self.assertEqual(xs[0], 0.0)
        self.assertEqual(xs[-1], 100.0)
        ys = [line.start.y for line in lines if line.axis == "y"]
        self.assertEqual(ys[0], 80.0)
        self.assertEqual(ys[-1], 0.0)

    def test_emit_after_close_raises(self) -> None:
        with AxesContext(_model().snapshot(), Rect(0.0, 0.0, 10.0, 10.0)) as ctx:
            ctx.emit_segment(ScreenPoint(0.0, 0.0), ScreenPoint(1.0, 1.0), LineStyle())
        self.assertTrue(ctx.closed)
        self.assertEqual(len(ctx.drawables), 1)
        with self.assertRaises(RenderContextError):
            ctx.emit_segment(ScreenPoint(0.0, 0.0), ScreenPoint(1.0, 1.0), LineStyle())

    def test_close_is_idempotent(self) -> None:
        ctx = AxesContext(_model().snapshot(), Rect(0.0, 0.0, 10.0, 10.0))
        ctx.emit_frame((0, 0, 0, 255))
        first = ctx.close()
        self.assertIs(ctx.close(), first)

    def test_context_uses_its_snapshot_not_live_model(self) -> None:
        model = _model()
        ctx = AxesContext(model.snapshot(), Rect(0.0, 0.0, 100.0, 100.0))
        model.set_x_range(AxisRange(0.0, 100.0))
        self.assertEqual(ctx.data_to_screen(point2(10.0, 1.0)), ScreenPoint(100.0, 0.0))


if __name__ == "__main__":
    unittest.main()
