from __future__ import annotations

from decimal import Decimal
import math
import unittest

import numpy as np
import torch

from axisplot import (
    AxesBounds,
    AxesContext,
    AxesModel,
    AxisRange,
    FunctionCurve,
    GeometryAxes,
    Line,
    Marker,
    PlotDataError,
    Points,
    Rect,
    Segment,
    point2,
)
from axisplot.adapters.normalize import normalize_xy
from axisplot.series import sample_range
from axisplot.style import BLUE, DEFAULT_LINE_COLOR, RED, LineStyle, coerce_color


def _render(element: GeometryAxes, bounds: AxesBounds, dest: Rect = Rect(0.0, 0.0, 800.0, 600.0)) -> AxesContext:
    with AxesContext(AxesModel(bounds).snapshot(), dest) as ctx:
        element.render_axes(ctx)
    return ctx


class LineTests(unittest.TestCase):
    def test_segment_count_is_points_minus_one(self) -> None:
        bounds = AxesBounds.from_limits(0.0, 10.0, 0.0, 10.0)
        for n in (0, 1, 2, 7):
            with self.subTest(points=n):
                line = Line([(float(i), float(i)) for i in range(n)])
                ctx = _render(line, bounds)
                self.assertEqual(len(ctx.drawables), max(0, n - 1))

    def test_segments_follow_insertion_order(self) -> None:
        line = Line()
        for p in ((0.0, 0.0), (10.0, 10.0), (5.0, 0.0)):
            line.add_point(p)
        ctx = _render(line, AxesBounds.from_limits(0.0, 10.0, 0.0, 10.0), Rect(0.0, 0.0, 100.0, 100.0))
        segments = [d for d in ctx.drawables if isinstance(d, Segment)]
        self.assertEqual([(s.start.x, s.start.y, s.end.x, s.end.y) for s in segments], [
            (0.0, 100.0, 100.0, 0.0),
            (100.0, 0.0, 50.0, 100.0),
        ])

    def test_style_chain_returns_new_lines(self) -> None:
        base = Line([(0.0, 0.0), (1.0, 1.0)])
        styled = base.color("red").width(3).dash((4, 2))
        self.assertEqual(base.style, LineStyle())
        self.assertEqual(base.style.color, DEFAULT_LINE_COLOR)
        self.assertEqual(styled.style, LineStyle(color=RED, width=3, dash=(4, 2)))
        styled.add_point((2.0, 0.0))
        self.assertEqual(len(base), 2)
        self.assertEqual(len(styled), 3)

    def test_segments_carry_line_style(self) -> None:
        line = Line([(0.0, 0.0), (1.0, 1.0)]).color(BLUE, alpha=0.5)
        ctx = _render(line, AxesBounds.from_limits(0.0, 1.0, 0.0, 1.0))
        self.assertEqual(ctx.drawables[0].style.color, (62, 149, 255, 127))

    def test_non_finite_points_leave_gaps(self) -> None:
        line = Line([(0.0, 0.0), (1.0, math.nan), (2.0, 1.0), (3.0, 2.0), (math.inf, 0.0)])
        ctx = _render(line, AxesBounds.from_limits(0.0, 3.0, 0.0, 2.0))
        self.assertEqual(len(ctx.drawables), 1)

    def test_points_outside_bounds_are_still_emitted(self) -> None:
        line = Line([(-5.0, 0.0), (5.0, 0.0)])
        ctx = _render(line, AxesBounds.from_limits(0.0, 1.0, 0.0, 1.0), Rect(0.0, 0.0, 10.0, 10.0))
        self.assertEqual(ctx.drawables[0].start.x, -50.0)

    def test_from_xy_accepts_torch_and_decimal(self) -> None:
        line = Line.from_xy(torch.tensor([1, 2, 3], dtype=torch.int64))
        self.assertEqual([tuple(p) for p in line.points], [(0.0, 1.0), (1.0, 2.0), (2.0, 3.0)])
        dec = Line.from_xy([Decimal("1.5"), None], x=[0, 1])
        self.assertTrue(math.isnan(dec.points[1].y))

    def test_from_xy_rejects_length_mismatch(self) -> None:
        with self.assertRaises(PlotDataError):
            Line.from_xy([1.0, 2.0], x=[0.0])


class NormalizeTests(unittest.TestCase):
    def test_normalize_decimal_and_mask(self) -> None:
        out = normalize_xy([Decimal("1.0"), None, 3], x=[0, 1, 2])
        self.assertEqual(out.x.dtype, np.float64)
        self.assertEqual(out.mask.tolist(), [True, False, True])

    def test_normalize_rejects_unsupported_and_non_numeric(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy("abc")
        with self.assertRaises(PlotDataError):
            normalize_xy([1.0, "x"])
        with self.assertRaises(PlotDataError):
            normalize_xy(torch.zeros((2, 2)))

    def test_normalize_pandas_dataframe_single_numeric_column(self) -> None:
        try:
            import pandas as pd
        except ImportError:
            self.skipTest("pandas is not installed")
        df = pd.DataFrame({"label": ["a", "b", "c"], "value": [1.0, 2.5, 4.0]})
        out = normalize_xy(data=df)
        self.assertEqual(out.y.tolist(), [1.0, 2.5, 4.0])
        line = Line.from_xy("value", data=df)
        self.assertEqual(len(line), 3)


class PointsTests(unittest.TestCase):
    def test_one_marker_per_finite_point(self) -> None:
        pts = Points([(0.0, 0.0), (1.0, math.nan), (2.0, 2.0)]).color("green").size(4)
        ctx = _render(pts, AxesBounds.from_limits(0.0, 2.0, 0.0, 2.0), Rect(0.0, 0.0, 20.0, 20.0))
        markers = [d for d in ctx.drawables if isinstance(d, Marker)]
        self.assertEqual(len(markers), 2)
        self.assertEqual(markers[1].center.x, 20.0)
        self.assertEqual(markers[0].style.size, 4)
        self.assertEqual(markers[0].style.color, coerce_color("green"))


class FunctionCurveTests(unittest.TestCase):
    def test_sample_range_includes_last_step_not_past_stop(self) -> None:
        xs = sample_range(0.0, 2.0 * math.pi, 0.05)
        self.assertEqual(xs.size, 126)
        self.assertEqual(xs[0], 0.0)
        self.assertAlmostEqual(xs[-1], 6.25)
        self.assertEqual(sample_range(0.0, 1.0, 0.25).tolist(), [0.0, 0.25, 0.5, 0.75, 1.0])
        self.assertEqual(sample_range(1.0, 0.0, 0.25).size, 0)
        with self.assertRaises(ValueError):
            sample_range(0.0, 1.0, 0.0)

    def test_sine_over_full_period_maps_across_width(self) -> None:
        bounds = AxesBounds.from_limits(0.0, 2.0 * math.pi, -1.5, 1.5)
        ctx = _render(FunctionCurve(math.sin, step=0.05), bounds)
        segments = ctx.drawables
        self.assertEqual(len(segments), 125)
        self.assertEqual(segments[0].start.x, 0.0)
        self.assertEqual(segments[0].start.y, 300.0)
        last_x = segments[-1].end.x
        self.assertLessEqual(last_x, 800.0)
        # The final sample stops short of 2*pi by less than one step.
        self.assertLess(800.0 - last_x, 0.05 / (2.0 * math.pi) * 800.0)

    def test_vectorized_and_scalar_sampling_agree(self) -> None:
        rng = AxisRange(0.0, 3.0)
        scalar = FunctionCurve(math.cos, step=0.1).sample(rng)
        vectorized = FunctionCurve(np.cos, step=0.1, vectorized=True).sample(rng)
        self.assertEqual(len(scalar), len(vectorized))
        self.assertTrue(np.allclose([p.y for p in scalar.points], [p.y for p in vectorized.points]))

    def test_explicit_x_range_overrides_axes_range(self) -> None:
        curve = FunctionCurve(lambda x: x, step=0.5, x_range=AxisRange(0.0, 1.0)).color("red")
        ctx = _render(curve, AxesBounds.from_limits(0.0, 10.0, 0.0, 10.0))
        self.assertEqual(len(ctx.drawables), 2)
        self.assertEqual(ctx.drawables[0].style.color, RED)

    def test_sample_count_is_capped_for_wide_ranges(self) -> None:
        curve = FunctionCurve(math.sin, step=0.001, max_samples=11)
        line = curve.sample(AxisRange(0.0, 1000.0))
        self.assertLessEqual(len(line), 11)
        self.assertGreaterEqual(len(line), 10)
        self.assertEqual(line.points[0].x, 0.0)
        self.assertAlmostEqual(line.points[-1].x, 1000.0, delta=100.0)
        self.assertEqual(len(curve.color("red").sample(AxisRange(0.0, 1000.0))), len(line))
        self.assertEqual(len(curve.sample(AxisRange(0.0, 0.005))), 6)

    def test_curve_validates_arguments(self) -> None:
        with self.assertRaises(TypeError):
            FunctionCurve(1.0, step=0.1)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            FunctionCurve(math.sin, step=-0.1)
        with self.assertRaises(ValueError):
            FunctionCurve(math.sin, step=0.1, max_samples=1)

    def test_geometry_protocol_is_runtime_checkable(self) -> None:
        self.assertIsInstance(Line(), GeometryAxes)
        self.assertIsInstance(FunctionCurve(math.sin, step=0.1), GeometryAxes)
        self.assertNotIsInstance(point2(0.0, 0.0), GeometryAxes)


if __name__ == "__main__":
    unittest.main()
