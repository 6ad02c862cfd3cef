from __future__ import annotations

from dataclasses import dataclass
import numbers
from typing import Literal

import numpy as np

from axisplot.errors import InvalidGridError
from axisplot.geometry import AxesBounds, AxisRange
from axisplot.scales import even_positions, nice_positions


GridMode = Literal["numbers", "nice"]


@dataclass(frozen=True)
class GridModel:
    """Division counts for an axes grid.

    Holds no coordinates: positions are derived from whatever bounds are passed to
    :meth:`generate`, so one grid can serve axes with different ranges.

    ``mode="numbers"`` splits each axis into exactly ``divisions`` equal parts
    (``divisions + 1`` positions, both endpoints included; zero divisions gives the
    two endpoints). ``mode="nice"`` treats the counts as a target and picks round
    1/2/5 steps that stay inside the bounds.
    """

    x_divisions: int = 0
    y_divisions: int = 0
    mode: GridMode = "numbers"

    def __post_init__(self) -> None:
        for name in ("x_divisions", "y_divisions"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral) or isinstance(value, bool):
                raise InvalidGridError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidGridError(f"{name} must be >= 0, got {value}")
        if self.mode not in ("numbers", "nice"):
            raise InvalidGridError(f"unsupported grid mode: {self.mode!r}")

    @classmethod
    def from_numbers(cls, x_divisions: int, y_divisions: int) -> "GridModel":
        return cls(x_divisions=x_divisions, y_divisions=y_divisions, mode="numbers")

    @classmethod
    def nice(cls, x_target: int, y_target: int) -> "GridModel":
        return cls(x_divisions=x_target, y_divisions=y_target, mode="nice")

    def generate(self, bounds: AxesBounds) -> tuple[np.ndarray, np.ndarray]:
        return (
            self._positions(bounds.x, int(self.x_divisions)),
            self._positions(bounds.y, int(self.y_divisions)),
        )

    def _positions(self, rng: AxisRange, divisions: int) -> np.ndarray:
        if self.mode == "numbers":
            return even_positions(rng, divisions)
        return nice_positions(rng, max(1, divisions))
