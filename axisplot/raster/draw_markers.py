from __future__ import annotations

import numpy as np

from axisplot.raster.canvas import fill_rect
from axisplot.style import RGBA


def draw_markers(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, size: int = 1) -> None:
    """Filled square markers centred on each (x, y); parts off the canvas are dropped."""
    radius = max(0, size // 2)
    for x, y in zip(xs.astype(np.int64).tolist(), ys.astype(np.int64).tolist()):
        fill_rect(dst, x - radius, y - radius, x + radius, y + radius, color)
