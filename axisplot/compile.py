from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import torch

from axisplot.render import FigureFrame


@dataclass(frozen=True)
class FramePatch:
    """RGBA tensor payload for a presenter, placed at (x, y) on its surface."""

    x: int
    y: int
    width: int
    height: int
    rect_h_w_4: torch.Tensor


def _check_rgba(frame_rgba: np.ndarray) -> None:
    if frame_rgba.dtype != np.uint8:
        raise ValueError("frame_rgba must be uint8")
    if frame_rgba.ndim != 3 or frame_rgba.shape[2] != 4:
        raise ValueError("frame_rgba must have shape (H, W, 4)")


def compile_full_frame(frame_rgba: np.ndarray) -> FramePatch:
    _check_rgba(frame_rgba)
    height, width, _ = frame_rgba.shape
    tensor = torch.from_numpy(np.ascontiguousarray(frame_rgba))
    return FramePatch(x=0, y=0, width=width, height=height, rect_h_w_4=tensor)


def compile_rect_patch(frame_rgba: np.ndarray, x: int, y: int, width: int, height: int) -> FramePatch:
    _check_rgba(frame_rgba)
    if width <= 0 or height <= 0:
        raise ValueError("rect width/height must be > 0")
    if x < 0 or y < 0:
        raise ValueError("rect x/y must be >= 0")
    if x + width > frame_rgba.shape[1] or y + height > frame_rgba.shape[0]:
        raise ValueError("rect exceeds frame bounds")
    patch = torch.from_numpy(np.ascontiguousarray(frame_rgba[y : y + height, x : x + width]))
    return FramePatch(x=x, y=y, width=width, height=height, rect_h_w_4=patch)


def compile_axes_patches(frame_rgba: np.ndarray, frame: FigureFrame) -> list[FramePatch]:
    """One patch per axes region, clipped to the painted frame; empty regions are skipped."""
    _check_rgba(frame_rgba)
    frame_h, frame_w, _ = frame_rgba.shape
    patches: list[FramePatch] = []
    for axes in frame.axes_frames():
        x0, y0, x1, y1 = axes.dest.pixel_bounds()
        x0 = max(0, x0)
        y0 = max(0, y0)
        x1 = min(frame_w, x1)
        y1 = min(frame_h, y1)
        if x1 <= x0 or y1 <= y0:
            continue
        patches.append(compile_rect_patch(frame_rgba, x0, y0, x1 - x0, y1 - y0))
    return patches
