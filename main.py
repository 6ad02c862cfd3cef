from __future__ import annotations

import argparse
import importlib.util
import json
from pathlib import Path
from types import ModuleType
from typing import Any

import numpy as np

from axisplot import Rect


def main() -> None:
    parser = argparse.ArgumentParser(prog="axisplot")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run-example", help="Run an example module exposing create_app() headlessly.")
    run.add_argument("module_path", type=Path)
    run.add_argument("--frames", type=int, default=3, help="Number of render passes to run.")
    run.add_argument("--width", type=int, default=800)
    run.add_argument("--height", type=int, default=600)
    args = parser.parse_args()

    if args.command == "run-example":
        summary = run_example(args.module_path, frames=args.frames, width=args.width, height=args.height)
        print(json.dumps(summary, indent=2, sort_keys=True))
        return


def run_example(module_path: Path, *, frames: int, width: int, height: int) -> dict[str, Any]:
    if frames <= 0:
        raise ValueError("frames must be > 0")
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    module = _load_module(module_path)
    create_app = getattr(module, "create_app", None)
    if not callable(create_app):
        raise ValueError(f"{module_path} does not define create_app()")
    app = create_app()
    viewport = Rect.from_size(width, height)

    drawables: list[int] = []
    rgba: np.ndarray | None = None
    for _ in range(frames):
        frame = app.frame(viewport)
        rgba = app.view.paint(viewport, frame)
        drawables.append(frame.drawable_count)
    return {
        "frames": frames,
        "drawables_per_frame": drawables,
        "frame_shape": list(rgba.shape),
        "pixel_std": float(np.std(rgba[:, :, :3])),
        "next_frame_pending": app.view.scheduler.pending,
    }


def _load_module(module_path: Path) -> ModuleType:
    path = module_path.resolve()
    if not path.is_file():
        raise FileNotFoundError(f"example module not found: {path}")
    spec = importlib.util.spec_from_file_location(f"axisplot_example_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ValueError(f"unable to load example module: {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


if __name__ == "__main__":
    main()
