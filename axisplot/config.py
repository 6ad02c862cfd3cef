from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from axisplot.style import RGBA


DEFAULT_BACKGROUND: RGBA = (12, 16, 23, 255)
DEFAULT_PLOT_BACKGROUND: RGBA = (20, 26, 36, 255)
DEFAULT_FRAME_COLOR: RGBA = (60, 67, 78, 255)
DEFAULT_GRID_COLOR: RGBA = (44, 53, 66, 255)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class RenderConfig:
    background: RGBA = DEFAULT_BACKGROUND
    plot_background: RGBA = DEFAULT_PLOT_BACKGROUND
    frame_color: RGBA = DEFAULT_FRAME_COLOR
    grid_color: RGBA = DEFAULT_GRID_COLOR
    grid_width: int = 1
    show_grid: bool = True
    show_frame: bool = True
    debug: bool = False

    def __post_init__(self) -> None:
        if self.grid_width <= 0:
            raise ValueError("grid_width must be > 0")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, prefix: str = "AXISPLOT_") -> "RenderConfig":
        env = os.environ if environ is None else environ
        base = cls()
        return cls(
            show_grid=_env_flag(env, f"{prefix}SHOW_GRID", base.show_grid),
            show_frame=_env_flag(env, f"{prefix}SHOW_FRAME", base.show_frame),
            debug=_env_flag(env, f"{prefix}DEBUG", base.debug),
        )


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ValueError(f"{name} must be one of {sorted(_TRUTHY | _FALSY)}, got {raw!r}")
