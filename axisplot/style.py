from __future__ import annotations

from dataclasses import dataclass
import numbers


RGBA = tuple[int, int, int, int]
ColorLike = tuple[int, int, int] | tuple[int, int, int, int]

BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)
BLUE: RGBA = (62, 149, 255, 255)
RED: RGBA = (235, 87, 87, 255)
GREEN: RGBA = (103, 204, 131, 255)
ORANGE: RGBA = (255, 165, 0, 255)
GRAY: RGBA = (124, 138, 156, 255)

NAMED_COLORS: dict[str, RGBA] = {
    "black": BLACK,
    "white": WHITE,
    "blue": BLUE,
    "red": RED,
    "green": GREEN,
    "orange": ORANGE,
    "gray": GRAY,
}

DEFAULT_LINE_COLOR: RGBA = BLUE
DEFAULT_MARKER_COLOR: RGBA = ORANGE


def coerce_color(color: ColorLike | str, alpha: float = 1.0) -> RGBA:
    if isinstance(color, str):
        key = color.strip().lower()
        if key not in NAMED_COLORS:
            raise ValueError(f"unknown color name: {color!r}")
        color = NAMED_COLORS[key]
    if len(color) not in (3, 4):
        raise ValueError("color must have 3 (RGB) or 4 (RGBA) channels")
    for channel in color:
        if not isinstance(channel, numbers.Integral) or isinstance(channel, bool) or not 0 <= channel <= 255:
            raise ValueError(f"color channels must be integers in [0, 255], got {color!r}")
    a = max(0.0, min(1.0, alpha))
    if len(color) == 3:
        r, g, b = color
        return (int(r), int(g), int(b), int(a * 255))
    r, g, b, base_a = color
    return (int(r), int(g), int(b), int(a * base_a))


@dataclass(frozen=True)
class LineStyle:
    color: RGBA = DEFAULT_LINE_COLOR
    width: int = 1
    dash: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("line width must be > 0")
        if self.dash is not None:
            if not self.dash:
                raise ValueError("dash pattern must not be empty")
            if any(step <= 0 for step in self.dash):
                raise ValueError("dash pattern lengths must be > 0")


@dataclass(frozen=True)
class MarkerStyle:
    color: RGBA = DEFAULT_MARKER_COLOR
    size: int = 2

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("marker size must be > 0")
