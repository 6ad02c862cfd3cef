from .canvas import draw_hline, draw_pixel, draw_vline, fill_rect, new_canvas
from .draw_lines import clip_segment, draw_polyline, draw_segment
from .draw_markers import draw_markers
from .paint import paint_axes, paint_frame

__all__ = [
    "clip_segment",
    "draw_hline",
    "draw_markers",
    "draw_pixel",
    "draw_polyline",
    "draw_segment",
    "draw_vline",
    "fill_rect",
    "new_canvas",
    "paint_axes",
    "paint_frame",
]
