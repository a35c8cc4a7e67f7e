from .backend import RasterBackend
from .canvas import blend_mask, draw_hline, draw_pixel, draw_vline, fill_rect, new_canvas
from .draw_lines import draw_polyline, draw_segment
from .draw_shapes import fill_circle, fill_polygon
from .draw_text import draw_text, draw_text_in_box, text_size

__all__ = [
    "RasterBackend",
    "blend_mask",
    "draw_hline",
    "draw_pixel",
    "draw_polyline",
    "draw_segment",
    "draw_text",
    "draw_text_in_box",
    "draw_vline",
    "fill_circle",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
    "text_size",
]
