# Height field preview rendering
from render.preview import build_color_lut, render_height_preview, save_height_preview

__all__ = [
    'build_color_lut',
    'render_height_preview',
    'save_height_preview',
]
