"""Raster drawing-surface backend for claris scenes."""

from .canvas import composite_coverage, new_canvas
from .fonts import load_font, resolve_font_path
from .surface import RasterSurface

__all__ = [
    "RasterSurface",
    "composite_coverage",
    "load_font",
    "new_canvas",
    "resolve_font_path",
]
