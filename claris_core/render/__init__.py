from .dispatcher import degrees_to_radians, paint_background, render_layer, render_scene
from .surface import DrawingSurface

__all__ = [
    "DrawingSurface",
    "degrees_to_radians",
    "paint_background",
    "render_layer",
    "render_scene",
]
