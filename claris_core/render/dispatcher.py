from __future__ import annotations

import logging
import math

from claris_core.node.color import Color
from claris_core.node.geometry import Point, Scale, Stroke
from claris_core.node.layers import Arc, Circle, Curve, Layer, Line, Polygon, Rectangle, Text, Triangle
from claris_core.node.root import Scene

from .surface import DrawingSurface


LOGGER = logging.getLogger(__name__)
FULL_TURN_DEG = 360.0


def degrees_to_radians(angle: float) -> float:
    return angle * (math.pi / 180.0)


def render_scene(surface: DrawingSurface, scene: Scene) -> None:
    """Paint the background, then every layer back-to-front in document order."""

    paint_background(surface, scene)
    for layer in scene.layers:
        render_layer(surface, layer)


def paint_background(surface: DrawingSurface, scene: Scene) -> None:
    surface.save()
    _set_source(surface, scene.color)
    surface.rectangle(0.0, 0.0, float(scene.width), float(scene.height))
    surface.fill()
    surface.restore()


def render_layer(surface: DrawingSurface, layer: Layer) -> None:
    """Replay one layer between a matching save/restore pair."""

    LOGGER.debug("render %r", layer)
    surface.save()
    try:
        _dispatch(surface, layer)
    finally:
        surface.restore()


def _dispatch(surface: DrawingSurface, layer: Layer) -> None:
    if isinstance(layer, Rectangle):
        _render_rectangle(surface, layer)
        return
    if isinstance(layer, Circle):
        _render_circle(surface, layer)
        return
    if isinstance(layer, Arc):
        _render_arc(surface, layer)
        return
    if isinstance(layer, Triangle):
        _render_closed_path(surface, layer.vertex, layer.color, layer.scale, layer.fill, layer.stroke)
        return
    if isinstance(layer, Polygon):
        _render_closed_path(surface, layer.vertex, layer.color, layer.scale, layer.fill, layer.stroke)
        return
    if isinstance(layer, Line):
        _render_line(surface, layer)
        return
    if isinstance(layer, Curve):
        _render_curve(surface, layer)
        return
    if isinstance(layer, Text):
        _render_text(surface, layer)
        return
    raise TypeError(f"Unsupported layer: {type(layer)!r}")


def _render_rectangle(surface: DrawingSurface, layer: Rectangle) -> None:
    _begin(surface, layer.x, layer.y, layer.color, layer.scale)
    if layer.radius > 0:
        _rounded_rectangle(surface, layer.width, layer.height, layer.radius)
    else:
        surface.rectangle(0.0, 0.0, layer.width, layer.height)
    _paint(surface, layer.fill, layer.stroke)


def _render_circle(surface: DrawingSurface, layer: Circle) -> None:
    _begin(surface, layer.x, layer.y, layer.color, layer.scale)
    surface.arc(0.0, 0.0, layer.radius, degrees_to_radians(0.0), degrees_to_radians(FULL_TURN_DEG))
    _paint(surface, layer.fill, layer.stroke)


def _render_arc(surface: DrawingSurface, layer: Arc) -> None:
    _begin(surface, layer.x, layer.y, layer.color, layer.scale)
    if layer.close:
        surface.move_to(0.0, 0.0)
    surface.arc(0.0, 0.0, layer.radius, degrees_to_radians(layer.start), degrees_to_radians(layer.end))
    if layer.close:
        surface.line_to(0.0, 0.0)
    _paint(surface, layer.fill, layer.stroke)


def _render_closed_path(
    surface: DrawingSurface,
    vertex: tuple[Point, ...],
    color: Color,
    scale: Scale,
    fill: bool,
    stroke: Stroke,
) -> None:
    _begin(surface, 0.0, 0.0, color, scale)
    _polyline(surface, vertex)
    surface.close_path()
    _paint(surface, fill, stroke)


def _render_line(surface: DrawingSurface, layer: Line) -> None:
    _begin(surface, 0.0, 0.0, layer.color, layer.scale)
    _apply_stroke_style(surface, layer.stroke)
    _polyline(surface, layer.points)
    surface.stroke()


def _render_curve(surface: DrawingSurface, layer: Curve) -> None:
    _begin(surface, 0.0, 0.0, layer.color, layer.scale)
    _apply_stroke_style(surface, layer.stroke)
    surface.curve_to(
        layer.start.x,
        layer.start.y,
        layer.mid.x,
        layer.mid.y,
        layer.end.x,
        layer.end.y,
    )
    surface.stroke()


def _render_text(surface: DrawingSurface, layer: Text) -> None:
    surface.translate(layer.x, layer.y)
    surface.move_to(0.0, 0.0)
    _set_source(surface, layer.color)
    surface.scale(layer.scale.x, layer.scale.y)
    surface.select_font_face(layer.family, layer.slant, layer.weight)
    surface.set_font_size(layer.size)
    surface.show_text(layer.text)
    surface.stroke()


def _begin(surface: DrawingSurface, x: float, y: float, color: Color, scale: Scale) -> None:
    surface.translate(x, y)
    _set_source(surface, color)
    surface.scale(scale.x, scale.y)


def _set_source(surface: DrawingSurface, color: Color) -> None:
    r, g, b, a = color.to_source_rgba()
    surface.set_source_color(r, g, b, a)


def _apply_stroke_style(surface: DrawingSurface, stroke: Stroke) -> None:
    surface.set_line_width(stroke.width)
    surface.set_line_cap(stroke.cap)


def _paint(surface: DrawingSurface, fill: bool, stroke: Stroke) -> None:
    if fill:
        surface.fill()
        return
    _apply_stroke_style(surface, stroke)
    surface.stroke()


def _polyline(surface: DrawingSurface, points: tuple[Point, ...]) -> None:
    first, *rest = points
    surface.move_to(first.x, first.y)
    for point in rest:
        surface.line_to(point.x, point.y)


def _rounded_rectangle(surface: DrawingSurface, width: float, height: float, radius: float) -> None:
    r = min(radius, abs(width) / 2.0, abs(height) / 2.0)
    quarter = math.pi / 2.0
    surface.arc(width - r, r, r, -quarter, 0.0)
    surface.arc(width - r, height - r, r, 0.0, quarter)
    surface.arc(r, height - r, r, quarter, 2.0 * quarter)
    surface.arc(r, r, r, 2.0 * quarter, 3.0 * quarter)
    surface.close_path()
