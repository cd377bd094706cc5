from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, TypeAlias

from .color import Color, resolve_layer_color
from .document import DocumentNode, as_point
from .errors import InvalidPointError, InvalidVertexError, RequiredFieldError
from .geometry import Point, Scale, Stroke, parse_scale, parse_stroke


DEFAULT_FONT_FAMILY = "serif"
DEFAULT_FONT_SIZE = 14.0


class FontSlant(Enum):
    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"


class FontWeight(Enum):
    NORMAL = "normal"
    BOLD = "bold"


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float
    color: Color
    fill: bool = False
    radius: float = 0.0
    stroke: Stroke = field(default_factory=Stroke)
    scale: Scale = field(default_factory=Scale)

    @classmethod
    def parse(cls, node: DocumentNode) -> "Rectangle":
        return cls(
            x=_require_float(node, "rectangle", "x"),
            y=_require_float(node, "rectangle", "y"),
            width=_require_float(node, "rectangle", "width"),
            height=_require_float(node, "rectangle", "height"),
            fill=_optional_bool(node, "fill"),
            radius=_optional_float(node, "radius", 0.0),
            color=resolve_layer_color(node, "rectangle"),
            stroke=parse_stroke(node),
            scale=parse_scale(node),
        )


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    color: Color
    radius: float = 0.0
    fill: bool = False
    stroke: Stroke = field(default_factory=Stroke)
    scale: Scale = field(default_factory=Scale)

    @classmethod
    def parse(cls, node: DocumentNode) -> "Circle":
        # A missing radius is accepted and draws a degenerate circle.
        return cls(
            x=_require_float(node, "circle", "x"),
            y=_require_float(node, "circle", "y"),
            fill=_optional_bool(node, "fill"),
            radius=_optional_float(node, "radius", 0.0),
            color=resolve_layer_color(node, "circle"),
            stroke=parse_stroke(node),
            scale=parse_scale(node),
        )


@dataclass(frozen=True)
class Arc:
    """Circular arc around (x, y); `start`/`end` are in degrees."""

    x: float
    y: float
    start: float
    end: float
    radius: float
    color: Color
    fill: bool = False
    close: bool = False
    stroke: Stroke = field(default_factory=Stroke)
    scale: Scale = field(default_factory=Scale)

    @classmethod
    def parse(cls, node: DocumentNode) -> "Arc":
        return cls(
            x=_require_float(node, "arc", "x"),
            y=_require_float(node, "arc", "y"),
            start=_require_float(node, "arc", "start"),
            end=_require_float(node, "arc", "end"),
            fill=_optional_bool(node, "fill"),
            close=_optional_bool(node, "close"),
            radius=_require_float(node, "arc", "radius"),
            color=resolve_layer_color(node, "arc"),
            stroke=parse_stroke(node),
            scale=parse_scale(node),
        )


@dataclass(frozen=True)
class Triangle:
    vertex: tuple[Point, Point, Point]
    color: Color
    fill: bool = False
    stroke: Stroke = field(default_factory=Stroke)
    scale: Scale = field(default_factory=Scale)

    def __post_init__(self) -> None:
        if len(self.vertex) != 3:
            raise InvalidVertexError()

    @property
    def a(self) -> Point:
        return self.vertex[0]

    @property
    def b(self) -> Point:
        return self.vertex[1]

    @property
    def c(self) -> Point:
        return self.vertex[2]

    @classmethod
    def parse(cls, node: DocumentNode) -> "Triangle":
        fill = _optional_bool(node, "fill")
        color = resolve_layer_color(node, "triangle")
        stroke = parse_stroke(node)
        scale = parse_scale(node)
        raw = node.get_array("vertex")
        if raw is None:
            raise RequiredFieldError("triangle", "vertex")
        if len(raw) != 3:
            raise InvalidVertexError()
        a, b, c = _parse_points(raw)
        return cls(vertex=(a, b, c), color=color, fill=fill, stroke=stroke, scale=scale)


@dataclass(frozen=True)
class Polygon:
    vertex: tuple[Point, ...]
    color: Color
    fill: bool = False
    stroke: Stroke = field(default_factory=Stroke)
    scale: Scale = field(default_factory=Scale)

    def __post_init__(self) -> None:
        if len(self.vertex) < 2:
            raise InvalidVertexError()

    @classmethod
    def parse(cls, node: DocumentNode) -> "Polygon":
        fill = _optional_bool(node, "fill")
        color = resolve_layer_color(node, "polygon")
        stroke = parse_stroke(node)
        scale = parse_scale(node)
        raw = node.get_array("vertex")
        if raw is None:
            raise RequiredFieldError("polygon", "vertex")
        if len(raw) < 2:
            raise InvalidVertexError()
        return cls(vertex=_parse_points(raw), color=color, fill=fill, stroke=stroke, scale=scale)


@dataclass(frozen=True)
class Line:
    """Open polyline; always stroked."""

    points: tuple[Point, ...]
    color: Color
    stroke: Stroke = field(default_factory=Stroke)
    scale: Scale = field(default_factory=Scale)

    def __post_init__(self) -> None:
        if not self.points:
            raise InvalidPointError()

    @classmethod
    def parse(cls, node: DocumentNode) -> "Line":
        color = resolve_layer_color(node, "line")
        stroke = parse_stroke(node)
        scale = parse_scale(node)
        raw = node.get_array("points")
        if raw is None:
            raise RequiredFieldError("line", "points")
        if not raw:
            raise InvalidPointError()
        return cls(points=_parse_points(raw), color=color, stroke=stroke, scale=scale)


@dataclass(frozen=True)
class Curve:
    """Cubic segment with control points `start` and `mid` ending at `end`."""

    start: Point
    mid: Point
    end: Point
    color: Color
    stroke: Stroke = field(default_factory=Stroke)
    scale: Scale = field(default_factory=Scale)

    @classmethod
    def parse(cls, node: DocumentNode) -> "Curve":
        return cls(
            color=resolve_layer_color(node, "curve"),
            stroke=parse_stroke(node),
            scale=parse_scale(node),
            start=_require_point(node, "curve", "start"),
            mid=_require_point(node, "curve", "mid"),
            end=_require_point(node, "curve", "end"),
        )


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    color: Color
    family: str = DEFAULT_FONT_FAMILY
    size: float = DEFAULT_FONT_SIZE
    weight: FontWeight = FontWeight.NORMAL
    slant: FontSlant = FontSlant.NORMAL
    scale: Scale = field(default_factory=Scale)

    @classmethod
    def parse(cls, node: DocumentNode) -> "Text":
        x = _require_float(node, "text", "x")
        y = _require_float(node, "text", "y")
        color = resolve_layer_color(node, "text")
        scale = parse_scale(node)
        text = node.get_string("text")
        if text is None:
            raise RequiredFieldError("text", "text")
        family = node.get_string("family")
        return cls(
            x=x,
            y=y,
            text=text,
            color=color,
            family=DEFAULT_FONT_FAMILY if family is None else family,
            size=_optional_float(node, "size", DEFAULT_FONT_SIZE),
            weight=FontWeight.BOLD if node.get_string("weight") == "bold" else FontWeight.NORMAL,
            slant=_parse_slant(node.get_string("slant")),
            scale=scale,
        )


Layer: TypeAlias = Rectangle | Circle | Arc | Triangle | Polygon | Line | Curve | Text

LAYER_PARSERS: dict[str, Callable[[DocumentNode], Layer]] = {
    "rectangle": Rectangle.parse,
    "circle": Circle.parse,
    "arc": Arc.parse,
    "triangle": Triangle.parse,
    "polygon": Polygon.parse,
    "line": Line.parse,
    "curve": Curve.parse,
    "text": Text.parse,
}


def _require_float(node: DocumentNode, context: str, key: str) -> float:
    value = node.get_float(key)
    if value is None:
        raise RequiredFieldError(context, key)
    return value


def _optional_float(node: DocumentNode, key: str, default: float) -> float:
    value = node.get_float(key)
    return default if value is None else value


def _optional_bool(node: DocumentNode, key: str) -> bool:
    value = node.get_bool(key)
    return False if value is None else value


def _require_point(node: DocumentNode, context: str, key: str) -> Point:
    raw = node.get_array(key)
    if raw is None:
        raise RequiredFieldError(context, key)
    point = as_point(raw)
    if point is None:
        raise InvalidPointError()
    return point


def _parse_points(raw: list[Any]) -> tuple[Point, ...]:
    points: list[Point] = []
    for item in raw:
        point = as_point(item)
        if point is None:
            raise InvalidPointError()
        points.append(point)
    return tuple(points)


def _parse_slant(name: str | None) -> FontSlant:
    if name == "italic":
        return FontSlant.ITALIC
    if name == "oblique":
        return FontSlant.OBLIQUE
    return FontSlant.NORMAL
