from .color import TRANSPARENT_BLACK, Color, resolve_layer_color
from .document import DocumentNode, MappingDocument, as_point
from .errors import (
    InvalidColorError,
    InvalidLayerCountError,
    InvalidLayerDefineError,
    InvalidLayerError,
    InvalidPointError,
    InvalidVertexError,
    NodeError,
    RequiredFieldError,
    UnknownLayerError,
)
from .geometry import LineCap, Point, Scale, Stroke
from .layers import (
    LAYER_PARSERS,
    Arc,
    Circle,
    Curve,
    FontSlant,
    FontWeight,
    Layer,
    Line,
    Polygon,
    Rectangle,
    Text,
    Triangle,
)
from .root import LayerDiagnostic, Scene, parse_layer

__all__ = [
    "Arc",
    "Circle",
    "Color",
    "Curve",
    "DocumentNode",
    "FontSlant",
    "FontWeight",
    "InvalidColorError",
    "InvalidLayerCountError",
    "InvalidLayerDefineError",
    "InvalidLayerError",
    "InvalidPointError",
    "InvalidVertexError",
    "LAYER_PARSERS",
    "Layer",
    "LayerDiagnostic",
    "Line",
    "LineCap",
    "MappingDocument",
    "NodeError",
    "Point",
    "Polygon",
    "Rectangle",
    "RequiredFieldError",
    "Scale",
    "Scene",
    "Stroke",
    "TRANSPARENT_BLACK",
    "Text",
    "Triangle",
    "UnknownLayerError",
    "as_point",
    "parse_layer",
    "resolve_layer_color",
]
