"""Scene model, render dispatch and compile pipeline for claris documents."""

from .compiler import (
    CompileError,
    Compiler,
    ExportError,
    LoadFailedError,
    OutputError,
    ParseFailedError,
    RenderFailedError,
    raster_surface_factory,
)
from .config import CompilerConfig, config_from_mapping, load_config
from .loader import (
    LoadError,
    NoEntryError,
    OpenError,
    ParseError,
    ReadError,
    SourceLoader,
    TooManyEntryError,
)
from .node import (
    Arc,
    Circle,
    Color,
    Curve,
    DocumentNode,
    Layer,
    Line,
    MappingDocument,
    NodeError,
    Point,
    Polygon,
    Rectangle,
    Scale,
    Scene,
    Stroke,
    Text,
    Triangle,
)
from .render import DrawingSurface, paint_background, render_layer, render_scene

__all__ = [
    "Arc",
    "Circle",
    "Color",
    "CompileError",
    "Compiler",
    "CompilerConfig",
    "Curve",
    "DocumentNode",
    "DrawingSurface",
    "ExportError",
    "Layer",
    "Line",
    "LoadError",
    "LoadFailedError",
    "MappingDocument",
    "NoEntryError",
    "NodeError",
    "OpenError",
    "OutputError",
    "ParseError",
    "ParseFailedError",
    "Point",
    "Polygon",
    "ReadError",
    "RenderFailedError",
    "Rectangle",
    "Scale",
    "Scene",
    "SourceLoader",
    "Stroke",
    "Text",
    "TooManyEntryError",
    "Triangle",
    "config_from_mapping",
    "load_config",
    "paint_background",
    "raster_surface_factory",
    "render_layer",
    "render_scene",
]
