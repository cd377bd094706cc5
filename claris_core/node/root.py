from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from typing import Callable

from .color import TRANSPARENT_BLACK, Color
from .document import DocumentNode, MappingDocument
from .errors import (
    InvalidColorError,
    InvalidLayerCountError,
    InvalidLayerDefineError,
    InvalidLayerError,
    NodeError,
    RequiredFieldError,
    UnknownLayerError,
)
from .layers import LAYER_PARSERS, Layer


LOGGER = logging.getLogger(__name__)
ROOT_CONTEXT = "root"


@dataclass(frozen=True)
class LayerDiagnostic:
    """A layer entry that was dropped while parsing a scene."""

    index: int
    key: object
    error: NodeError

    def describe(self) -> str:
        return f"layers[{self.index}] ({self.key!r}): {self.error}"


@dataclass(frozen=True)
class Scene:
    """Canvas size, background and the back-to-front layer list of one document."""

    width: int
    height: int
    color: Color = TRANSPARENT_BLACK
    layers: tuple[Layer, ...] = ()
    diagnostics: tuple[LayerDiagnostic, ...] = field(default=(), compare=False)

    @classmethod
    def parse(cls, node: DocumentNode) -> "Scene":
        """Parse the root mapping.

        Missing `width`/`height`/`layers` and malformed layer entries abort the
        parse. A layer whose own fields are invalid is dropped and recorded in
        `diagnostics`; an absent or unparseable background falls back to
        transparent black.
        """

        width = node.get_int("width")
        if width is None:
            raise RequiredFieldError(ROOT_CONTEXT, "width")
        height = node.get_int("height")
        if height is None:
            raise RequiredFieldError(ROOT_CONTEXT, "height")
        color = _parse_background(node.get_string("color"))
        layers, diagnostics = _parse_layers(node)
        return cls(
            width=width,
            height=height,
            color=color,
            layers=tuple(layers),
            diagnostics=tuple(diagnostics),
        )


def parse_layer(entry: Mapping[object, object]) -> Layer:
    """Select the layer parser by the single key of `entry` and run it."""

    key, parser = _select_parser(entry)
    return parser(MappingDocument(entry[key]))


def _select_parser(entry: Mapping[object, object]) -> tuple[str, Callable[[DocumentNode], Layer]]:
    if len(entry) != 1:
        raise InvalidLayerCountError()
    key = next(iter(entry))
    if not isinstance(key, str):
        raise InvalidLayerDefineError()
    parser = LAYER_PARSERS.get(key)
    if parser is None:
        raise UnknownLayerError(key)
    return key, parser


def _parse_background(raw: str | None) -> Color:
    if raw is None:
        return TRANSPARENT_BLACK
    try:
        parsed = Color.parse(raw)
    except InvalidColorError:
        LOGGER.debug("ignoring malformed background color %r", raw)
        return TRANSPARENT_BLACK
    return parsed.with_alpha(1.0)


def _parse_layers(node: DocumentNode) -> tuple[list[Layer], list[LayerDiagnostic]]:
    entries = node.get_array("layers")
    if entries is None:
        raise RequiredFieldError(ROOT_CONTEXT, "layers")
    layers: list[Layer] = []
    diagnostics: list[LayerDiagnostic] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise InvalidLayerError()
        key, parser = _select_parser(entry)
        try:
            layers.append(parser(MappingDocument(entry[key])))
        except NodeError as exc:
            diagnostic = LayerDiagnostic(index=index, key=key, error=exc)
            LOGGER.debug("dropping layer %s", diagnostic.describe())
            diagnostics.append(diagnostic)
    return layers, diagnostics
