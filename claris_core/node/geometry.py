from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import DocumentNode


DEFAULT_SCALE = 1.0
DEFAULT_STROKE_WIDTH = 1.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float


class LineCap(Enum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"

    @classmethod
    def from_name(cls, name: str | None) -> "LineCap":
        for cap in cls:
            if cap.value == name:
                return cap
        return cls.BUTT


@dataclass(frozen=True)
class Scale:
    x: float = DEFAULT_SCALE
    y: float = DEFAULT_SCALE

    @classmethod
    def parse(cls, node: DocumentNode) -> "Scale":
        x = node.get_float("x")
        y = node.get_float("y")
        return cls(
            x=DEFAULT_SCALE if x is None else x,
            y=DEFAULT_SCALE if y is None else y,
        )


@dataclass(frozen=True)
class Stroke:
    width: float = DEFAULT_STROKE_WIDTH
    cap: LineCap = LineCap.BUTT

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError("stroke width must be >= 0")

    @classmethod
    def parse(cls, node: DocumentNode) -> "Stroke":
        width = node.get_float("width")
        if width is None:
            width = DEFAULT_STROKE_WIDTH
        return cls(width=max(0.0, width), cap=LineCap.from_name(node.get_string("cap")))


def parse_stroke(node: DocumentNode) -> Stroke:
    stroke = node.get_mapping("stroke")
    return Stroke() if stroke is None else Stroke.parse(stroke)


def parse_scale(node: DocumentNode) -> Scale:
    scale = node.get_mapping("scale")
    return Scale() if scale is None else Scale.parse(scale)
