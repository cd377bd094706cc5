from __future__ import annotations

from dataclasses import dataclass
import re
from typing import TYPE_CHECKING

from PIL import ImageColor

from .errors import InvalidColorError, RequiredFieldError

if TYPE_CHECKING:
    from .document import DocumentNode


DEFAULT_ALPHA = 1.0

_RGB_FUNC = re.compile(
    r"^rgba?\(\s*([^,\s]+)\s*,\s*([^,\s]+)\s*,\s*([^,\s]+)\s*(?:,\s*([^,\s]+)\s*)?\)$",
    re.IGNORECASE,
)
_HSLA_FUNC = re.compile(
    r"^hsla\(\s*([^,\s]+)\s*,\s*([^,\s]+)\s*,\s*([^,\s]+)\s*,\s*([^,\s]+)\s*\)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Color:
    """sRGB color with 8-bit channels and straight float alpha."""

    r: int
    g: int
    b: int
    a: float = DEFAULT_ALPHA

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if value < 0 or value > 255:
                raise ValueError(f"color channel `{name}` must be in [0, 255], got {value}")

    @classmethod
    def create(cls, r: int, g: int, b: int, a: float) -> "Color":
        """Build a color, replacing an out-of-range alpha with opaque."""

        return cls(r=r, g=g, b=b, a=_coerce_alpha(a))

    @classmethod
    def parse(cls, raw: str) -> "Color":
        try:
            r, g, b, a = _parse_css_color(raw)
        except ValueError as exc:
            raise InvalidColorError(raw) from exc
        return cls.create(r, g, b, a)

    def with_alpha(self, alpha: float) -> "Color":
        return Color.create(self.r, self.g, self.b, alpha)

    def to_source_rgba(self) -> tuple[float, float, float, float]:
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, float(self.a))


TRANSPARENT_BLACK = Color(0, 0, 0, 0.0)


def resolve_layer_color(node: DocumentNode, context: str) -> Color:
    """Read the required `color` of a layer and apply its optional `alpha` override."""

    raw = node.get_string("color")
    if raw is None:
        raise RequiredFieldError(context, "color")
    alpha = node.get_float("alpha")
    return Color.parse(raw).with_alpha(DEFAULT_ALPHA if alpha is None else alpha)


def _coerce_alpha(alpha: float) -> float:
    if 0.0 <= alpha <= 1.0:
        return float(alpha)
    return DEFAULT_ALPHA


def _parse_css_color(raw: str) -> tuple[int, int, int, float]:
    value = raw.strip()
    if not value:
        raise ValueError("empty color")
    if value.lower() == "transparent":
        return (0, 0, 0, 0.0)

    match = _RGB_FUNC.match(value)
    if match is not None:
        r, g, b = (_parse_channel(part) for part in match.group(1, 2, 3))
        alpha = match.group(4)
        return (r, g, b, DEFAULT_ALPHA if alpha is None else _parse_alpha(alpha))

    match = _HSLA_FUNC.match(value)
    if match is not None:
        h, s, l, alpha = match.group(1, 2, 3, 4)
        r, g, b = ImageColor.getrgb(f"hsl({h},{s},{l})")[:3]
        return (r, g, b, _parse_alpha(alpha))

    rgb = ImageColor.getrgb(value)
    if len(rgb) == 4:
        return (rgb[0], rgb[1], rgb[2], rgb[3] / 255.0)
    return (rgb[0], rgb[1], rgb[2], DEFAULT_ALPHA)


def _parse_channel(text: str) -> int:
    if text.endswith("%"):
        value = float(text[:-1]) * 255.0 / 100.0
    else:
        value = float(text)
    return int(round(max(0.0, min(255.0, value))))


def _parse_alpha(text: str) -> float:
    if text.endswith("%"):
        value = float(text[:-1]) / 100.0
    else:
        value = float(text)
    return max(0.0, min(1.0, value))
