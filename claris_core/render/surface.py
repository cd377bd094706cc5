from __future__ import annotations

from typing import Protocol

from claris_core.node.geometry import LineCap
from claris_core.node.layers import FontSlant, FontWeight


class DrawingSurface(Protocol):
    """Cairo-style 2D vector sink driven by the layer dispatcher.

    Path operations accumulate into the current path under the current
    transform; `fill` and `stroke` paint and consume it. `save`/`restore`
    bracket the graphics state (transform, source color, line style, font).
    """

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def close_path(self) -> None:
        ...

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        ...

    def arc(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        ...

    def rectangle(self, x: float, y: float, width: float, height: float) -> None:
        ...

    def translate(self, tx: float, ty: float) -> None:
        ...

    def scale(self, sx: float, sy: float) -> None:
        ...

    def set_source_color(self, r: float, g: float, b: float, a: float) -> None:
        ...

    def set_line_width(self, width: float) -> None:
        ...

    def set_line_cap(self, cap: LineCap) -> None:
        ...

    def fill(self) -> None:
        ...

    def stroke(self) -> None:
        ...

    def save(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def select_font_face(self, family: str, slant: FontSlant, weight: FontWeight) -> None:
        ...

    def set_font_size(self, size: float) -> None:
        ...

    def show_text(self, text: str) -> None:
        ...
