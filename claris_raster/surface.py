from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import math
from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from claris_core.node.geometry import LineCap
from claris_core.node.layers import DEFAULT_FONT_FAMILY, FontSlant, FontWeight

from . import path as geom
from .canvas import SourceRGBA, composite_coverage, new_canvas
from .fonts import load_font


LOGGER = logging.getLogger(__name__)

DEFAULT_LINE_WIDTH = 2.0
DEFAULT_FONT_SIZE = 10.0


@dataclass
class _GraphicsState:
    matrix: np.ndarray = field(default_factory=geom.identity)
    source: SourceRGBA = (0.0, 0.0, 0.0, 1.0)
    line_width: float = DEFAULT_LINE_WIDTH
    line_cap: LineCap = LineCap.BUTT
    font_family: str = DEFAULT_FONT_FAMILY
    font_slant: FontSlant = FontSlant.NORMAL
    font_weight: FontWeight = FontWeight.NORMAL
    font_size: float = DEFAULT_FONT_SIZE

    def copy(self) -> "_GraphicsState":
        return replace(self, matrix=self.matrix.copy())


@dataclass
class _SubPath:
    points: list[geom.Vec2]
    closed: bool = False


class RasterSurface:
    """Pillow/numpy drawing surface with cairo-compatible path semantics.

    Coordinates are transformed to device space as the path is built, so a
    later `translate`/`scale` does not move geometry already in the path.
    Coverage is rasterized at `supersample` times the canvas resolution and
    box-filtered down before compositing.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        supersample: int = 1,
        font_dirs: tuple[Path, ...] = (),
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface width/height must be > 0")
        if supersample < 1:
            raise ValueError("supersample must be >= 1")
        self.width = width
        self.height = height
        self.supersample = supersample
        self.font_dirs = tuple(font_dirs)
        self._canvas = new_canvas(width, height)
        self._state = _GraphicsState()
        self._stack: list[_GraphicsState] = []
        self._subpaths: list[_SubPath] = []
        self._current: geom.Vec2 | None = None

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the RGBA canvas (height, width, 4)."""

        view = self._canvas.view()
        view.flags.writeable = False
        return view

    @property
    def save_depth(self) -> int:
        return len(self._stack)

    @property
    def current_point(self) -> geom.Vec2 | None:
        return self._current

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._canvas.copy())

    def write_png(self, target: str | Path | BinaryIO) -> None:
        if isinstance(target, (str, Path)):
            target = Path(target)
        self.to_image().save(target, format="PNG")

    def save(self) -> None:
        self._stack.append(self._state.copy())

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore called without a matching save")
        self._state = self._stack.pop()

    def translate(self, tx: float, ty: float) -> None:
        self._state.matrix = self._state.matrix @ geom.translation(tx, ty)

    def scale(self, sx: float, sy: float) -> None:
        self._state.matrix = self._state.matrix @ geom.scaling(sx, sy)

    def set_source_color(self, r: float, g: float, b: float, a: float) -> None:
        self._state.source = (_clamp01(r), _clamp01(g), _clamp01(b), _clamp01(a))

    def set_line_width(self, width: float) -> None:
        self._state.line_width = max(0.0, width)

    def set_line_cap(self, cap: LineCap) -> None:
        self._state.line_cap = cap

    def select_font_face(self, family: str, slant: FontSlant, weight: FontWeight) -> None:
        self._state.font_family = family
        self._state.font_slant = slant
        self._state.font_weight = weight

    def set_font_size(self, size: float) -> None:
        self._state.font_size = size

    def move_to(self, x: float, y: float) -> None:
        self._move_to_device(geom.apply(self._state.matrix, x, y))

    def line_to(self, x: float, y: float) -> None:
        self._line_to_device(geom.apply(self._state.matrix, x, y))

    def close_path(self) -> None:
        if not self._subpaths or self._current is None:
            return
        subpath = self._subpaths[-1]
        subpath.closed = True
        self._current = subpath.points[0]

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        m = self._state.matrix
        p1 = geom.apply(m, x1, y1)
        if self._current is None:
            self._move_to_device(p1)
        assert self._current is not None
        points = geom.cubic_points(self._current, p1, geom.apply(m, x2, y2), geom.apply(m, x3, y3))
        for px, py in points[1:]:
            self._line_to_device((float(px), float(py)))

    def arc(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        m = self._state.matrix
        user = geom.arc_points(xc, yc, radius, angle1, angle2, device_scale=geom.linear_scale(m))
        device = geom.apply_many(m, user)
        first = (float(device[0, 0]), float(device[0, 1]))
        if self._current is None:
            self._move_to_device(first)
        else:
            self._line_to_device(first)
        for px, py in device[1:]:
            self._line_to_device((float(px), float(py)))

    def rectangle(self, x: float, y: float, width: float, height: float) -> None:
        self.move_to(x, y)
        self.line_to(x + width, y)
        self.line_to(x + width, y + height)
        self.line_to(x, y + height)
        self.close_path()

    def fill(self) -> None:
        polygons = [sp.points for sp in self._subpaths if len(sp.points) >= 3]
        self._clear_path()
        if not polygons:
            return
        mask, draw = self._new_mask()
        ss = self.supersample
        for points in polygons:
            draw.polygon([(x * ss, y * ss) for x, y in points], fill=255)
        self._composite(mask)

    def stroke(self) -> None:
        subpaths = list(self._subpaths)
        self._clear_path()
        width = self._state.line_width * geom.linear_scale(self._state.matrix)
        if not subpaths or width <= 0.0:
            return
        mask, draw = self._new_mask()
        ss = self.supersample
        device_width = width * ss
        cap = self._state.line_cap
        for subpath in subpaths:
            if cap is not LineCap.ROUND and _is_degenerate(subpath.points):
                continue
            points = [(x * ss, y * ss) for x, y in subpath.points]
            if subpath.closed:
                _draw_polyline(draw, points + points[:1], device_width)
                continue
            if cap is LineCap.SQUARE:
                points = _extend_ends(points, device_width / 2.0)
            _draw_polyline(draw, points, device_width)
            if cap is LineCap.ROUND:
                r = device_width / 2.0
                for cx, cy in (points[0], points[-1]):
                    draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=255)
        self._composite(mask)

    def show_text(self, text: str) -> None:
        if not text:
            return
        if self._current is None:
            self.move_to(0.0, 0.0)
        assert self._current is not None
        state = self._state
        size_px = state.font_size * geom.linear_scale(state.matrix)
        if size_px <= 0.0:
            return
        ss = self.supersample
        font = load_font(state.font_family, state.font_slant, state.font_weight, size_px * ss, self.font_dirs)
        x, y = self._current
        mask, draw = self._new_mask()
        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text((x * ss, y * ss), text, fill=255, font=font, anchor="ls")
        else:
            _, _, _, bottom = font.getbbox(text)
            draw.text((x * ss, y * ss - bottom), text, fill=255, font=font)
        self._composite(mask)
        self._current = (x + float(font.getlength(text)) / ss, y)

    def _move_to_device(self, point: geom.Vec2) -> None:
        self._subpaths.append(_SubPath(points=[point]))
        self._current = point

    def _line_to_device(self, point: geom.Vec2) -> None:
        if self._current is None:
            self._move_to_device(point)
            return
        subpath = self._subpaths[-1]
        if subpath.closed:
            subpath = _SubPath(points=[self._current])
            self._subpaths.append(subpath)
        subpath.points.append(point)
        self._current = point

    def _clear_path(self) -> None:
        self._subpaths = []
        self._current = None

    def _new_mask(self) -> tuple[Image.Image, ImageDraw.ImageDraw]:
        mask = Image.new("L", (self.width * self.supersample, self.height * self.supersample), 0)
        return mask, ImageDraw.Draw(mask)

    def _composite(self, mask: Image.Image) -> None:
        if self.supersample > 1:
            mask = mask.resize((self.width, self.height), resample=Image.Resampling.BOX)
        coverage = np.asarray(mask, dtype=np.float32) / 255.0
        composite_coverage(self._canvas, coverage, self._state.source)


def _clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, float(value)))


def _is_degenerate(points: list[geom.Vec2]) -> bool:
    first = points[0]
    return all(point == first for point in points)


def _draw_polyline(draw: ImageDraw.ImageDraw, points: list[geom.Vec2], width: float) -> None:
    if len(points) < 2:
        return
    draw.line(points, fill=255, width=max(1, int(round(width))), joint="curve")


def _extend_ends(points: list[geom.Vec2], distance: float) -> list[geom.Vec2]:
    if len(points) < 2:
        return points
    out = list(points)
    out[0] = _push(points[0], points[1], distance)
    out[-1] = _push(points[-1], points[-2], distance)
    return out


def _push(end: geom.Vec2, neighbor: geom.Vec2, distance: float) -> geom.Vec2:
    dx = end[0] - neighbor[0]
    dy = end[1] - neighbor[1]
    length = math.hypot(dx, dy)
    if length == 0.0:
        return end
    return (end[0] + dx / length * distance, end[1] + dy / length * distance)
