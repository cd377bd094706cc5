from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Protocol

from .config import CompilerConfig
from .loader import LoadError, SourceLoader
from .node.document import DocumentNode
from .node.errors import NodeError
from .node.root import Scene
from .render.dispatcher import render_scene
from .render.surface import DrawingSurface


LOGGER = logging.getLogger(__name__)


class CompileError(RuntimeError):
    """Raised when a scene source cannot be compiled to an image."""


class LoadFailedError(CompileError):
    pass


class ParseFailedError(CompileError):
    pass


class RenderFailedError(CompileError):
    pass


class OutputError(CompileError):
    def __init__(self, path: str) -> None:
        super().__init__(f"file output error! path: '{path}'")
        self.path = path


class ExportError(CompileError):
    def __init__(self) -> None:
        super().__init__("file export error!")


class ExportableSurface(DrawingSurface, Protocol):
    def write_png(self, target: BinaryIO) -> None:
        ...


SurfaceFactory = Callable[[int, int, CompilerConfig], ExportableSurface]


def raster_surface_factory(width: int, height: int, config: CompilerConfig) -> ExportableSurface:
    from claris_raster.surface import RasterSurface

    return RasterSurface(width, height, supersample=config.supersample, font_dirs=config.font_dirs)


@dataclass
class Compiler:
    """Loads a YAML scene, replays it on a drawing surface and writes a PNG."""

    config: CompilerConfig = field(default_factory=CompilerConfig)
    surface_factory: SurfaceFactory = raster_surface_factory

    def compile_to_png(self, src_path: str | Path, out_path: str | Path) -> Scene:
        try:
            document = SourceLoader.load(src_path)
        except LoadError as exc:
            raise LoadFailedError(str(exc)) from exc
        scene = self.compile_document(document)
        try:
            surface = self.create_surface(scene)
            self.render(scene, surface)
        except (ValueError, OverflowError, MemoryError) as exc:
            raise RenderFailedError(f"render error! path: '{src_path}' ({exc})") from exc
        self.export(surface, out_path)
        LOGGER.info("compiled %s -> %s (%d layers)", src_path, out_path, len(scene.layers))
        return scene

    def compile_document(self, node: DocumentNode) -> Scene:
        try:
            scene = Scene.parse(node)
        except NodeError as exc:
            raise ParseFailedError(str(exc)) from exc
        if scene.width <= 0 or scene.height <= 0:
            raise ParseFailedError(f"canvas size must be > 0, got {scene.width}x{scene.height}")
        for diagnostic in scene.diagnostics:
            LOGGER.info("skipped %s", diagnostic.describe())
        return scene

    def create_surface(self, scene: Scene) -> ExportableSurface:
        return self.surface_factory(scene.width, scene.height, self.config)

    def render(self, scene: Scene, surface: DrawingSurface) -> None:
        render_scene(surface, scene)

    def export(self, surface: ExportableSurface, out_path: str | Path) -> None:
        out = Path(out_path)
        try:
            f = out.open("wb")
        except OSError as exc:
            raise OutputError(str(out)) from exc
        with f:
            try:
                surface.write_png(f)
            except (OSError, ValueError) as exc:
                raise ExportError() from exc
