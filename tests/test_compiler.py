from __future__ import annotations

import contextlib
import io
from pathlib import Path
import tempfile
from typing import BinaryIO
import unittest

from PIL import Image

from claris_core import (
    Compiler,
    CompilerConfig,
    LoadFailedError,
    MappingDocument,
    OutputError,
    ParseFailedError,
    RenderFailedError,
)
import main as cli


SCENE_YAML = """
width: 40
height: 20
color: "#FFFFFF"
layers:
  - rectangle:
      x: 1
      y: 2
      width: 10
      height: 5
      color: "#AABBCC"
      fill: true
  - circle:
      x: 30
      y: 10
      color: "#AABBCG"
  - line:
      points: [[0, 18], [40, 18]]
      color: "#000000"
      stroke:
        width: 2
"""


class _CaptureSurface:
    def __init__(self, width: int, height: int) -> None:
        self.size = (width, height)
        self.ops: list[str] = []

    def __getattr__(self, name: str):
        def record(*args: object) -> None:
            self.ops.append(name)

        return record

    def write_png(self, target: BinaryIO) -> None:
        target.write(b"captured")


class CompilerTests(unittest.TestCase):
    def test_compile_to_png_end_to_end(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "scene.yml"
            out = Path(td) / "scene.png"
            src.write_text(SCENE_YAML, encoding="utf-8")
            scene = Compiler().compile_to_png(src, out)
            self.assertEqual(len(scene.layers), 2)
            self.assertEqual(len(scene.diagnostics), 1)
            with Image.open(out) as image:
                self.assertEqual(image.size, (40, 20))
                self.assertEqual(image.getpixel((5, 4)), (170, 187, 204, 255))
                self.assertEqual(image.getpixel((30, 10)), (255, 255, 255, 255))

    def test_custom_surface_factory(self) -> None:
        surfaces: list[_CaptureSurface] = []

        def factory(width: int, height: int, config: CompilerConfig) -> _CaptureSurface:
            surface = _CaptureSurface(width, height)
            surfaces.append(surface)
            return surface

        compiler = Compiler(surface_factory=factory)  # type: ignore[arg-type]
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "scene.yml"
            out = Path(td) / "scene.png"
            src.write_text(SCENE_YAML, encoding="utf-8")
            compiler.compile_to_png(src, out)
            self.assertEqual(out.read_bytes(), b"captured")
        self.assertEqual(len(surfaces), 1)
        self.assertEqual(surfaces[0].size, (40, 20))
        self.assertEqual(surfaces[0].ops.count("save"), 3)
        self.assertEqual(surfaces[0].ops.count("restore"), 3)

    def test_missing_source_is_load_failure(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(LoadFailedError):
                Compiler().compile_to_png(Path(td) / "missing.yml", Path(td) / "missing.png")

    def test_fatal_parse_errors(self) -> None:
        compiler = Compiler()
        with self.assertRaises(ParseFailedError) as ctx:
            compiler.compile_document(MappingDocument({"height": 10, "layers": []}))
        self.assertEqual(str(ctx.exception), "'root' is required 'width' option")
        with self.assertRaises(ParseFailedError):
            compiler.compile_document(MappingDocument({"width": 10, "height": 10, "layers": [{"test": {}}]}))
        with self.assertRaises(ParseFailedError):
            compiler.compile_document(MappingDocument({"width": 0, "height": 10, "layers": []}))

    def test_surface_errors_are_render_failures(self) -> None:
        def factory(width: int, height: int, config: CompilerConfig) -> _CaptureSurface:
            raise ValueError("canvas too large")

        compiler = Compiler(surface_factory=factory)  # type: ignore[arg-type]
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "scene.yml"
            out = Path(td) / "scene.png"
            src.write_text(SCENE_YAML, encoding="utf-8")
            with self.assertRaises(RenderFailedError) as ctx:
                compiler.compile_to_png(src, out)
            self.assertIsInstance(ctx.exception.__cause__, ValueError)
            self.assertFalse(out.exists())

    def test_unwritable_output(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "scene.yml"
            src.write_text(SCENE_YAML, encoding="utf-8")
            with self.assertRaises(OutputError):
                Compiler().compile_to_png(src, Path(td) / "no-such-dir" / "scene.png")


class CommandLineTests(unittest.TestCase):
    def _run(self, argv: list[str]) -> tuple[int, str]:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = cli.main(argv)
        return code, stdout.getvalue()

    def test_compiles_next_to_input(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "scene.yml"
            src.write_text(SCENE_YAML, encoding="utf-8")
            code, _ = self._run([str(src)])
            self.assertEqual(code, 0)
            self.assertTrue((Path(td) / "scene.png").is_file())

    def test_output_directory_and_force(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "scene.yaml"
            out_dir = Path(td) / "out"
            out_dir.mkdir()
            src.write_text(SCENE_YAML, encoding="utf-8")
            self.assertEqual(self._run(["-d", str(out_dir), str(src)])[0], 0)
            self.assertTrue((out_dir / "scene.png").is_file())

            code, output = self._run(["-d", str(out_dir), str(src)])
            self.assertEqual(code, 1)
            self.assertIn("is already exists.", output)
            self.assertEqual(self._run(["-d", str(out_dir), "-f", str(src)])[0], 0)

    def test_rejected_inputs_do_not_stop_others(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            good = Path(td) / "good.yml"
            good.write_text(SCENE_YAML, encoding="utf-8")
            wrong_ext = Path(td) / "notes.txt"
            wrong_ext.write_text("width: 1\n", encoding="utf-8")
            missing = Path(td) / "missing.yml"
            code, output = self._run([str(wrong_ext), str(missing), str(good)])
            self.assertEqual(code, 1)
            self.assertIn("is not yaml file.", output)
            self.assertIn("is not exists", output)
            self.assertTrue((Path(td) / "good.png").is_file())

    def test_failed_render_does_not_stop_later_inputs(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            bad = Path(td) / "bad.yml"
            bad.write_text("width: 100000000000000000000000\nheight: 10\nlayers: []\n", encoding="utf-8")
            good = Path(td) / "good.yml"
            good.write_text(SCENE_YAML, encoding="utf-8")
            code, output = self._run([str(bad), str(good)])
            self.assertEqual(code, 1)
            self.assertIn("render error!", output)
            self.assertFalse((Path(td) / "bad.png").exists())
            self.assertTrue((Path(td) / "good.png").is_file())

    def test_output_dir_must_be_directory(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "scene.yml"
            src.write_text(SCENE_YAML, encoding="utf-8")
            code, output = self._run(["-d", str(src), str(src)])
            self.assertEqual(code, 1)
            self.assertIn("is not directory.", output)

    def test_compile_errors_are_reported(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "broken.yml"
            src.write_text("height: 10\nlayers: []\n", encoding="utf-8")
            code, output = self._run([str(src)])
            self.assertEqual(code, 1)
            self.assertIn("'root' is required 'width' option", output)

    def test_config_file_sets_output_dir(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "scene.yml"
            src.write_text(SCENE_YAML, encoding="utf-8")
            (Path(td) / "build").mkdir()
            config = Path(td) / "claris.toml"
            config.write_text('[claris]\noutput_dir = "build"\nsupersample = 1\n', encoding="utf-8")
            code, _ = self._run(["--config", str(config), str(src)])
            self.assertEqual(code, 0)
            self.assertTrue((Path(td) / "build" / "scene.png").is_file())


if __name__ == "__main__":
    unittest.main()
