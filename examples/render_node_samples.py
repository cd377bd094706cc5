from __future__ import annotations

import logging
from pathlib import Path

from claris_core import Compiler


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    here = Path(__file__).resolve().parent
    scene = Compiler().compile_to_png(here / "node_samples.yml", here / "node_samples.png")
    print(f"rendered {len(scene.layers)} layers at {scene.width}x{scene.height}")


if __name__ == "__main__":
    main()
