from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys

from claris_core import CompileError, Compiler, CompilerConfig, load_config
from claris_core.config import LOG_LEVELS


LOGGER = logging.getLogger("claris")
SOURCE_SUFFIXES = (".yml", ".yaml")


class InputError(RuntimeError):
    """Raised when an input or output path is rejected before compiling."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claris",
        description="Compile YAML scene documents to PNG images.",
    )
    parser.add_argument("inputs", nargs="+", type=Path, metavar="FILE")
    parser.add_argument(
        "-d",
        dest="output_dir",
        type=Path,
        default=None,
        help="Output directory. Default: same directory as the input file.",
    )
    parser.add_argument("-f", dest="force", action="store_true", help="Overwrite existing output files.")
    parser.add_argument("--config", type=Path, default=None, help="TOML config file.")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None)
    return parser


def resolve_config(args: argparse.Namespace) -> CompilerConfig:
    config = CompilerConfig() if args.config is None else load_config(args.config)
    if args.output_dir is not None:
        config = replace(config, output_dir=args.output_dir)
    if args.force:
        config = replace(config, overwrite=True)
    if args.log_level is not None:
        config = replace(config, log_level=args.log_level)
    return config


def resolve_output_path(src: Path, config: CompilerConfig) -> Path:
    if not src.exists():
        raise InputError(f"{src} is not exists")
    if not src.is_file():
        raise InputError(f"{src} is not file.")
    if src.suffix.lower() not in SOURCE_SUFFIXES:
        raise InputError(f"{src} is not yaml file.")

    name = src.with_suffix(".png").name
    if config.output_dir is not None:
        if not config.output_dir.is_dir():
            raise InputError(f"{config.output_dir} is not directory.")
        out = config.output_dir / name
    else:
        out = src.parent / name

    if not config.overwrite and out.exists():
        raise InputError(f"{out} is already exists.")
    return out


def compile_one(compiler: Compiler, src: Path) -> bool:
    try:
        out = resolve_output_path(src, compiler.config)
        LOGGER.debug("input: %s, output: %s", src, out)
        compiler.compile_to_png(src, out)
    except (InputError, CompileError) as exc:
        print(exc)
        return False
    return True


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = resolve_config(args)
    except (OSError, ValueError) as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(level=config.logging_level, format="%(levelname)s %(name)s: %(message)s")

    compiler = Compiler(config=config)
    failed = 0
    for src in args.inputs:
        if not compile_one(compiler, src):
            failed += 1
    if failed:
        LOGGER.info("%d of %d inputs failed", failed, len(args.inputs))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
