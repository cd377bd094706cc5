from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import tomllib
from typing import Any


CONFIG_TABLE = "claris"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_KNOWN_KEYS = frozenset({"output_dir", "overwrite", "log_level", "supersample", "font_dirs"})


@dataclass(frozen=True)
class CompilerConfig:
    output_dir: Path | None = None
    overwrite: bool = False
    log_level: str = "WARNING"
    supersample: int = 2
    font_dirs: tuple[Path, ...] = ()

    def __post_init__(self) -> None:
        if self.supersample < 1:
            raise ValueError("supersample must be >= 1")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"unknown log_level: {self.log_level}")

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level.upper())


def load_config(path: str | Path) -> CompilerConfig:
    """Read a TOML config; settings may sit at top level or under `[claris]`."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get(CONFIG_TABLE, raw)
    if not isinstance(table, dict):
        raise ValueError(f"`{CONFIG_TABLE}` must be a table")
    return config_from_mapping(table, base_dir=config_path.parent)


def config_from_mapping(raw: dict[str, Any], *, base_dir: Path | None = None) -> CompilerConfig:
    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    output_dir = raw.get("output_dir")
    if output_dir is not None and not isinstance(output_dir, str):
        raise ValueError("output_dir must be a string")
    overwrite = raw.get("overwrite", False)
    if not isinstance(overwrite, bool):
        raise ValueError("overwrite must be a boolean")
    log_level = raw.get("log_level", "WARNING")
    if not isinstance(log_level, str):
        raise ValueError("log_level must be a string")
    supersample = raw.get("supersample", 2)
    if isinstance(supersample, bool) or not isinstance(supersample, int):
        raise ValueError("supersample must be an integer")
    font_dirs = raw.get("font_dirs", [])
    if not isinstance(font_dirs, list) or not all(isinstance(d, str) for d in font_dirs):
        raise ValueError("font_dirs must be a list of strings")
    return CompilerConfig(
        output_dir=None if output_dir is None else _resolve(output_dir, base_dir),
        overwrite=overwrite,
        log_level=log_level.upper(),
        supersample=supersample,
        font_dirs=tuple(_resolve(d, base_dir) for d in font_dirs),
    )


def _resolve(value: str, base_dir: Path | None) -> Path:
    p = Path(value).expanduser()
    if base_dir is not None and not p.is_absolute():
        return base_dir / p
    return p
