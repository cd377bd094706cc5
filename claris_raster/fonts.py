from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

from PIL import ImageFont

from claris_core.node.layers import FontSlant, FontWeight


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path("C:/Windows/Fonts"),
)
GENERIC_FAMILIES: dict[str, tuple[str, ...]] = {
    "serif": ("dejavuserif", "liberationserif", "notoserif", "timesnewroman", "times", "georgia"),
    "sans-serif": ("dejavusans", "liberationsans", "notosans", "helvetica", "arial"),
    "sans": ("dejavusans", "liberationsans", "notosans", "helvetica", "arial"),
    "monospace": ("dejavusansmono", "liberationmono", "menlo", "couriernew", "courier"),
}
BOLD_MARKERS = ("bold", "bd", "heavy", "black")
ITALIC_MARKERS = ("italic", "oblique", "it")

FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont


def load_font(
    family: str,
    slant: FontSlant,
    weight: FontWeight,
    size_px: float,
    font_dirs: tuple[Path, ...] = (),
) -> FontType:
    size = max(1, int(round(size_px)))
    path = resolve_font_path(family, slant, weight, font_dirs)
    return _load_font_file(None if path is None else str(path), size)


def resolve_font_path(
    family: str,
    slant: FontSlant,
    weight: FontWeight,
    font_dirs: tuple[Path, ...] = (),
) -> Path | None:
    wanted = family.strip().lower()
    patterns = GENERIC_FAMILIES.get(wanted, (wanted.replace(" ", "").replace("-", ""),))
    candidates = _font_candidates(tuple(font_dirs) + DEFAULT_FONT_DIRS)
    bold = weight is FontWeight.BOLD
    italic = slant is not FontSlant.NORMAL

    fallback: Path | None = None
    for pattern in patterns:
        for path in candidates:
            stem = path.stem.lower().replace(" ", "").replace("-", "").replace("_", "")
            if not stem.startswith(pattern):
                continue
            style = stem[len(pattern) :]
            if _has_marker(style, BOLD_MARKERS) == bold and _has_marker(style, ITALIC_MARKERS) == italic:
                if not _is_variant_family(style):
                    return path
            if fallback is None:
                fallback = path
    if fallback is None:
        LOGGER.warning("no font file found for family %r; using the default font", family)
    return fallback


def _has_marker(style: str, markers: tuple[str, ...]) -> bool:
    return any(marker in style for marker in markers)


def _is_variant_family(style: str) -> bool:
    # "dejavusans" must not pick "dejavusansmono" or "dejavusanscondensed".
    return any(word in style for word in ("mono", "condensed", "light", "narrow", "extra"))


@lru_cache(maxsize=16)
def _font_candidates(font_dirs: tuple[Path, ...]) -> tuple[Path, ...]:
    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))
    return tuple(candidates)


@lru_cache(maxsize=64)
def _load_font_file(path: str | None, size: int) -> FontType:
    if path is not None:
        try:
            return ImageFont.truetype(path, size=size)
        except OSError:
            LOGGER.warning("failed to load font file %s; using the default font", path)
    return ImageFont.load_default(size=size)
