from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
from pathlib import Path
from typing import Protocol

from PIL import ImageFont


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "Roboto"
FONT_FALLBACK_PATTERNS = (
    "roboto",
    "helvetica",
    "arial",
    "dejavusans",
    "dejavu sans",
    "liberationsans",
)


@dataclass(frozen=True)
class TextMetrics:
    width: float
    height: float


class TextMeasurer(Protocol):
    """Pixel extent of a single-line string for a font family and size."""

    def measure(self, text: str, font_family: str, font_size: float) -> TextMetrics:
        ...


@dataclass(frozen=True)
class ApproximateTextMeasurer:
    """Font-free estimate: every glyph advances `char_width_ratio` of the font size."""

    char_width_ratio: float = 0.6
    line_height_ratio: float = 1.0

    def __post_init__(self) -> None:
        if self.char_width_ratio <= 0 or self.line_height_ratio <= 0:
            raise ValueError("approximate measurer ratios must be > 0")

    def measure(self, text: str, font_family: str, font_size: float) -> TextMetrics:
        _ = font_family
        return TextMetrics(
            width=len(text) * font_size * self.char_width_ratio,
            height=font_size * self.line_height_ratio,
        )


class PillowTextMeasurer:
    """Measures with the first installed font matching the family (Pillow's default otherwise)."""

    def measure(self, text: str, font_family: str, font_size: float) -> TextMetrics:
        font = _load_font(font_family=font_family, font_size_px=float(font_size))
        left, top, right, bottom = font.getbbox(text or "Ay")
        width = float(max(0, right - left)) if text else 0.0
        return TextMetrics(width=width, height=float(max(1, bottom - top)))


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        LOGGER.debug("no font file found for %r, using Pillow default font", font_family)
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        LOGGER.debug("unable to load font %s, using Pillow default font", font_path)
        return ImageFont.load_default(size=size)


@lru_cache(maxsize=32)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    # a family like "Roboto, sans-serif" is tried name by name
    patterns = tuple(part.strip() for part in wanted.split(",") if part.strip()) + FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            name = path.name.lower().replace(" ", "")
            if p in stem or p in name:
                return path
    return None
