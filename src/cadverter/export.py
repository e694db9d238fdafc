"""Page layout and styling rules for paginated (PDF-style) export.

Page coordinates are millimetres with a bottom-left origin. This module
only derives numbers; issuing drawing commands is left to the export
adapter.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .models import AxisConvention, Bounds, Color, Rect, Transform
from .transforms import ScalePolicy, compute_transform, parse_scale_policy

logger = logging.getLogger(__name__)

# Paper sizes in mm (portrait width, height)
PAPER_SIZES: dict[str, tuple[float, float]] = {
    "a4": (210.0, 297.0),
    "a3": (297.0, 420.0),
    "a2": (420.0, 594.0),
    "a1": (594.0, 841.0),
    "a0": (841.0, 1189.0),
    "letter": (215.9, 279.4),
    "legal": (215.9, 355.6),
    "tabloid": (279.4, 431.8),
}

DEFAULT_PAPER = "a4"

# Output quality -> stroke/font scale
QUALITY_SCALES: dict[str, float] = {
    "high": 1.0,
    "medium": 0.75,
    "low": 0.5,
}

COLOR_MODES = ("color", "grayscale", "black", "white")

BASE_LINE_WIDTH = 0.3
MIN_FONT_SIZE = 4.0

# Arabic and Hebrew blocks
_RTL_PATTERN = re.compile("[\u0590-\u05ff\u0600-\u06ff]")


@dataclass
class ExportSettings:
    paper_size: str = DEFAULT_PAPER
    orientation: str = "portrait"  # "portrait" or "landscape"
    scale: ScalePolicy | str = "auto"
    quality: str = "high"
    color_mode: str = "color"
    margin: float = 15.0
    header_space: float = 25.0


def page_size(settings: ExportSettings) -> tuple[float, float]:
    """Return (width, height) of the page in mm, honoring orientation."""
    size = PAPER_SIZES.get(settings.paper_size.lower())
    if size is None:
        logger.warning("Unknown paper size %r, using %s", settings.paper_size, DEFAULT_PAPER)
        size = PAPER_SIZES[DEFAULT_PAPER]
    width, height = size
    if settings.orientation == "landscape":
        return height, width
    return width, height


def page_content_rect(settings: ExportSettings) -> Rect:
    """Drawable area of the page: inside the margins, below the header band."""
    width, height = page_size(settings)
    return Rect(
        x=settings.margin,
        y=settings.margin,
        width=width - 2 * settings.margin,
        height=height - 2 * settings.margin - settings.header_space,
    )


def export_transform(bounds: Bounds, settings: ExportSettings) -> Transform:
    """Transform placing ``bounds`` centered in the page content area (Y-up)."""
    return compute_transform(
        bounds,
        page_content_rect(settings),
        scale_policy=settings.scale,
        convention=AxisConvention.Y_UP,
    )


def apply_color_mode(color: Color, mode: str) -> Color:
    """Recolor an entity color for the chosen export color mode."""
    if mode == "grayscale":
        gray = round(0.299 * color[0] + 0.587 * color[1] + 0.114 * color[2])
        return gray, gray, gray
    if mode == "black":
        return 0, 0, 0
    if mode == "white":
        return 255, 255, 255
    return color


def quality_scale(quality: str) -> float:
    return QUALITY_SCALES.get(quality, QUALITY_SCALES["low"])


def line_width(quality: str) -> float:
    """Stroke width in mm."""
    return BASE_LINE_WIDTH * quality_scale(quality)


def font_size(text_height: float, transform: Transform, quality: str) -> float:
    """Font size for a text entity, never below ``MIN_FONT_SIZE``."""
    size = transform.scale_length(text_height) * 0.5 * quality_scale(quality)
    return max(MIN_FONT_SIZE, size)


def prepare_text(text: str) -> tuple[str, bool]:
    """Return (display_text, right_aligned) for export.

    Right-to-left text is naively reversed character by character and
    right-aligned. This does not shape joined scripts and mangles mixed-
    direction strings; it is a known limitation.
    """
    if _RTL_PATTERN.search(text):
        return text[::-1], True
    return text, False


def scale_label(settings: ExportSettings) -> str:
    """Human-readable scale, e.g. ``"auto"`` or ``"50%"``."""
    policy = parse_scale_policy(settings.scale)
    if policy == "auto":
        return "auto"
    return f"{policy * 100:g}%"
