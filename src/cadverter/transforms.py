"""Coordinate transforms from drawing space to render-target space.

A transform is derived fresh for every render call from the drawing bounds,
the target content rectangle and a scale policy. Both vertical-axis
conventions are first-class: see ``AxisConvention``.
"""

from __future__ import annotations

from typing import Literal, TypeAlias

from .models import AxisConvention, Bounds, Rect, Transform

ScalePolicy: TypeAlias = Literal["auto"] | float

# Interactive preview
PREVIEW_PADDING = 30.0
ZOOM_STEP = 1.2
MIN_ZOOM = 0.2
MAX_ZOOM = 5.0


def parse_scale_policy(value: str | float) -> ScalePolicy:
    """Normalize ``"auto"`` or a positive multiplier (number or numeric string)."""
    if isinstance(value, str):
        if value.strip().lower() == "auto":
            return "auto"
        try:
            value = float(value)
        except ValueError:
            msg = f"Invalid scale policy: {value!r} (expected 'auto' or a number)"
            raise ValueError(msg) from None
    multiplier = float(value)
    if not multiplier > 0:
        msg = f"Scale multiplier must be positive, got {multiplier}"
        raise ValueError(msg)
    return multiplier


def fit_scale(bounds: Bounds, content_width: float, content_height: float) -> float:
    """Largest scale at which ``bounds`` fits inside the content area."""
    return min(content_width / bounds.width, content_height / bounds.height)


def compute_transform(
    bounds: Bounds,
    content: Rect,
    scale_policy: ScalePolicy | str = "auto",
    convention: AxisConvention = AxisConvention.Y_DOWN,
) -> Transform:
    """Map ``bounds`` into ``content``, centered, under ``scale_policy``.

    ``content`` is expressed in the target's own coordinates: for Y_DOWN its
    ``y`` is the top edge, for Y_UP the bottom edge.
    """
    if content.width <= 0 or content.height <= 0:
        msg = f"Content rectangle must have positive size, got {content.width} x {content.height}"
        raise ValueError(msg)

    policy = parse_scale_policy(scale_policy)
    if policy == "auto":
        scale = fit_scale(bounds, content.width, content.height)
    else:
        scale = policy

    offset_x = content.x + (content.width - bounds.width * scale) / 2
    offset_y = content.y + (content.height - bounds.height * scale) / 2
    return Transform(
        scale=scale,
        offset_x=offset_x,
        offset_y=offset_y,
        bounds=bounds,
        convention=convention,
    )


def preview_transform(
    bounds: Bounds,
    viewport_width: float,
    viewport_height: float,
    zoom: float = 1.0,
    pan: tuple[float, float] = (0.0, 0.0),
) -> Transform:
    """Transform for the interactive (top-left origin, Y-down) preview surface.

    The drawing is fitted into the viewport minus ``PREVIEW_PADDING`` on every
    side, multiplied by ``zoom``, centered in the full viewport and shifted by
    ``pan`` (in output pixels).
    """
    content_width = viewport_width - 2 * PREVIEW_PADDING
    content_height = viewport_height - 2 * PREVIEW_PADDING
    if content_width <= 0 or content_height <= 0:
        msg = f"Viewport {viewport_width} x {viewport_height} is smaller than its padding"
        raise ValueError(msg)

    scale = fit_scale(bounds, content_width, content_height) * clamp_zoom(zoom)
    return Transform(
        scale=scale,
        offset_x=(viewport_width - bounds.width * scale) / 2 + pan[0],
        offset_y=(viewport_height - bounds.height * scale) / 2 + pan[1],
        bounds=bounds,
        convention=AxisConvention.Y_DOWN,
    )


def clamp_zoom(zoom: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))


def zoom_in(zoom: float) -> float:
    return clamp_zoom(zoom * ZOOM_STEP)


def zoom_out(zoom: float) -> float:
    return clamp_zoom(zoom / ZOOM_STEP)
