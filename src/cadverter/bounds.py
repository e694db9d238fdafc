"""Axis-aligned bounding rectangle of a drawing."""

from __future__ import annotations

from typing import TypeAlias

import math
from collections.abc import Iterable

from .models import (
    Arc,
    Bounds,
    Circle,
    Ellipse,
    Entity,
    Face,
    Line,
    PointEntity,
    Polyline,
    Text,
)

BOUNDS_PADDING = 30.0
DEFAULT_BOUNDS = Bounds(min_x=0.0, min_y=0.0, width=500.0, height=350.0)

# Nominal text box; glyph metrics are not known at this stage
TEXT_NOMINAL_WIDTH = 100.0
TEXT_NOMINAL_HEIGHT = 10.0

Extent: TypeAlias = tuple[float, float, float, float]  # min_x, min_y, max_x, max_y


def entity_extent(entity: Entity) -> Extent:
    """Return the (min_x, min_y, max_x, max_y) extent of a single entity.

    Arcs contribute their full circle, and ellipses their unrotated
    ``rx``/``ry`` box.
    """
    if isinstance(entity, Line):
        return (
            min(entity.x1, entity.x2),
            min(entity.y1, entity.y2),
            max(entity.x1, entity.x2),
            max(entity.y1, entity.y2),
        )
    if isinstance(entity, (Polyline, Face)):
        xs = [p.x for p in entity.points]
        ys = [p.y for p in entity.points]
        if not xs:
            return (math.inf, math.inf, -math.inf, -math.inf)
        return min(xs), min(ys), max(xs), max(ys)
    if isinstance(entity, (Circle, Arc)):
        c, r = entity.center, entity.radius
        return c.x - r, c.y - r, c.x + r, c.y + r
    if isinstance(entity, Ellipse):
        c = entity.center
        return c.x - entity.rx, c.y - entity.ry, c.x + entity.rx, c.y + entity.ry
    if isinstance(entity, Text):
        p = entity.position
        return p.x, p.y - TEXT_NOMINAL_HEIGHT, p.x + TEXT_NOMINAL_WIDTH, p.y
    if isinstance(entity, PointEntity):
        p = entity.position
        return p.x, p.y, p.x, p.y
    msg = f"Unknown entity type: {type(entity)}"
    raise TypeError(msg)


def compute_bounds(entities: Iterable[Entity], padding: float = BOUNDS_PADDING) -> Bounds:
    """Compute the padded bounding rectangle of ``entities``.

    Empty input, or input whose extent or padded size is not finite, yields
    ``DEFAULT_BOUNDS``. Otherwise the tight extent is grown by ``padding``
    on every side, so width and height are always positive for a positive
    padding.
    """
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for entity in entities:
        e_min_x, e_min_y, e_max_x, e_max_y = entity_extent(entity)
        min_x = min(min_x, e_min_x)
        min_y = min(min_y, e_min_y)
        max_x = max(max_x, e_max_x)
        max_y = max(max_y, e_max_y)

    if not all(math.isfinite(v) for v in (min_x, min_y, max_x, max_y)):
        return DEFAULT_BOUNDS

    min_x -= padding
    min_y -= padding
    max_x += padding
    max_y += padding
    width = max_x - min_x
    height = max_y - min_y
    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
        return DEFAULT_BOUNDS

    return Bounds(min_x=min_x, min_y=min_y, width=width, height=height)
