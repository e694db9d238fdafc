"""Read DXF text and produce a normalized, renderer-agnostic drawing.

The parser is tolerant: it does not validate the file against the DXF
grammar. It tracks whether the scan is inside an ENTITIES/BLOCKS section,
hands every recognized type marker to its decoder, and folds the decoded
entities into an immutable tuple in document order.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path

from .bounds import compute_bounds
from .decoders import DECODERS
from .models import (
    Circle,
    Drawing,
    DrawingInventory,
    Entity,
    Line,
    Point,
    Polyline,
    Text,
)
from .tag_scanner import TagStream, scan_lines

logger = logging.getLogger(__name__)

_ENTITY_SECTIONS = frozenset({"ENTITIES", "BLOCKS"})
_OTHER_SECTIONS = frozenset({"TABLES", "OBJECTS"})


def parse_dxf(text: str) -> Drawing:
    """Parse DXF text into a drawing.

    Args:
        text: Raw content of a DXF file (ASCII variant).

    Returns:
        The decoded entities in document order. When nothing is recognized,
        the placeholder drawing is returned instead, so the result is never
        empty.
    """
    drawing = decode_entities(scan_lines(text))
    if not drawing:
        logger.info("No entities recognized; substituting placeholder drawing")
        return placeholder_drawing()
    return drawing


def decode_entities(stream: TagStream) -> Drawing:
    """Decode every recognized entity of ``stream``, without placeholder substitution."""
    entities: list[Entity] = []
    in_entities = False
    i = 0
    while i < len(stream):
        line = stream.line(i)

        if line == "SECTION" and stream.line(i + 1) == "2":
            name = stream.line(i + 2)
            if name in _ENTITY_SECTIONS:
                in_entities = True
            elif name in _OTHER_SECTIONS:
                in_entities = False
        elif line == "ENDSEC":
            in_entities = False

        # Markers are values of a 0 group code; e.g. HATCH "2 / SOLID" is not one
        decoder = None
        if in_entities and stream.line(i - 1) == "0":
            decoder = DECODERS.get(line)
        if decoder is None:
            i += 1
            continue

        result = decoder(stream, i)
        if result.entity is not None:
            entities.append(result.entity)
        i += result.consumed

    logger.debug("Decoded %d entities from %d lines", len(entities), len(stream))
    return tuple(entities)


def read_dxf(dxf_path: str | Path) -> Drawing:
    """Read a DXF file from disk and parse it.

    Undecodable bytes are replaced rather than rejected; filesystem errors
    propagate to the caller.
    """
    text = Path(dxf_path).read_text(encoding="utf-8", errors="replace")
    return parse_dxf(text)


def placeholder_drawing() -> Drawing:
    """Return the fixed demo drawing shown when a file yields no entities."""
    white = (255, 255, 255)
    red = (255, 0, 0)
    blue = (0, 0, 255)
    return (
        _rectangle(50, 50, 400, 200, white),
        _rectangle(60, 60, 380, 180, (0, 255, 255)),
        Line(color=red, x1=50, y1=80, x2=10, y2=80),
        Line(color=red, x1=50, y1=120, x2=10, y2=120),
        Line(color=red, x1=50, y1=160, x2=10, y2=160),
        Line(color=blue, x1=450, y1=80, x2=500, y2=80),
        Line(color=blue, x1=450, y1=120, x2=500, y2=120),
        Line(color=blue, x1=450, y1=160, x2=500, y2=160),
        _rectangle(150, 70, 80, 160, (0, 255, 0)),
        _rectangle(250, 70, 80, 160, (255, 128, 0)),
        Circle(color=white, center=Point(350, 150), radius=40),
        Text(color=white, content="مخطط توضيحي", position=Point(200, 280), height=12),
    )


def is_placeholder(drawing: Drawing) -> bool:
    return drawing == placeholder_drawing()


def _rectangle(x: float, y: float, w: float, h: float, color: tuple[int, int, int]) -> Polyline:
    points = (Point(x, y), Point(x + w, y), Point(x + w, y + h), Point(x, y + h))
    return Polyline(color=color, points=points, closed=True)


def inventory(drawing: Drawing) -> DrawingInventory:
    """Summarize a drawing: entities per kind and per layer, plus its bounds."""
    kinds: Counter[str] = Counter()
    layers: Counter[str] = Counter()
    for entity in drawing:
        kinds[entity_kind(entity)] += 1
        layers[entity.layer or ""] += 1

    return DrawingInventory(
        entity_counts=dict(kinds),
        layers=dict(layers),
        bounds=compute_bounds(drawing),
        is_placeholder=is_placeholder(drawing),
    )


def entity_kind(entity: Entity) -> str:
    """Return the display name of an entity's kind, e.g. ``"Line"``."""
    name = type(entity).__name__
    return "Point" if name == "PointEntity" else name
