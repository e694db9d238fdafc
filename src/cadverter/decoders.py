"""Decode individual DXF entity records into normalized entities.

Every decoder is a pure function ``(stream, start) -> DecodeResult``. ``start``
is the index of the entity's type marker (the value line of its ``0`` group
code). A decoder reads (code, value) pairs forward from ``start + 1`` until the
next ``0`` record boundary or its scan limit, and reports how many lines it
consumed so the caller can advance without a shared cursor.

Decoding is best-effort: non-numeric values fall back to defaults and never
raise. A record that fails its kind's validity rule is rejected by returning
``DecodeResult(None, consumed)``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple, TypeAlias

from .colors import color_from_value
from .curves import approximate_spline
from .models import (
    WHITE,
    Arc,
    Circle,
    Color,
    Ellipse,
    Entity,
    Face,
    Line,
    Point,
    PointEntity,
    Polyline,
    Text,
)
from .tag_scanner import TagStream

logger = logging.getLogger(__name__)

# Per-kind scan limits, in lines
SCAN_LIMITS: dict[str, int] = {
    "LINE": 80,
    "CIRCLE": 80,
    "ARC": 100,
    "POLYLINE": 500,
    "TEXT": 150,
    "ELLIPSE": 100,
    "SPLINE": 500,
    "POINT": 60,
    "FACE": 120,
}

DEFAULT_RADIUS = 5.0
DEFAULT_ARC_START = 0.0
DEFAULT_ARC_END = 180.0
DEFAULT_TEXT_HEIGHT = 8.0
DEFAULT_ELLIPSE_MAJOR = 10.0
DEFAULT_ELLIPSE_RATIO = 0.5
DEFAULT_SPLINE_DEGREE = 3


class DecodeResult(NamedTuple):
    entity: Entity | None
    consumed: int


Decoder: TypeAlias = Callable[[TagStream, int], DecodeResult]


# --- Value parsing ---


def _to_float(value: str, default: float = 0.0) -> float:
    try:
        result = float(value)
    except ValueError:
        return default
    if not math.isfinite(result):
        return default
    return result


def _to_int(value: str, default: int = 0) -> int:
    try:
        return int(value)
    except ValueError:
        pass
    result = _to_float(value, float(default))
    return int(result)


def _size(value: str, default: float) -> float:
    """Absolute size value; zero or non-numeric falls back to ``default``."""
    result = abs(_to_float(value))
    return result if result else default


def _unescape_mtext(raw: str) -> str:
    return raw.replace("\\P", "\n").replace("\\{", "{").replace("\\}", "}").strip()


@dataclass
class _CommonFields:
    """Draft of the fields every entity kind shares."""
    color: Color = WHITE
    layer: str | None = None

    def read(self, code: str, value: str) -> bool:
        if code == "62":
            self.color = color_from_value(value)
            return True
        if code == "8":
            self.layer = value
            return True
        return False


def _is_group_code(line: str) -> bool:
    return line.removeprefix("-").isdigit()


def _read_record(
    stream: TagStream,
    start: int,
    limit: int,
    continues: frozenset[str] = frozenset(),
) -> tuple[list[tuple[str, str]], int]:
    """Collect (code, value) pairs of the record whose marker is at ``start``.

    Stops at a ``0`` group code unless its value is in ``continues`` (such
    sub-record markers are kept in the output as ``("0", value)``), or after
    ``limit`` lines. A record that lost a line is cut short where the
    pairing breaks: at a code slot that is not a group code, or at a ``0``
    value directly followed by a record marker.

    Returns:
        The pairs and the number of lines consumed from ``start``.
    """
    end = min(len(stream), start + limit)
    pairs: list[tuple[str, str]] = []
    j = start + 1
    while j < end:
        code, value = stream.pair(j)
        if code == "0" and value not in continues:
            break
        if not _is_group_code(code):
            logger.debug("Record at line %d lost sync at line %d", start, j)
            break
        if value == "0" and stream.line(j + 2) in _BOUNDARY_MARKERS:
            logger.debug("Record at line %d lost sync at line %d", start, j)
            j += 1
            break
        pairs.append((code, value))
        j += 2
    return pairs, max(min(j, end) - start, 1)


# --- Decoders ---


def decode_line(stream: TagStream, start: int) -> DecodeResult:
    pairs, consumed = _read_record(stream, start, SCAN_LIMITS["LINE"])
    common = _CommonFields()
    x1 = y1 = x2 = y2 = 0.0
    for code, value in pairs:
        if common.read(code, value):
            continue
        match code:
            case "10":
                x1 = _to_float(value)
            case "20":
                y1 = _to_float(value)
            case "11":
                x2 = _to_float(value)
            case "21":
                y2 = _to_float(value)

    # An all-zero line is indistinguishable from a record with no coordinates
    if x1 == 0 and y1 == 0 and x2 == 0 and y2 == 0:
        logger.debug("Rejected LINE at line %d: no nonzero coordinate", start)
        return DecodeResult(None, consumed)

    return DecodeResult(
        Line(color=common.color, layer=common.layer, x1=x1, y1=y1, x2=x2, y2=y2),
        consumed,
    )


def decode_circle(stream: TagStream, start: int) -> DecodeResult:
    pairs, consumed = _read_record(stream, start, SCAN_LIMITS["CIRCLE"])
    common = _CommonFields()
    cx = cy = 0.0
    radius = DEFAULT_RADIUS
    for code, value in pairs:
        if common.read(code, value):
            continue
        match code:
            case "10":
                cx = _to_float(value)
            case "20":
                cy = _to_float(value)
            case "40":
                radius = _size(value, DEFAULT_RADIUS)

    return DecodeResult(
        Circle(color=common.color, layer=common.layer, center=Point(cx, cy), radius=radius),
        consumed,
    )


def decode_arc(stream: TagStream, start: int) -> DecodeResult:
    pairs, consumed = _read_record(stream, start, SCAN_LIMITS["ARC"])
    common = _CommonFields()
    cx = cy = 0.0
    radius = DEFAULT_RADIUS
    start_angle = DEFAULT_ARC_START
    end_angle = DEFAULT_ARC_END
    for code, value in pairs:
        if common.read(code, value):
            continue
        match code:
            case "10":
                cx = _to_float(value)
            case "20":
                cy = _to_float(value)
            case "40":
                radius = _size(value, DEFAULT_RADIUS)
            case "50":
                start_angle = _to_float(value, DEFAULT_ARC_START)
            case "51":
                end_angle = _to_float(value, DEFAULT_ARC_END)

    return DecodeResult(
        Arc(
            color=common.color,
            layer=common.layer,
            center=Point(cx, cy),
            radius=radius,
            start_angle=start_angle,
            end_angle=end_angle,
        ),
        consumed,
    )


def decode_polyline(stream: TagStream, start: int) -> DecodeResult:
    """Decode LWPOLYLINE (inline vertices) or POLYLINE (VERTEX ... SEQEND)."""
    classic = stream.line(start) == "POLYLINE"
    continues = frozenset({"VERTEX"}) if classic else frozenset()
    pairs, consumed = _read_record(stream, start, SCAN_LIMITS["POLYLINE"], continues)

    common = _CommonFields()
    vertices: list[list[float]] = []
    elevation = 0.0
    closed = False
    in_header = True
    for code, value in pairs:
        if code == "0":
            in_header = False
            continue
        # The classic POLYLINE header carries a dummy 10/20 point
        vertex_field = not classic or not in_header
        if vertex_field and code == "10":
            vertices.append([_to_float(value), 0.0])
        elif vertex_field and code == "20":
            if vertices:
                vertices[-1][1] = _to_float(value)
        elif in_header:
            if common.read(code, value):
                continue
            if code == "38":
                elevation = _to_float(value)
            elif code == "70":
                closed = bool(_to_int(value) & 1)

    if not vertices:
        logger.debug("Rejected %s at line %d: no vertices", stream.line(start), start)
        return DecodeResult(None, consumed)

    points = tuple(Point(x, y + elevation) for x, y in vertices)
    return DecodeResult(
        Polyline(color=common.color, layer=common.layer, points=points, closed=closed),
        consumed,
    )


def decode_text(stream: TagStream, start: int) -> DecodeResult:
    """Decode TEXT or MTEXT. MTEXT content is assembled from its 3/1 chunks."""
    multiline = stream.line(start) == "MTEXT"
    pairs, consumed = _read_record(stream, start, SCAN_LIMITS["TEXT"])
    common = _CommonFields()
    x = y = 0.0
    height = DEFAULT_TEXT_HEIGHT
    rotation = 0.0
    content = ""
    chunks: list[str] = []
    for code, value in pairs:
        if common.read(code, value):
            continue
        match code:
            case "10":
                x = _to_float(value)
            case "20":
                y = _to_float(value)
            case "40":
                height = _size(value, DEFAULT_TEXT_HEIGHT)
            case "50":
                rotation = _to_float(value)
            case "1" | "3" if multiline:
                chunks.append(value)
            case "1":
                content = value

    if multiline:
        content = _unescape_mtext("".join(chunks))

    if not content:
        logger.debug("Rejected %s at line %d: empty content", stream.line(start), start)
        return DecodeResult(None, consumed)

    return DecodeResult(
        Text(
            color=common.color,
            layer=common.layer,
            content=content,
            position=Point(x, y),
            height=height,
            rotation=rotation,
        ),
        consumed,
    )


def decode_ellipse(stream: TagStream, start: int) -> DecodeResult:
    pairs, consumed = _read_record(stream, start, SCAN_LIMITS["ELLIPSE"])
    common = _CommonFields()
    cx = cy = mx = my = 0.0
    ratio = DEFAULT_ELLIPSE_RATIO
    fallback_rotation = 0.0
    for code, value in pairs:
        if common.read(code, value):
            continue
        match code:
            case "10":
                cx = _to_float(value)
            case "20":
                cy = _to_float(value)
            case "11":
                mx = _to_float(value)
            case "21":
                my = _to_float(value)
            case "40":
                ratio = _size(value, DEFAULT_ELLIPSE_RATIO)
            case "50":
                fallback_rotation = _to_float(value)

    major = math.hypot(mx, my)
    if major > 0:
        rx = major
        rotation = math.degrees(math.atan2(my, mx))
    else:
        rx = DEFAULT_ELLIPSE_MAJOR
        rotation = fallback_rotation

    return DecodeResult(
        Ellipse(
            color=common.color,
            layer=common.layer,
            center=Point(cx, cy),
            major_axis=Point(mx, my),
            rx=rx,
            ry=rx * ratio,
            rotation=rotation,
        ),
        consumed,
    )


def decode_spline(stream: TagStream, start: int) -> DecodeResult:
    """Decode a SPLINE and flatten it into a Polyline."""
    pairs, consumed = _read_record(stream, start, SCAN_LIMITS["SPLINE"])
    common = _CommonFields()
    degree = DEFAULT_SPLINE_DEGREE
    closed = False
    control_x: list[float] = []
    control_y: list[float] = []
    fit_x: list[float] = []
    fit_y: list[float] = []
    for code, value in pairs:
        if common.read(code, value):
            continue
        match code:
            case "71":
                degree = _to_int(value, DEFAULT_SPLINE_DEGREE) or DEFAULT_SPLINE_DEGREE
            case "70":
                closed = bool(_to_int(value) & 1)
            case "10":
                control_x.append(_to_float(value))
            case "20":
                control_y.append(_to_float(value))
            case "11":
                fit_x.append(_to_float(value))
            case "21":
                fit_y.append(_to_float(value))

    points = _zip_points(control_x, control_y)
    if len(points) < 2:
        points = _zip_points(fit_x, fit_y)
    if len(points) < 2:
        logger.debug("Rejected SPLINE at line %d: fewer than 2 points", start)
        return DecodeResult(None, consumed)

    return DecodeResult(
        Polyline(
            color=common.color,
            layer=common.layer,
            points=approximate_spline(points, degree),
            closed=closed,
        ),
        consumed,
    )


def _zip_points(xs: list[float], ys: list[float]) -> list[Point]:
    """Pair X and Y lists; a missing Y reads as 0."""
    return [Point(x, ys[k] if k < len(ys) else 0.0) for k, x in enumerate(xs)]


def decode_point(stream: TagStream, start: int) -> DecodeResult:
    pairs, consumed = _read_record(stream, start, SCAN_LIMITS["POINT"])
    common = _CommonFields()
    x = y = 0.0
    for code, value in pairs:
        if common.read(code, value):
            continue
        match code:
            case "10":
                x = _to_float(value)
            case "20":
                y = _to_float(value)

    return DecodeResult(
        PointEntity(color=common.color, layer=common.layer, position=Point(x, y)),
        consumed,
    )


def decode_face(stream: TagStream, start: int) -> DecodeResult:
    """Decode SOLID, TRACE or 3DFACE into a closed three/four-sided Face."""
    marker = stream.line(start)
    pairs, consumed = _read_record(stream, start, SCAN_LIMITS["FACE"])
    common = _CommonFields()
    coords: dict[str, float] = {}
    for code, value in pairs:
        if common.read(code, value):
            continue
        if code in ("10", "20", "11", "21", "12", "22", "13", "23"):
            coords[code] = _to_float(value)

    corners = [
        Point(coords.get(f"1{k}", 0.0), coords.get(f"2{k}", 0.0)) for k in range(4)
    ]
    has_fourth = "13" in coords or "23" in coords
    if not has_fourth or corners[3] == corners[2]:
        points = tuple(corners[:3])
    elif marker in ("SOLID", "TRACE"):
        # SOLID/TRACE store their corners in zig-zag order
        points = (corners[0], corners[1], corners[3], corners[2])
    else:
        points = tuple(corners)

    return DecodeResult(Face(color=common.color, layer=common.layer, points=points), consumed)


DECODERS: dict[str, Decoder] = {
    "LINE": decode_line,
    "CIRCLE": decode_circle,
    "ARC": decode_arc,
    "LWPOLYLINE": decode_polyline,
    "POLYLINE": decode_polyline,
    "TEXT": decode_text,
    "MTEXT": decode_text,
    "ELLIPSE": decode_ellipse,
    "SPLINE": decode_spline,
    "POINT": decode_point,
    "SOLID": decode_face,
    "TRACE": decode_face,
    "3DFACE": decode_face,
}

# Record markers that end a record whose code/value pairing has shifted
_BOUNDARY_MARKERS = frozenset(DECODERS) | {"ENDSEC", "EOF", "SECTION", "BLOCK", "ENDBLK", "SEQEND"}
