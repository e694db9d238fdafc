"""Data classes for the normalized 2D drawing model."""

from __future__ import annotations

from typing import TypeAlias

from dataclasses import dataclass, field
from enum import Enum

Color: TypeAlias = tuple[int, int, int]

WHITE: Color = (255, 255, 255)


@dataclass(frozen=True)
class Point:
    x: float
    y: float


# --- Entities ---


@dataclass(frozen=True)
class Entity:
    """Common fields shared by every drawing entity."""
    color: Color = WHITE
    layer: str | None = None  # informational only


@dataclass(frozen=True)
class Line(Entity):
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0


@dataclass(frozen=True)
class Circle(Entity):
    center: Point = field(default_factory=lambda: Point(0, 0))
    radius: float = 5.0


@dataclass(frozen=True)
class Arc(Entity):
    center: Point = field(default_factory=lambda: Point(0, 0))
    radius: float = 5.0
    start_angle: float = 0.0  # degrees, CCW from +X
    end_angle: float = 180.0  # degrees, CCW from +X


@dataclass(frozen=True)
class Polyline(Entity):
    points: tuple[Point, ...] = ()
    closed: bool = False


@dataclass(frozen=True)
class Text(Entity):
    content: str = ""
    position: Point = field(default_factory=lambda: Point(0, 0))
    height: float = 8.0
    rotation: float = 0.0  # degrees


@dataclass(frozen=True)
class Ellipse(Entity):
    center: Point = field(default_factory=lambda: Point(0, 0))
    major_axis: Point = field(default_factory=lambda: Point(0, 0))  # offset from center
    rx: float = 10.0
    ry: float = 5.0
    rotation: float = 0.0  # degrees


@dataclass(frozen=True)
class PointEntity(Entity):
    position: Point = field(default_factory=lambda: Point(0, 0))


@dataclass(frozen=True)
class Face(Entity):
    """A planar three- or four-sided polygon, always drawn closed."""
    points: tuple[Point, ...] = ()

    @property
    def closed(self) -> bool:
        return True


ENTITY_TYPES: tuple[type[Entity], ...] = (
    Line, Circle, Arc, Polyline, Text, Ellipse, PointEntity, Face,
)

Drawing: TypeAlias = tuple[Entity, ...]


# --- Derived geometry ---


@dataclass(frozen=True)
class Bounds:
    """Padded axis-aligned rectangle enclosing a drawing."""
    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height


@dataclass(frozen=True)
class Rect:
    """A target content rectangle in output coordinates."""
    x: float
    y: float
    width: float
    height: float


class AxisConvention(Enum):
    """Vertical-axis convention of a render target."""
    Y_DOWN = "y-down"  # top-left origin (interactive raster surface)
    Y_UP = "y-up"  # bottom-left origin (paginated export)


@dataclass(frozen=True)
class Transform:
    """Scale-and-offset mapping from drawing space into a target rectangle.

    ``offset_x``/``offset_y`` locate the corner of the scaled drawing box that
    is nearest the target's origin: top-left for Y_DOWN, bottom-left for Y_UP.
    """
    scale: float
    offset_x: float
    offset_y: float
    bounds: Bounds
    convention: AxisConvention

    @property
    def scaled_width(self) -> float:
        return self.bounds.width * self.scale

    @property
    def scaled_height(self) -> float:
        return self.bounds.height * self.scale

    @property
    def origin_y(self) -> float:
        """Output Y that drawing-space ``bounds.min_y`` maps to."""
        if self.convention is AxisConvention.Y_DOWN:
            return self.offset_y + self.scaled_height
        return self.offset_y

    @property
    def y_sign(self) -> float:
        return -1.0 if self.convention is AxisConvention.Y_DOWN else 1.0

    def apply(self, x: float, y: float) -> tuple[float, float]:
        out_x = self.offset_x + (x - self.bounds.min_x) * self.scale
        out_y = self.origin_y + self.y_sign * (y - self.bounds.min_y) * self.scale
        return out_x, out_y

    def apply_point(self, pt: Point) -> Point:
        return Point(*self.apply(pt.x, pt.y))

    def scale_length(self, length: float) -> float:
        return length * self.scale

    def apply_angle(self, angle_deg: float) -> float:
        """Map a CCW drawing angle into the target's angle convention."""
        if self.convention is AxisConvention.Y_DOWN:
            return -angle_deg
        return angle_deg


@dataclass
class DrawingInventory:
    """Summary of a parsed drawing, for the inspect command."""
    entity_counts: dict[str, int] = field(default_factory=dict)
    layers: dict[str, int] = field(default_factory=dict)
    bounds: Bounds | None = None
    is_placeholder: bool = False
