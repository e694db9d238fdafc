"""cadverter: Tolerant DXF parsing, bounds and render transforms."""

__version__ = "0.1.0"

from .bounds import compute_bounds
from .colors import color_from_index
from .curves import approximate_spline
from .dxf_reader import parse_dxf, placeholder_drawing, read_dxf
from .export import ExportSettings, export_transform
from .models import AxisConvention, Bounds, Rect, Transform
from .transforms import compute_transform, preview_transform

__all__ = [
    "AxisConvention",
    "Bounds",
    "ExportSettings",
    "Rect",
    "Transform",
    "approximate_spline",
    "color_from_index",
    "compute_bounds",
    "compute_transform",
    "export_transform",
    "parse_dxf",
    "placeholder_drawing",
    "preview_transform",
    "read_dxf",
]
