"""DXF AutoCAD Color Index (ACI) to RGB lookup."""

from __future__ import annotations

from .models import WHITE, Color

# Supported palette subset; every other index renders white
ACI_PALETTE: dict[int, Color] = {
    1: (255, 0, 0),  # red
    2: (255, 255, 0),  # yellow
    3: (0, 255, 0),  # green
    4: (0, 255, 255),  # cyan
    5: (0, 0, 255),  # blue
    6: (255, 0, 255),  # magenta
    7: (255, 255, 255),  # white
    8: (128, 128, 128),  # gray
    9: (192, 192, 192),  # light gray
    10: (240, 240, 240),
    11: (255, 255, 0),
    12: (0, 128, 0),
    13: (0, 128, 128),
    14: (0, 0, 128),
    15: (128, 0, 128),
    251: (200, 200, 200),
    252: (180, 180, 180),
    253: (160, 160, 160),
    254: (140, 140, 140),
    255: (120, 120, 120),
}


def color_from_index(index: int) -> Color:
    """Resolve a palette index to an RGB triple (white when unrecognized)."""
    return ACI_PALETTE.get(index, WHITE)


def color_from_value(value: str) -> Color:
    """Resolve a raw group-code 62 value. Non-integer values resolve to white."""
    try:
        index = int(value)
    except ValueError:
        return WHITE
    return color_from_index(index)
