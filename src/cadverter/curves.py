"""Approximate SPLINE control polygons with a fixed-size polyline.

The sampler blends *all* control points with the full-degree Bernstein
basis, i.e. it evaluates the Bezier curve of the control polygon rather
than the piecewise B-spline. Consumers rely on this shape and on the
fixed sample count, so it is not a de Boor evaluation.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .models import Point

SPLINE_STEPS = 20  # samples = SPLINE_STEPS + 1


def bernstein_basis(i: int, n: int, t: float) -> float:
    """Bernstein polynomial b(i, n) evaluated at ``t``."""
    if i < 0 or i > n:
        return 0.0
    return math.comb(n, i) * t**i * (1.0 - t) ** (n - i)


def approximate_spline(
    control_points: Sequence[Point],
    degree: int = 3,
    steps: int = SPLINE_STEPS,
) -> tuple[Point, ...]:
    """Sample the control polygon at ``steps + 1`` evenly spaced parameters.

    Args:
        control_points: At least two control points, in order.
        degree: Nominal spline degree. Recorded by the decoder but unused
            by the sampling formula.
        steps: Number of parameter intervals; t runs 0..1 inclusive.

    Returns:
        Exactly ``steps + 1`` points, the first and last coinciding with
        the first and last control points.
    """
    if len(control_points) < 2:
        msg = f"Spline needs at least 2 control points, got {len(control_points)}"
        raise ValueError(msg)

    n = len(control_points) - 1
    samples: list[Point] = []
    for k in range(steps + 1):
        t = k / steps
        x = 0.0
        y = 0.0
        for i, cp in enumerate(control_points):
            basis = bernstein_basis(i, n, t)
            x += cp.x * basis
            y += cp.y * basis
        samples.append(Point(x, y))
    return tuple(samples)
