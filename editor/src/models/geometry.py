"""Shape geometry and styling math shared by the canvas and the code generator.

Polygons live in a 0-100 percent space of the shape's own box. Shapes without
a polygon (circle, ellipse, rectangle, square, text) get their outline from
border-radius instead.

All output strings are deterministic: the same input always produces the
same bytes, because users copy the generated CSS verbatim.
"""

import math
from typing import Iterable, List, Optional, Tuple

import numpy as np

from constants import (
    SHAPE_TRIANGLE, SHAPE_RIGHT_TRIANGLE, SHAPE_DIAMOND, SHAPE_PENTAGON,
    SHAPE_HEXAGON, SHAPE_STAR, SHAPE_ARROW,
    ROUND_TYPES, BORDER_RADIUS_TYPES, DEFAULT_BORDER_RADIUS,
)

# Vertex lists in winding order, (x%, y%)
POLYGONS = {
    SHAPE_TRIANGLE: ((50, 0), (100, 100), (0, 100)),
    SHAPE_RIGHT_TRIANGLE: ((0, 0), (0, 100), (100, 100)),
    SHAPE_DIAMOND: ((50, 0), (100, 50), (50, 100), (0, 50)),
    SHAPE_PENTAGON: ((50, 0), (100, 38), (82, 100), (18, 100), (0, 38)),
    SHAPE_HEXAGON: ((25, 0), (75, 0), (100, 50), (75, 100), (25, 100), (0, 50)),
    SHAPE_STAR: ((50, 0), (61, 35), (98, 35), (68, 57), (79, 91),
                 (50, 70), (21, 91), (32, 57), (2, 35), (39, 35)),
    SHAPE_ARROW: ((50, 0), (100, 50), (70, 50), (70, 100), (30, 100), (30, 50), (0, 50)),
}

# Corner radius = curve * CURVE_RADIUS_FACTOR, capped per corner
CURVE_RADIUS_FACTOR = 0.3
# Cap as a fraction of the shorter incident edge
CURVE_EDGE_FRACTION = 0.4


def format_number(value) -> str:
    """Format a number the way a browser prints it in a template string.

    Integral values have no decimal point (50.0 -> '50'), others use the
    shortest digits that round-trip (57.63 -> '57.63').
    Magnitudes below 1e-6 stay positional here where a browser would switch
    to exponent form; slider-driven geometry never produces them.
    """
    value = float(value) + 0.0  # folds -0.0 into 0.0
    if value.is_integer():
        return str(int(value))
    return np.format_float_positional(value, trim='-')


def js_round(value) -> int:
    """Round half up, matching Math.round (round() would round half to even)"""
    return int(math.floor(value + 0.5))


def polygon_for(shape_type: str) -> Optional[List[Tuple[int, int]]]:
    """Polygon points for a type, or None for border-radius based types"""
    points = POLYGONS.get(shape_type)
    if points is None:
        return None
    return list(points)


def flat_clip_path(shape_type: str) -> Optional[str]:
    """clip-path polygon() for a type, or None"""
    points = POLYGONS.get(shape_type)
    if points is None:
        return None
    return 'polygon({})'.format(', '.join(f'{x}% {y}%' for x, y in points))


def rounded_corners(shape_type: str, curve) -> Optional[List[Tuple[Tuple[float, float], ...]]]:
    """Rounded corner segments of a polygon type.

    Every vertex is replaced by a quadratic bezier: the curve starts on the
    incoming edge and ends on the outgoing edge, both at distance
    r = min(curve * 0.3, 0.4 * shorter incident edge) from the vertex, with
    the vertex itself as control point.

    Returns:
        [(start, vertex, end), ...] in winding order, points as (x%, y%),
        or None when the type has no polygon
    """
    points = POLYGONS.get(shape_type)
    if points is None:
        return None

    pts = np.asarray(points, dtype=np.float64)
    prev_pts = np.roll(pts, 1, axis=0)
    next_pts = np.roll(pts, -1, axis=0)

    v1 = prev_pts - pts
    v2 = next_pts - pts
    len1 = np.sqrt(v1[:, 0] * v1[:, 0] + v1[:, 1] * v1[:, 1])
    len2 = np.sqrt(v2[:, 0] * v2[:, 0] + v2[:, 1] * v2[:, 1])

    radius = curve * CURVE_RADIUS_FACTOR
    r = np.minimum(radius, np.minimum(len1, len2) * CURVE_EDGE_FRACTION)

    starts = pts + (v1 / len1[:, None]) * r[:, None]
    ends = pts + (v2 / len2[:, None]) * r[:, None]

    return [
        (
            (float(starts[i, 0]), float(starts[i, 1])),
            (float(pts[i, 0]), float(pts[i, 1])),
            (float(ends[i, 0]), float(ends[i, 1])),
        )
        for i in range(len(pts))
    ]


def rounded_clip_path(shape_type: str, curve) -> Optional[str]:
    """clip-path for a polygon type with rounded corners (see rounded_corners)

    Args:
        shape_type: Shape type tag
        curve: Corner rounding amount, 0-100

    Returns:
        path('...') string, the flat polygon() when curve <= 0, or None when
        the type has no polygon
    """
    if shape_type not in POLYGONS:
        return None
    if not curve or curve <= 0:
        return flat_clip_path(shape_type)

    segments = []
    for i, (start, vertex, end) in enumerate(rounded_corners(shape_type, curve)):
        command = 'M' if i == 0 else 'L'
        segments.append(f'{command} {format_number(start[0])} {format_number(start[1])} ')
        segments.append(
            f'Q {format_number(vertex[0])} {format_number(vertex[1])} '
            f'{format_number(end[0])} {format_number(end[1])} '
        )
    segments.append('Z')
    return "path('{}')".format(''.join(segments))


def clip_path_for(shape) -> Optional[str]:
    """clip-path value for a shape, or None when it uses border-radius"""
    if shape.type not in POLYGONS:
        return None
    return rounded_clip_path(shape.type, shape.curve or 0)


def border_radius_for(shape) -> Optional[str]:
    """border-radius value for a shape, or None when it uses a clip-path"""
    if shape.type in ROUND_TYPES:
        return '50%'
    if shape.type in BORDER_RADIUS_TYPES:
        radius = shape.border_radius if shape.border_radius is not None else DEFAULT_BORDER_RADIUS
        return f'{format_number(radius)}%'
    return None


def bounding_box(shapes: Iterable) -> Tuple[float, float, float, float]:
    """Union of all shape boxes as (min_x, min_y, max_x, max_y).

    Rotation is ignored, matching how the export container is sized.
    Empty input gives (0, 0, 0, 0).
    """
    boxes = np.array([(s.x, s.y, s.x + s.width, s.y + s.height) for s in shapes], dtype=np.float64)
    if boxes.size == 0:
        return 0.0, 0.0, 0.0, 0.0
    return (
        float(boxes[:, 0].min()),
        float(boxes[:, 1].min()),
        float(boxes[:, 2].max()),
        float(boxes[:, 3].max()),
    )
