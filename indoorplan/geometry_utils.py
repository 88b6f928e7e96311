# Indoorplan imports
from indoorplan.models import LineString, Point, Polygon, Position

# Standard library imports
from typing import List, NamedTuple, Sequence, Tuple

# Third-party imports
import numpy as np


class SegmentProjection(NamedTuple):
    distance: float
    nearest: Position


def point_to_segment_distance(p: Sequence[float], a: Sequence[float], b: Sequence[float]) -> SegmentProjection:
    """
    Distance from point P to segment A->B and the closest point on the segment.

    The projection parameter t is clamped to [0, 1] so the nearest point never
    leaves the segment. A zero-length segment (A == B) falls back to the
    Euclidean distance to A.

    Args:
        p: Query point (x, y).
        a: Segment start (x, y).
        b: Segment end (x, y).

    Returns:
        SegmentProjection: (distance, nearest) where nearest is an (x, y) tuple.
    """
    dx, dy = b[0] - a[0], b[1] - a[1]
    seg_len_sq = dx * dx + dy * dy
    if seg_len_sq == 0:
        return SegmentProjection(float(np.hypot(p[0] - a[0], p[1] - a[1])), (float(a[0]), float(a[1])))
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / seg_len_sq
    t = max(0.0, min(1.0, t))
    nearest = (float(a[0] + t * dx), float(a[1] + t * dy))
    return SegmentProjection(float(np.hypot(p[0] - nearest[0], p[1] - nearest[1])), nearest)


def midpoint(coords: Sequence[Sequence[float]]) -> Position:
    """Midpoint of a 2-point LineString."""
    a, b = coords[0], coords[1]
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def centroid(rings: Sequence[Sequence[Sequence[float]]]) -> Position:
    """
    Vertex centroid of a polygon's outer ring.

    The ring is closed (first == last), so the duplicated closing vertex is
    excluded and the mean is taken over the n distinct vertices. This is the
    vertex average, not the area-weighted centroid.

    Args:
        rings: Polygon coordinates, outer ring first.

    Returns:
        Position: (x, y) mean of the distinct outer-ring vertices.
    """
    ring = np.asarray(rings[0], dtype=float)[:-1]
    cx, cy = ring.mean(axis=0)
    return (float(cx), float(cy))


def rotate_point(point: Sequence[float], center: Sequence[float], angle_deg: float) -> Position:
    """Rotate ``point`` counter-clockwise about ``center`` by ``angle_deg`` degrees."""
    rad = np.radians(angle_deg)
    cos, sin = np.cos(rad), np.sin(rad)
    dx = point[0] - center[0]
    dy = point[1] - center[1]
    return (float(center[0] + dx * cos - dy * sin), float(center[1] + dx * sin + dy * cos))


def rotate_points(points: Sequence[Sequence[float]], center: Sequence[float], angle_deg: float) -> List[Position]:
    """Vectorised ``rotate_point`` over a sequence of points."""
    pts = np.asarray(points, dtype=float)
    rad = np.radians(angle_deg)
    cos, sin = np.cos(rad), np.sin(rad)
    dx = pts[:, 0] - center[0]
    dy = pts[:, 1] - center[1]
    xs = center[0] + dx * cos - dy * sin
    ys = center[1] + dx * sin + dy * cos
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def get_object_center(geometry) -> Position:
    """
    Center of any supported geometry.

    Point -> itself, LineString -> midpoint, Polygon -> vertex centroid.
    Anything else returns the origin (0.0, 0.0); callers should not rely on
    that value for unsupported shapes.
    """
    if isinstance(geometry, Point):
        return geometry.coordinates
    if isinstance(geometry, LineString):
        return midpoint(geometry.coordinates)
    if isinstance(geometry, Polygon):
        return centroid(geometry.coordinates)
    return (0.0, 0.0)


def translate_geometry(geometry, dx: float, dy: float):
    """Translate every vertex of ``geometry`` by (dx, dy). Result type matches input."""
    if isinstance(geometry, Point):
        x, y = geometry.coordinates
        return Point((x + dx, y + dy))
    if isinstance(geometry, LineString):
        return LineString([(x + dx, y + dy) for x, y in geometry.coordinates])
    if isinstance(geometry, Polygon):
        return Polygon([[(x + dx, y + dy) for x, y in ring] for ring in geometry.coordinates])
    return geometry


def create_rect_polygon(cx: float, cy: float, half_width: float, half_height: float) -> Polygon:
    """Axis-aligned rectangle centred at (cx, cy), ring closed explicitly."""
    return Polygon([[
        (cx - half_width, cy - half_height),
        (cx + half_width, cy - half_height),
        (cx + half_width, cy + half_height),
        (cx - half_width, cy + half_height),
        (cx - half_width, cy - half_height),  # close ring
    ]])


def bbox_from_coords(rings: Sequence[Sequence[Sequence[float]]]) -> Tuple[float, float, float, float]:
    """Bounding box (min_x, min_y, max_x, max_y) of a polygon's outer ring."""
    ring = np.asarray(rings[0], dtype=float)
    min_x, min_y = ring.min(axis=0)
    max_x, max_y = ring.max(axis=0)
    return (float(min_x), float(min_y), float(max_x), float(max_y))
