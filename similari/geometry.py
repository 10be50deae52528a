"""Planar points, simple polygons and Sutherland-Hodgman polygon clipping."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple


class Point2D(NamedTuple):
    """A point on the plane."""

    x: float
    y: float


@dataclass(frozen=True)
class Polygon:
    """A simple polygon without holes, stored as an open ring of vertices."""

    vertices: tuple[Point2D, ...]

    def __init__(self, vertices: Iterable[tuple[float, float]] = ()) -> None:
        points = [Point2D(float(x), float(y)) for x, y in vertices]
        if len(points) > 1 and points[0] == points[-1]:
            points.pop()
        object.__setattr__(self, "vertices", tuple(points))

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self):
        return iter(self.vertices)

    def area(self) -> float:
        """Unsigned area computed with the shoelace formula."""
        if len(self.vertices) < 3:
            return 0.0
        doubled = sum(
            a.x * b.y - b.x * a.y
            for a, b in zip(self.vertices, self.vertices[1:] + self.vertices[:1])
        )
        return abs(doubled) / 2.0

    def get_points(self) -> list[tuple[float, float]]:
        """Vertices as a closed ring: the first point is repeated at the end."""
        if not self.vertices:
            return []
        ring = [(p.x, p.y) for p in self.vertices]
        ring.append(ring[0])
        return ring


def _is_inside(q: Point2D, p1: Point2D, p2: Point2D) -> bool:
    r = (p2.x - p1.x) * (q.y - p1.y) - (p2.y - p1.y) * (q.x - p1.x)
    return r <= 0.0


def _compute_intersection(
    cp1: Point2D, cp2: Point2D, s: Point2D, e: Point2D
) -> Point2D:
    dc_x, dc_y = cp1.x - cp2.x, cp1.y - cp2.y
    dp_x, dp_y = s.x - e.x, s.y - e.y
    n1 = cp1.x * cp2.y - cp1.y * cp2.x
    n2 = s.x * e.y - s.y * e.x
    denominator = dc_x * dp_y - dc_y * dp_x
    n3 = 1.0 / denominator if denominator else math.copysign(math.inf, denominator)
    return Point2D((n1 * dp_x - n2 * dc_x) * n3, (n1 * dp_y - n2 * dc_y) * n3)


def _edges(vertices: tuple[Point2D, ...] | list[Point2D]):
    """Yield (start, end) pairs, starting with the closing edge."""
    return zip(vertices[-1:] + vertices[:-1], vertices)


def sutherland_hodgman_clip(subject: Polygon, clipping: Polygon) -> Polygon:
    """Clip ``subject`` by the convex polygon ``clipping``.

    The clipping polygon's vertices are expected in clockwise order
    (y axis pointing up); points on the right of each edge are inside.
    """
    result: list[Point2D] = list(subject.vertices)
    clip_vertices = list(clipping.vertices)

    for c_start, c_end in _edges(clip_vertices):
        source = result
        result = []
        for s_start, s_end in _edges(source):
            if _is_inside(s_end, c_start, c_end):
                if not _is_inside(s_start, c_start, c_end):
                    result.append(_compute_intersection(s_start, s_end, c_start, c_end))
                result.append(s_end)
            elif _is_inside(s_start, c_start, c_end):
                result.append(_compute_intersection(s_start, s_end, c_start, c_end))

    return Polygon(result)