"""Distance and overlap measures between oriented boxes."""

from __future__ import annotations

import math

from similari.bbox import EPS, Universal2DBox
from similari.geometry import Polygon, sutherland_hodgman_clip


def _check_dimensions(left: Universal2DBox, right: Universal2DBox) -> None:
    for side, box in (("left", left), ("right", right)):
        if not box.aspect > 0.0:
            raise ValueError(f"{side} box aspect must be positive, got {box.aspect}")
        if not box.height > 0.0:
            raise ValueError(f"{side} box height must be positive, got {box.height}")


def too_far(left: Universal2DBox, right: Universal2DBox) -> bool:
    """True when the circumscribed circles of the boxes do not touch."""
    _check_dimensions(left, right)
    max_distance = left.get_radius() + right.get_radius()
    dx = left.xc - right.xc
    dy = left.yc - right.yc
    return dx * dx + dy * dy > max_distance * max_distance


def dist_in_2r(left: Universal2DBox, right: Universal2DBox) -> float:
    """Distance between centers relative to the sum of the boxes' radii."""
    _check_dimensions(left, right)
    radial_distance = left.get_radius() + right.get_radius()
    dx = left.xc - right.xc
    dy = left.yc - right.yc
    return math.sqrt(dx * dx + dy * dy) / math.sqrt(
        radial_distance * radial_distance + EPS
    )


def _vertices(box: Universal2DBox) -> Polygon:
    cached = box.cached_vertices
    return cached if cached is not None else box.get_vertices()


def intersection(left: Universal2DBox, right: Universal2DBox) -> float:
    """Area shared by two boxes, taking their rotation into account."""
    if too_far(left, right):
        return 0.0
    return sutherland_hodgman_clip(_vertices(left), _vertices(right)).area()


def iou(left: Universal2DBox | None, right: Universal2DBox | None) -> float | None:
    """Intersection over union, or None if a box is missing or they do not overlap."""
    if left is None or right is None:
        return None
    inter = intersection(left, right)
    if inter == 0.0:
        return None
    union = (
        left.height * left.height * left.aspect
        + right.height * right.height * right.aspect
        - inter
    )
    return inter / union


def clip_boxes(subject: Universal2DBox, clipping: Universal2DBox) -> Polygon:
    """Polygon of ``subject`` clipped by ``clipping``; a missing angle counts as zero."""
    return sutherland_hodgman_clip(_vertices(subject), _vertices(clipping))


def intersection_area(subject: Universal2DBox, clipping: Universal2DBox) -> float:
    """Area of :func:`clip_boxes`."""
    return clip_boxes(subject, clipping).area()