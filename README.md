# similari

Building blocks for object trackers: axis-aligned and oriented bounding
boxes, polygon clipping, IoU and intersection metrics, non-maximum
suppression, and Kalman filters for 2D points.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Bounding boxes

`similari.bbox.BoundingBox` holds a box as left, top, width, height and
confidence (which must lie in `[0, 1]`). `similari.bbox.Universal2DBox`
holds a box as centre, optional angle, aspect ratio (width / height),
height and confidence; a box with an angle is oriented.

```python
from similari.bbox import BoundingBox, Universal2DBox, normalize_angle

bb = BoundingBox(0.0, 0.0, 6.0, 8.0)
ub = bb.as_xyaah()
ub.get_radius()        # 5.0
ub.area()              # 48.0
ub.as_ltwh()           # back to BoundingBox; raises BBoxConversionError if rotated

rotated = Universal2DBox(0.0, 0.0, 2.0, 0.5, 2.0)
rotated.get_vertices().get_points()   # closed ring of the four corners

Universal2DBox.ltwh(0.0, 0.0, 6.0, 8.0)
normalize_angle(-0.3)                 # angle brought into [0, 2*pi)
```

`BoundingBox.intersection` and `BoundingBox.iou` give the overlap area and
IoU of two axis-aligned boxes. `Universal2DBox.gen_vertices` caches the
corners of an oriented box; changing its geometry drops the cache.

## Polygons and clipping

`similari.geometry.Polygon` is a simple polygon with an `area()` method
(shoelace formula) and `get_points()`. `sutherland_hodgman_clip(subject,
clipping)` clips one polygon by a convex one.

## Metrics

```python
from similari.metrics import (
    iou, intersection, too_far, dist_in_2r, clip_boxes, intersection_area,
)

iou(box_a, box_b)             # None when a box is missing or they do not overlap
intersection(box_a, box_b)    # overlap area, oriented boxes included
too_far(box_a, box_b)         # True when the enclosing circles do not touch
dist_in_2r(box_a, box_b)      # centre distance relative to the sum of radii
clip_boxes(box_a, box_b)      # Polygon of box_a clipped by box_b
intersection_area(box_a, box_b)
```

`similari.primitive.scalar_metric(a, b)` gives `abs(a - b)`, or `None` when
either value is missing.

## Non-maximum suppression

```python
from similari.nms import nms

kept = nms([(box_a, 0.9), (box_b, None)], nms_threshold=0.7, score_threshold=0.0)
```

A detection whose score is `None` is ranked by its height. Survivors are
returned best-ranked first.

## Kalman filters

```python
from similari.kalman_point import Point2DKalmanFilter, Vec2DKalmanFilter

p = Point2DKalmanFilter()
s = p.predict(p.initiate(1.0, 0.0))
s = p.update(s, 1.1, 0.1)
s.x(), s.y()
cost = Point2DKalmanFilter.calculate_cost(p.distance(s, 1.2, 0.2), False)

v = Vec2DKalmanFilter()
states = v.predict(v.initiate([(0.0, 0.0), (5.0, 5.0)]))
```

Each filter works on `similari.kalman.KalmanState`, which holds the mean
and covariance. `KalmanState.universal_bbox()` and `KalmanState.bbox()`
read a box out of a state whose mean has at least five components, and
`dump()` prints the state to standard error.

## What the package does not do

It has no Kalman filter over bounding boxes: only 2D points are filtered,
although `KalmanState` can express a five-component state as a box. It does
not compute the areas that each box owns exclusively among overlapping
boxes. It is a library only, with no command-line tool and no tracker that
assigns identities over time.