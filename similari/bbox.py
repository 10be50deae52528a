"""Axis-aligned (left, top, width, height) and oriented (xc, yc, angle, aspect, height) boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from similari.geometry import Polygon

EPS = 0.00001

_GEOMETRY_FIELDS = frozenset({"xc", "yc", "angle", "aspect", "height"})


class BBoxConversionError(ValueError):
    """Raised when an oriented box cannot be expressed as an axis-aligned one."""


def _check_confidence(confidence: float) -> None:
    if not 0.0 <= confidence <= 1.0:
        raise ValueError("Confidence must lay between 0.0 and 1.0")


def _check_positive(**values: float) -> None:
    for name, value in values.items():
        if not value > 0.0:
            raise ValueError(f"{name} must be positive, got {value}")


@dataclass(eq=False)
class BoundingBox:
    """Axis-aligned box given by its top-left corner, width and height."""

    left: float
    top: float
    width: float
    height: float
    confidence: float = 1.0

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)

    @classmethod
    def new_with_confidence(
        cls, left: float, top: float, width: float, height: float, confidence: float
    ) -> BoundingBox:
        """Create a box with an explicit confidence in [0, 1]."""
        return cls(left, top, width, height, confidence)

    def as_xyaah(self) -> Universal2DBox:
        """Convert to the center/aspect/height form without an angle."""
        return Universal2DBox(
            xc=self.left + self.width / 2.0,
            yc=self.top + self.height / 2.0,
            angle=None,
            aspect=self.width / self.height,
            height=self.height,
            confidence=self.confidence,
        )

    @staticmethod
    def intersection(left: BoundingBox, right: BoundingBox) -> float:
        """Area shared by two boxes with positive sides."""
        _check_positive(
            left_width=left.width,
            left_height=left.height,
            right_width=right.width,
            right_height=right.height,
        )
        x1 = max(left.left, right.left)
        y1 = max(left.top, right.top)
        x2 = min(left.left + left.width, right.left + right.width)
        y2 = min(left.top + left.height, right.top + right.height)
        int_width = x2 - x1
        int_height = y2 - y1
        if int_width > 0.0 and int_height > 0.0:
            return int_width * int_height
        return 0.0

    @staticmethod
    def iou(left: BoundingBox | None, right: BoundingBox | None) -> float | None:
        """Intersection over union, or None if either box is missing."""
        if left is None or right is None:
            return None
        inter = BoundingBox.intersection(left, right)
        union = left.width * left.height + right.width * right.height - inter
        return inter / union

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return (
            abs(self.left - other.left) < EPS
            and abs(self.top - other.top) < EPS
            and abs(self.width - other.width) < EPS
            and abs(self.height - other.height) < EPS
            and abs(self.confidence - other.confidence) < EPS
        )


@dataclass(eq=False)
class Universal2DBox:
    """Box given by its center, optional rotation angle, aspect ratio and height.

    Changing any geometric attribute drops the cached vertices.
    """

    xc: float
    yc: float
    angle: float | None
    aspect: float
    height: float
    confidence: float = 1.0
    _vertex_cache: Polygon | None = field(
        default=None, init=False, repr=False, compare=False
    )

    __hash__ = None  # type: ignore[assignment]

    def __setattr__(self, name: str, value) -> None:
        if name == "confidence":
            _check_confidence(value)
        object.__setattr__(self, name, value)
        if name in _GEOMETRY_FIELDS:
            object.__setattr__(self, "_vertex_cache", None)

    @classmethod
    def new_with_confidence(
        cls,
        xc: float,
        yc: float,
        angle: float | None,
        aspect: float,
        height: float,
        confidence: float,
    ) -> Universal2DBox:
        """Create a box with an explicit confidence in [0, 1]."""
        return cls(xc, yc, angle, aspect, height, confidence)

    @classmethod
    def ltwh(cls, left: float, top: float, width: float, height: float) -> Universal2DBox:
        """Create from left, top, width and height with confidence 1.0."""
        return BoundingBox(left, top, width, height, 1.0).as_xyaah()

    @classmethod
    def ltwh_with_confidence(
        cls, left: float, top: float, width: float, height: float, confidence: float
    ) -> Universal2DBox:
        """Create from left, top, width, height and confidence."""
        return BoundingBox(left, top, width, height, confidence).as_xyaah()

    def get_radius(self) -> float:
        """Half of the box diagonal."""
        half_width = self.aspect * self.height / 2.0
        half_height = self.height / 2.0
        return math.hypot(half_width, half_height)

    def area(self) -> float:
        return self.height * self.aspect * self.height

    def get_vertices(self) -> Polygon:
        """The four corners, rotated by the angle (zero when unset)."""
        angle = self.angle if self.angle is not None else 0.0
        c = math.cos(angle)
        s = math.sin(angle)
        half_width = self.height * self.aspect / 2.0
        half_height = self.height / 2.0

        r1x = -half_width * c - half_height * s
        r1y = -half_width * s + half_height * c
        r2x = half_width * c - half_height * s
        r2y = half_width * s + half_height * c

        x, y = self.xc, self.yc
        return Polygon(
            [
                (x + r1x, y + r1y),
                (x + r2x, y + r2y),
                (x - r1x, y - r1y),
                (x - r2x, y - r2y),
            ]
        )

    @property
    def cached_vertices(self) -> Polygon | None:
        """Vertices stored by :meth:`gen_vertices`, if any."""
        return self._vertex_cache

    def gen_vertices(self) -> Universal2DBox:
        """Cache the vertices of an oriented box; boxes without an angle are left as is."""
        if self.angle is not None:
            object.__setattr__(self, "_vertex_cache", self.get_vertices())
        return self

    def rotate(self, angle: float) -> Universal2DBox:
        """Set the angle in place and return the box."""
        self.angle = angle
        return self

    def set_confidence(self, confidence: float) -> None:
        """Set the confidence, which must lay in [0, 1]."""
        self.confidence = confidence

    def as_ltwh(self) -> BoundingBox:
        """Convert to an axis-aligned box; fails when an angle is set."""
        if self.angle is not None:
            raise BBoxConversionError(
                "an oriented box cannot be converted to left/top/width/height"
            )
        width = self.height * self.aspect
        return BoundingBox(
            left=self.xc - width / 2.0,
            top=self.yc - self.height / 2.0,
            width=width,
            height=self.height,
            confidence=self.confidence,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Universal2DBox):
            return NotImplemented
        self_angle = self.angle if self.angle is not None else 0.0
        other_angle = other.angle if other.angle is not None else 0.0
        return (
            abs(self.xc - other.xc) < EPS
            and abs(self.yc - other.yc) < EPS
            and abs(self_angle - other_angle) < EPS
            and abs(self.aspect - other.aspect) < EPS
            and abs(self.height - other.height) < EPS
        )


def normalize_angle(a: float) -> float:
    """Bring an angle in radians into [0, 2*pi)."""
    full = 2.0 * math.pi
    a = a - math.floor(a / full) * full
    return a + full if a < 0.0 else a