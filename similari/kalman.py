"""Kalman filter state shared by the point and box filters."""

from __future__ import annotations

import sys
from dataclasses import dataclass

import numpy as np

from similari.bbox import BoundingBox, Universal2DBox

CHI2_UPPER_BOUND = 100.0

CHI2INV95 = (
    3.8415,
    5.9915,
    7.8147,
    9.4877,
    11.070,
    12.592,
    14.067,
    15.507,
    16.919,
)

DT = 1


def _pretty(matrix: np.ndarray) -> str:
    rows = np.atleast_2d(matrix)
    lines = [""]
    lines.extend("    " + " ".join(f"{value:12.3f}" for value in row) for row in rows)
    return "\n".join(lines)


@dataclass(frozen=True, eq=False)
class KalmanState:
    """Mean vector and covariance matrix of a filter."""

    mean: np.ndarray
    covariance: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "mean", np.asarray(self.mean, dtype=float))
        object.__setattr__(self, "covariance", np.asarray(self.covariance, dtype=float))

    def dump(self) -> None:
        """Print the state to standard error."""
        print(f"Mean={_pretty(self.mean)}", file=sys.stderr)
        print(f"Covariance={_pretty(self.covariance)}", file=sys.stderr)

    def universal_bbox(self) -> Universal2DBox:
        """The box described by the first five components of the mean.

        A zero angle is reported as no angle.
        """
        if len(self.mean) < 5:
            raise ValueError("the state holds fewer than five components")
        xc, yc, angle, aspect, height = (float(v) for v in self.mean[:5])
        return Universal2DBox(xc, yc, None if angle == 0.0 else angle, aspect, height)

    def bbox(self) -> BoundingBox:
        """The axis-aligned box of the state; fails for oriented boxes."""
        return self.universal_bbox().as_ltwh()

    def x(self) -> float:
        return float(self.mean[0])

    def y(self) -> float:
        return float(self.mean[1])