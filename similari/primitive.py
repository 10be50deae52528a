"""Metric for plain scalar observation attributes."""

from __future__ import annotations


def scalar_metric(left: float | None, right: float | None) -> float | None:
    """Absolute difference of two scalars, or None if either is missing."""
    if left is None or right is None:
        return None
    return abs(left - right)