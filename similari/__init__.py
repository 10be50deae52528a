"""Bounding-box geometry, IoU metrics, NMS and 2D point Kalman filters for object tracking."""

__version__ = "0.26.11"