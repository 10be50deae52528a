"""Kalman filters predicting single 2D points and collections of them."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from similari.kalman import CHI2INV95, CHI2_UPPER_BOUND, DT, KalmanState

DIM_2D_POINT = 2
DIM_2D_POINT_X2 = DIM_2D_POINT * 2


class Point2DKalmanFilter:
    """Constant-velocity filter over (x, y)."""

    def __init__(self, position_weight: float = 1.0 / 20.0, velocity_weight: float = 1.0 / 160.0):
        self.position_weight = position_weight
        self.velocity_weight = velocity_weight
        motion = np.eye(DIM_2D_POINT_X2)
        motion[:DIM_2D_POINT, DIM_2D_POINT:] = np.eye(DIM_2D_POINT) * DT
        self._motion = motion
        self._update = np.eye(DIM_2D_POINT, DIM_2D_POINT_X2)

    def _std_position(self, k: float) -> list[float]:
        return [k * self.position_weight] * DIM_2D_POINT

    def _std_velocity(self, k: float) -> list[float]:
        return [k * self.velocity_weight] * DIM_2D_POINT

    def initiate(self, x: float, y: float) -> KalmanState:
        """Start a state from the first observed point."""
        mean = np.array([x, y, 0.0, 0.0], dtype=float)
        std = np.array(self._std_position(2.0) + self._std_velocity(10.0))
        return KalmanState(mean, np.diag(std * std))

    def predict(self, state: KalmanState) -> KalmanState:
        """Advance the state by one step."""
        std = np.array(self._std_position(1.0) + self._std_velocity(1.0))
        mean = self._motion @ state.mean
        covariance = self._motion @ state.covariance @ self._motion.T + np.diag(std * std)
        return KalmanState(mean, covariance)

    def _project(self, state: KalmanState) -> tuple[np.ndarray, np.ndarray]:
        std = np.array(self._std_position(1.0))
        mean = self._update @ state.mean
        covariance = self._update @ state.covariance @ self._update.T + np.diag(std * std)
        return mean, covariance

    def update(self, state: KalmanState, x: float, y: float) -> KalmanState:
        """Correct the state with an observed point."""
        projected_mean, projected_cov = self._project(state)
        b = (state.covariance @ self._update.T).T
        gain = np.linalg.solve(np.tril(projected_cov), b)
        innovation = np.array([x, y], dtype=float) - projected_mean
        mean = state.mean + innovation @ gain
        covariance = state.covariance - gain.T @ projected_cov @ gain
        return KalmanState(mean, covariance)

    def distance(self, state: KalmanState, x: float, y: float) -> float:
        """Squared Mahalanobis distance between the projected state and a point."""
        projected_mean, projected_cov = self._project(state)
        residual = np.array([x, y], dtype=float) - projected_mean
        lower = np.linalg.cholesky(projected_cov)
        solved = np.linalg.solve(lower, residual)
        return float(solved @ solved)

    @staticmethod
    def calculate_cost(distance: float, inverted: bool) -> float:
        """Gate a distance by the 95% chi-square bounds."""
        if not inverted:
            return CHI2_UPPER_BOUND if distance > CHI2INV95[1] else distance
        return 0.0 if distance > CHI2INV95[4] else CHI2_UPPER_BOUND - distance


def _check_lengths(states: Sequence[KalmanState], points: Sequence[tuple[float, float]]) -> None:
    if len(states) != len(points):
        raise ValueError("Lengths of state and points must match")


class Vec2DKalmanFilter:
    """Applies one point filter to many independent points at once."""

    def __init__(self, position_weight: float = 1.0 / 20.0, velocity_weight: float = 1.0 / 160.0):
        self._filter = Point2DKalmanFilter(position_weight, velocity_weight)

    def initiate(self, points: Iterable[tuple[float, float]]) -> list[KalmanState]:
        """Start one state per point."""
        return [self._filter.initiate(x, y) for x, y in points]

    def predict(self, states: Iterable[KalmanState]) -> list[KalmanState]:
        """Advance every state by one step."""
        return [self._filter.predict(s) for s in states]

    def update(
        self, states: Sequence[KalmanState], points: Sequence[tuple[float, float]]
    ) -> list[KalmanState]:
        """Correct each state with its matching point."""
        states, points = list(states), list(points)
        _check_lengths(states, points)
        return [self._filter.update(s, x, y) for s, (x, y) in zip(states, points)]

    def distance(
        self, states: Sequence[KalmanState], points: Sequence[tuple[float, float]]
    ) -> list[float]:
        """Distance of each state to its matching point."""
        states, points = list(states), list(points)
        _check_lengths(states, points)
        return [self._filter.distance(s, x, y) for s, (x, y) in zip(states, points)]

    @staticmethod
    def calculate_cost(distances: Iterable[float], inverted: bool) -> list[float]:
        """Gate every distance as :meth:`Point2DKalmanFilter.calculate_cost` does."""
        return [Point2DKalmanFilter.calculate_cost(d, inverted) for d in distances]