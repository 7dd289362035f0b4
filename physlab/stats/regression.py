"""Provide the fitting routines behind the lab charts and constants.

This module supports:
- ordinary least-squares straight lines with Pearson correlation (trend
  lines on the lnG vs 1/T chart and the α vs X₂ chart),
- the two-point endpoint slope used for the ionization-energy estimate,
- the through-origin quadratic ``y = b·x²`` used for frequency-dependence
  reference curves, and
- population mean / standard deviation summaries.

Insufficient or degenerate data never yields NaN or inf: each routine
returns ``None`` (or empty arrays) instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np


def _finite_pairs(x, y) -> Tuple[np.ndarray, np.ndarray]:
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if x_arr.shape != y_arr.shape:
        raise ValueError("x and y must have the same length.")
    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    return x_arr[mask], y_arr[mask]


@dataclass(frozen=True)
class LinearFit:
    """Straight-line fit ``y = slope·x + intercept``."""

    slope: float
    intercept: float
    correlation: float
    n: int

    def predict(self, x):
        return self.slope * np.asarray(x, dtype=float) + self.intercept

    def line(self, x_min: float, x_max: float) -> Tuple[np.ndarray, np.ndarray]:
        """Return the two endpoints of the trend segment over ``[x_min, x_max]``."""
        xs = np.array([float(x_min), float(x_max)])
        return xs, self.predict(xs)


@dataclass(frozen=True)
class QuadraticFit:
    """Through-origin quadratic ``y = coefficient·x²``."""

    coefficient: float
    n: int

    def predict(self, x):
        x_arr = np.asarray(x, dtype=float)
        return self.coefficient * x_arr**2

    def curve(
        self, x_min: float, x_max: float, step: float = 0.1
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Sample the curve on ``[x_min, x_max]`` (inclusive) every ``step``."""
        if step <= 0:
            raise ValueError("step must be positive.")
        if x_max < x_min:
            return np.array([]), np.array([])
        count = int(math.floor((x_max - x_min) / step + 1e-9)) + 1
        xs = x_min + step * np.arange(count)
        return xs, self.predict(xs)


def linear_regression(x: Sequence[float], y: Sequence[float]) -> Optional[LinearFit]:
    """Fit an ordinary least-squares straight line to finite data pairs.

    Args:
        x (Sequence[float]): Independent variable values.
        y (Sequence[float]): Dependent variable values.

    Returns:
        LinearFit | None: Slope, intercept and Pearson correlation, or
        ``None`` when fewer than two finite points or fewer than two distinct
        x values are available (no trend line can be drawn).

    Note:
        Closed-form sums are used:
        ``slope = (nΣxy − ΣxΣy) / (nΣx² − (Σx)²)``,
        ``intercept = (Σy − slope·Σx) / n``, and
        ``r = (nΣxy − ΣxΣy) / √((nΣx² − (Σx)²)(nΣy² − (Σy)²))``
        with ``r = 0`` when the denominator vanishes (constant y).
    """
    x_arr, y_arr = _finite_pairs(x, y)
    n = int(len(x_arr))
    if n < 2 or len(np.unique(x_arr)) < 2:
        return None

    sum_x = float(np.sum(x_arr))
    sum_y = float(np.sum(y_arr))
    sum_xy = float(np.sum(x_arr * y_arr))
    sum_x2 = float(np.sum(x_arr**2))
    sum_y2 = float(np.sum(y_arr**2))

    numerator = n * sum_xy - sum_x * sum_y
    sxx = n * sum_x2 - sum_x**2
    syy = n * sum_y2 - sum_y**2
    if sxx == 0:
        return None

    slope = numerator / sxx
    intercept = (sum_y - slope * sum_x) / n

    denominator = math.sqrt(sxx * syy) if sxx * syy > 0 else 0.0
    correlation = numerator / denominator if denominator != 0 else 0.0
    correlation = max(-1.0, min(1.0, correlation))

    return LinearFit(
        slope=float(slope),
        intercept=float(intercept),
        correlation=float(correlation),
        n=n,
    )


def two_point_slope(
    x1: float, y1: float, x2: float, y2: float
) -> Optional[float]:
    """Slope ``(y1 - y2) / (x1 - x2)`` through two points; ``None`` if vertical."""
    dx = float(x1) - float(x2)
    if dx == 0:
        return None
    slope = (float(y1) - float(y2)) / dx
    return slope if math.isfinite(slope) else None


def quadratic_origin_fit(
    x: Sequence[float], y: Sequence[float]
) -> Optional[QuadraticFit]:
    """Least-squares fit of ``y = b·x²`` with no intercept or linear term.

    ``b = Σ(x²·y) / Σ(x⁴)``; returns ``None`` for empty input or when every
    x is zero.
    """
    x_arr, y_arr = _finite_pairs(x, y)
    if len(x_arr) == 0:
        return None
    sum_x4 = float(np.sum(x_arr**4))
    if sum_x4 == 0:
        return None
    coefficient = float(np.sum(x_arr**2 * y_arr)) / sum_x4
    return QuadraticFit(coefficient=coefficient, n=int(len(x_arr)))


def describe(values: Sequence[float]) -> Optional[Tuple[float, float]]:
    """Return population ``(mean, std)`` of the finite values, or ``None``."""
    arr = np.asarray(values, dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return None
    return float(np.mean(arr)), float(np.std(arr))
