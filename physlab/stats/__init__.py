"""
Statistical utilities for lab analysis.

This subpackage provides the numerical fitting routines used by the
analysis layer. All functions operate on arrays and primitive types;
no experiment-specific logic is included.

Modules:
    regression:
        Ordinary least-squares straight lines with Pearson correlation,
        the two-point endpoint slope, the through-origin quadratic fit,
        and population mean/standard deviation.

Design Principle:
    This subpackage has no dependencies on the store, storage, or plotting
    modules. It provides pure numerical utilities that can be independently
    tested.
"""

from .regression import (
    LinearFit,
    QuadraticFit,
    describe,
    linear_regression,
    quadratic_origin_fit,
    two_point_slope,
)

__all__ = [
    "LinearFit",
    "QuadraticFit",
    "describe",
    "linear_regression",
    "quadratic_origin_fit",
    "two_point_slope",
]
