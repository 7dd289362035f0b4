"""
Collection-level analysis for the two lab experiments.

Resistance experiment:
- Ionization (activation) energy of the impurity levels from the slope of
  ln G against 1/T. The default estimate uses the two extreme-temperature
  points:
      A = (lnG₁ - lnG₂) / (1/T₁ - 1/T₂),   ΔEᵢ = 2·k·A
  A full least-squares alternative, ΔEᵢ = -2·k·slope, is available.
  The resulting scalar is broadcast to every row of the collection.
- Trend line for the ln G vs 1/T chart (ordinary least squares).
- Summary statistics of the entered rows.

Acoustic experiment:
- Linear regression of α against X₂ with Pearson correlation, plus the
  mean and (population) standard deviation of α.
- Reference frequency-dependence series α²_L(f) with through-origin
  quadratic fits α²_L = b·f².

All functions are pure: inputs are never mutated and new rows are returned.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .constants import BOLTZMANN_CONSTANT
from .config import ACTIVATION_METHODS
from .models import AcousticMeasurement, ResistanceMeasurement
from .stats.regression import (
    LinearFit,
    QuadraticFit,
    describe,
    linear_regression,
    quadratic_origin_fit,
    two_point_slope,
)


def _fit_points(rows: Sequence[ResistanceMeasurement]) -> List[ResistanceMeasurement]:
    return [
        m
        for m in rows
        if m.inverse_temperature is not None and m.ln_conductance is not None
    ]


def ionization_energy_two_point(
    rows: Sequence[ResistanceMeasurement],
) -> Optional[float]:
    """Estimate ΔEᵢ in J from the lowest- and highest-temperature points.

    Args:
        rows: Resistance rows with derived fields populated.

    Returns:
        float | None: ``2·k·A`` with ``A`` the endpoint slope of ln G against
        1/T, or ``None`` with fewer than two usable rows or coincident
        endpoint temperatures.

    Note:
        This is deliberately not a regression: only the two extreme points
        enter the slope, so outliers at either end move the result.
    """
    valid = _fit_points(rows)
    if len(valid) < 2:
        return None
    ordered = sorted(valid, key=lambda m: m.temperature_k)
    point1, point2 = ordered[0], ordered[-1]
    slope = two_point_slope(
        point1.inverse_temperature,
        point1.ln_conductance,
        point2.inverse_temperature,
        point2.ln_conductance,
    )
    if slope is None:
        return None
    return 2.0 * BOLTZMANN_CONSTANT * slope


def ionization_energy_least_squares(
    rows: Sequence[ResistanceMeasurement],
) -> Optional[float]:
    """Estimate ΔEᵢ in J as ``-2·k·slope`` of the OLS fit of ln G on 1/T."""
    valid = _fit_points(rows)
    if len(valid) < 2:
        return None
    fit = linear_regression(
        [m.inverse_temperature for m in valid], [m.ln_conductance for m in valid]
    )
    if fit is None:
        return None
    return -2.0 * BOLTZMANN_CONSTANT * fit.slope


def calculate_ionization_energy(
    rows: Sequence[ResistanceMeasurement], method: str = "two_point"
) -> List[ResistanceMeasurement]:
    """Return new rows with the collection's ΔEᵢ broadcast to each of them.

    Args:
        rows: Resistance rows with derived fields populated.
        method: ``"two_point"`` (default) or ``"least_squares"``.

    Returns:
        list[ResistanceMeasurement]: Copies of ``rows`` whose
        ``ionization_energy`` is the same scalar (or ``None``) everywhere.

    Raises:
        ValueError: If ``method`` is not recognised.
    """
    if method == "two_point":
        energy = ionization_energy_two_point(rows)
    elif method == "least_squares":
        energy = ionization_energy_least_squares(rows)
    else:
        raise ValueError(
            f"Unknown activation-energy method '{method}'; expected one of "
            f"{ACTIVATION_METHODS}"
        )
    return [replace(m, ionization_energy=energy) for m in rows]


@dataclass(frozen=True)
class TrendAnalysis:
    """Scatter points sorted by x and the OLS fit through them (if any)."""

    x: np.ndarray
    y: np.ndarray
    fit: Optional[LinearFit]

    def line(self) -> Tuple[np.ndarray, np.ndarray]:
        if self.fit is None or self.x.size == 0:
            return np.array([]), np.array([])
        return self.fit.line(float(self.x.min()), float(self.x.max()))


def resistance_trend(rows: Sequence[ResistanceMeasurement]) -> TrendAnalysis:
    """Build the ln G vs 1/T scatter (sorted by 1/T) and its trend line."""
    valid = sorted(_fit_points(rows), key=lambda m: m.inverse_temperature)
    x = np.array([m.inverse_temperature for m in valid], dtype=float)
    y = np.array([m.ln_conductance for m in valid], dtype=float)
    return TrendAnalysis(x=x, y=y, fit=linear_regression(x, y))


@dataclass(frozen=True)
class ResistanceSummary:
    count: int
    temperature_range: Optional[Tuple[float, float]]
    resistance_range: Optional[Tuple[float, float]]
    ionization_energy: Optional[float]


def resistance_summary(rows: Sequence[ResistanceMeasurement]) -> ResistanceSummary:
    """Count filled rows and report the temperature and resistance spans.

    Ranges are only reported once at least two rows carry both inputs.
    """
    filled = [m for m in rows if m.is_filled()]
    temperature_range = None
    resistance_range = None
    if len(filled) >= 2:
        temps = [m.temperature_c for m in filled]
        resistances = [m.resistance for m in filled]
        temperature_range = (min(temps), max(temps))
        resistance_range = (min(resistances), max(resistances))
    return ResistanceSummary(
        count=len(filled),
        temperature_range=temperature_range,
        resistance_range=resistance_range,
        ionization_energy=rows[0].ionization_energy if rows else None,
    )


@dataclass(frozen=True)
class AcousticAnalysis:
    """Regression of α on X₂ plus the spread of the measured α values."""

    x2: np.ndarray
    alpha: np.ndarray
    fit: Optional[LinearFit]
    mean_alpha: Optional[float]
    std_alpha: Optional[float]

    @property
    def correlation(self) -> float:
        return self.fit.correlation if self.fit is not None else 0.0

    @property
    def equation(self) -> str:
        if self.fit is None:
            return ""
        return f"α = {self.fit.slope:.4f} × X₂ + {self.fit.intercept:.4f}"

    def line(self) -> Tuple[np.ndarray, np.ndarray]:
        if self.fit is None or self.x2.size == 0:
            return np.array([]), np.array([])
        return self.fit.line(float(self.x2.min()), float(self.x2.max()))


def acoustic_regression(rows: Sequence[AcousticMeasurement]) -> AcousticAnalysis:
    """Regress α against X₂ over rows with X₁, X₂, ΔI/I₀ and α present.

    Points are sorted by X₂. With no usable rows the arrays are empty and
    the fit and statistics are ``None``; with a single point (or a single
    distinct X₂) only the statistics are reported.
    """
    valid = sorted(
        (
            m
            for m in rows
            if m.x1 is not None
            and m.x2 is not None
            and m.deltaI is not None
            and m.alpha is not None
        ),
        key=lambda m: m.x2,
    )
    x2 = np.array([m.x2 for m in valid], dtype=float)
    alpha = np.array([m.alpha for m in valid], dtype=float)
    stats = describe(alpha)
    mean_alpha, std_alpha = stats if stats is not None else (None, None)
    return AcousticAnalysis(
        x2=x2,
        alpha=alpha,
        fit=linear_regression(x2, alpha),
        mean_alpha=mean_alpha,
        std_alpha=std_alpha,
    )


# Frequency dependence of α²_L for lithium niobate, read off the lab manual's
# reference figure. Frequencies in MHz.
FREQUENCY_REFERENCE_MHZ: Tuple[float, ...] = (3.0, 5.0, 7.0, 9.0, 11.0, 13.0)
FREQUENCY_REFERENCE_SERIES: Dict[str, Tuple[float, ...]] = {
    "Room temperature, colored crystal": (1.5, 3.0, 5.0, 8.0, 11.0, 14.0),
    "Room temperature, colorless crystal": (1.2, 2.5, 4.0, 6.0, 9.0, 12.0),
    "250°C, Na-doped to 0.5 mol.%": (1.3, 2.8, 4.5, 7.0, 10.0, 13.0),
    "250°C, Na-doped to 0.1 mol.%": (1.0, 2.0, 3.5, 5.5, 8.0, 11.0),
}


@dataclass(frozen=True)
class FrequencyFit:
    label: str
    frequency: np.ndarray
    value: np.ndarray
    fit: Optional[QuadraticFit]
    curve_x: np.ndarray
    curve_y: np.ndarray

    @property
    def equation(self) -> str:
        if self.fit is None:
            return ""
        return f"α²ₗ = {self.fit.coefficient:.4f}·f²"


def frequency_dependence_series() -> Dict[str, Tuple[np.ndarray, np.ndarray]]:
    """Return the reference ``{label: (f, α²_L)}`` series as arrays."""
    f = np.asarray(FREQUENCY_REFERENCE_MHZ, dtype=float)
    return {
        label: (f.copy(), np.asarray(values, dtype=float))
        for label, values in FREQUENCY_REFERENCE_SERIES.items()
    }


def fit_frequency_dependence(
    series: Optional[Dict[str, Tuple[Sequence[float], Sequence[float]]]] = None,
    f_range: Tuple[float, float] = (3.0, 13.0),
    step: float = 0.1,
) -> List[FrequencyFit]:
    """Fit ``α²_L = b·f²`` to each series and sample the curve over ``f_range``.

    Only points inside ``f_range`` are kept for display; the coefficient is
    fitted on the full series. A series that cannot be fitted yields an
    empty curve.
    """
    if series is None:
        series = frequency_dependence_series()
    f_min, f_max = f_range
    out: List[FrequencyFit] = []
    for label, (f, values) in series.items():
        f_arr = np.asarray(f, dtype=float)
        v_arr = np.asarray(values, dtype=float)
        fit = quadratic_origin_fit(f_arr, v_arr)
        if fit is not None:
            curve_x, curve_y = fit.curve(f_min, f_max, step=step)
        else:
            curve_x, curve_y = np.array([]), np.array([])
        shown = (f_arr >= f_min) & (f_arr <= f_max)
        out.append(
            FrequencyFit(
                label=label,
                frequency=f_arr[shown],
                value=v_arr[shown],
                fit=fit,
                curve_x=curve_x,
                curve_y=curve_y,
            )
        )
    return out
