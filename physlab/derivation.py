"""
Derive per-row physical quantities from raw measurement inputs.

Resistance experiment:
    T = t + 273, 1/T, G = 1/R, ln G

Acoustic experiment:
    path length X₂ - X₁, wavelength λ = v / f, and attenuation
    α = 10·log10(ΔI/I₀) / (X₂ - X₁) in dB/mm.

Every derived field is either a finite float or ``None``; division by zero
and logarithms of non-positive values resolve to ``None`` rather than
raising or leaking NaN/inf.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Optional

from .constants import WAVE_SPEED_MM_PER_US, celsius_to_kelvin, wavelength_mm
from .models import AcousticMeasurement, ResistanceMeasurement


def _finite(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value


def _reciprocal(value: Optional[float]) -> Optional[float]:
    if value is None or value == 0:
        return None
    return _finite(1.0 / value)


def _natural_log(value: Optional[float]) -> Optional[float]:
    if value is None or value <= 0:
        return None
    return math.log(value)


def derive_resistance_fields(row: ResistanceMeasurement) -> ResistanceMeasurement:
    """Recompute the derived columns of one resistance row.

    Args:
        row (ResistanceMeasurement): Row with current raw inputs.

    Returns:
        ResistanceMeasurement: New row; ``ionization_energy`` is carried over
        untouched because it depends on the whole collection.

    Note:
        A row missing either raw input gets all four derived fields cleared,
        so a half-entered row never contributes a point to the fit.
    """
    if row.temperature_c is None or row.resistance is None:
        return replace(
            row,
            temperature_k=None,
            inverse_temperature=None,
            conductance=None,
            ln_conductance=None,
        )

    temperature_k = celsius_to_kelvin(row.temperature_c)
    conductance = _reciprocal(row.resistance)
    return replace(
        row,
        temperature_k=temperature_k,
        inverse_temperature=_reciprocal(temperature_k),
        conductance=conductance,
        ln_conductance=_natural_log(conductance),
    )


def attenuation_coefficient(
    x1: Optional[float], x2: Optional[float], delta_i: Optional[float]
) -> Optional[float]:
    """Return α in dB/mm, or ``None`` when it is undefined.

    ``delta_i == 0`` yields ``0.0``. This stands in for infinite attenuation
    and is kept as the lab tool has always reported it.
    """
    if x1 is None or x2 is None or delta_i is None:
        return None
    path_length = x2 - x1
    if path_length == 0:
        return None
    if delta_i > 0:
        return _finite(10.0 * math.log10(delta_i) / path_length)
    if delta_i == 0:
        return 0.0
    return None


def derive_acoustic_fields(
    row: AcousticMeasurement, wave_speed: float = WAVE_SPEED_MM_PER_US
) -> AcousticMeasurement:
    """Recompute path length, wavelength and α for one acoustic row."""
    path_length = None
    if row.x1 is not None and row.x2 is not None:
        path_length = _finite(row.x2 - row.x1)

    wavelength = None
    if row.frequency is not None and row.frequency > 0:
        wavelength = _finite(wavelength_mm(row.frequency, wave_speed))

    return replace(
        row,
        pathLength=path_length,
        wavelength=wavelength,
        alpha=attenuation_coefficient(row.x1, row.x2, row.deltaI),
    )
