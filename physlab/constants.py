"""Centralized physical constants and unit conversion utilities."""

from __future__ import annotations

BOLTZMANN_CONSTANT: float = 1.380649e-23  # J K^-1
KELVIN_OFFSET: float = 273.0
WAVE_SPEED_MM_PER_US: float = 3.2
DEFAULT_FREQUENCY_MHZ: float = 10.0


def celsius_to_kelvin(temperature_c: float) -> float:
    """Convert a Celsius reading to the absolute temperature scale.

    Args:
        temperature_c (float): Temperature in degrees Celsius.

    Returns:
        float: Temperature in kelvin.

    Note:
        The lab protocol uses ``T = t + 273`` rather than ``t + 273.15``.
        Ionization energies computed here therefore differ slightly from
        values derived with the exact offset.
    """
    return float(temperature_c) + KELVIN_OFFSET


def wavelength_mm(frequency_mhz: float, wave_speed: float = WAVE_SPEED_MM_PER_US) -> float:
    """Return the ultrasonic wavelength in mm for a frequency in MHz.

    A speed in mm/µs divided by a frequency in MHz (1/µs) yields mm directly.
    """
    return float(wave_speed) / float(frequency_mhz)
