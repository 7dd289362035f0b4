"""Immutable row records for the two lab experiments.

Rows are frozen dataclasses: every edit produces a new record via
:func:`dataclasses.replace`, so a snapshot handed to the presentation layer
never changes underneath it.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from .constants import DEFAULT_FREQUENCY_MHZ


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError("boolean is not a measurement value")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite measurement value {value!r}")
    return number


@dataclass(frozen=True)
class ResistanceMeasurement:
    """One row of the temperature-dependent resistance experiment.

    Attributes:
        id: Dense 1-based row number.
        temperature_c: Heater temperature as entered, °C.
        temperature_k: Derived absolute temperature, K.
        inverse_temperature: Derived ``1/T``, K⁻¹.
        resistance: Sample resistance as entered, Ω.
        conductance: Derived ``G = 1/R``, Ω⁻¹.
        ln_conductance: Derived ``ln G``.
        ionization_energy: Collection-level ΔEᵢ in J, broadcast to all rows.
    """

    id: int
    temperature_c: Optional[float] = None
    temperature_k: Optional[float] = None
    inverse_temperature: Optional[float] = None
    resistance: Optional[float] = None
    conductance: Optional[float] = None
    ln_conductance: Optional[float] = None
    ionization_energy: Optional[float] = None

    @classmethod
    def empty(cls, row_id: int) -> "ResistanceMeasurement":
        return cls(id=int(row_id))

    def is_filled(self) -> bool:
        return self.temperature_c is not None and self.resistance is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResistanceMeasurement":
        """Rebuild a row from a plain mapping, keeping only raw inputs.

        Derived fields are dropped; callers re-derive them so that stale or
        tampered persisted values never reach a snapshot.

        Raises:
            KeyError: If ``id`` is missing.
            TypeError, ValueError: If a value is not a finite number.
        """
        return cls(
            id=int(data["id"]),
            temperature_c=_optional_float(data.get("temperature_c")),
            resistance=_optional_float(data.get("resistance")),
        )


@dataclass(frozen=True)
class AcousticMeasurement:
    """One row of the acousto-optic attenuation experiment.

    Attributes:
        id: Dense 1-based row number.
        x1: First probe position, mm.
        x2: Second probe position, mm.
        deltaI: Intensity ratio ΔI/I₀ (dimensionless).
        frequency: Ultrasound frequency, MHz.
        pathLength: Derived ``X₂ - X₁``, mm.
        wavelength: Derived sound wavelength, mm.
        alpha: Derived attenuation coefficient, dB/mm.
    """

    id: int
    x1: Optional[float] = None
    x2: Optional[float] = None
    deltaI: Optional[float] = None
    frequency: Optional[float] = DEFAULT_FREQUENCY_MHZ
    pathLength: Optional[float] = None
    wavelength: Optional[float] = None
    alpha: Optional[float] = None

    @classmethod
    def empty(cls, row_id: int) -> "AcousticMeasurement":
        return cls(id=int(row_id))

    def is_filled(self) -> bool:
        return self.x1 is not None and self.x2 is not None and self.deltaI is not None
