"""Define field identifiers and standardized export column names."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ResistanceField(str, Enum):
    """Editable fields of a resistance-experiment row."""

    TEMPERATURE_C = "temperature_c"
    RESISTANCE = "resistance"


class AcousticField(str, Enum):
    """Editable fields of an acoustic-experiment row."""

    X1 = "x1"
    X2 = "x2"
    DELTA_I = "deltaI"
    FREQUENCY = "frequency"


def coerce_field(value, kind):
    """Return ``value`` as a member of enum ``kind``.

    Accepts an enum member or its string value.

    Raises:
        KeyError: If ``value`` names no field of ``kind``.
    """
    if isinstance(value, kind):
        return value
    try:
        return kind(value)
    except ValueError:
        raise KeyError(f"Unknown {kind.__name__} '{value}'") from None


@dataclass(frozen=True)
class ExportColumns:
    """Container for the spreadsheet column labels, in export order.

    Attributes:
        number: Dense 1-based row number.
        temperature_c: Heater temperature as entered, °C.
        temperature_k: Absolute temperature ``T = t + 273``, K.
        inverse_temperature: ``1/T`` in K⁻¹, the abscissa of the lnG plot.
        resistance: Sample resistance as entered, Ω.
        conductance: ``G = 1/R`` in Ω⁻¹.
        ln_conductance: Natural logarithm of the conductance.
        ionization_energy: Impurity ionization energy ΔEᵢ in J, identical
            on every row of one collection.
    """

    number: str = "№"
    temperature_c: str = "t (°C)"
    temperature_k: str = "T (K)"
    inverse_temperature: str = "1/T (K⁻¹)"
    resistance: str = "R (Ом)"
    conductance: str = "G (Ом⁻¹)"
    ln_conductance: str = "lnG"
    ionization_energy: str = "ΔEᵢ (Дж)"

    def ordered(self) -> list[str]:
        return [
            self.number,
            self.temperature_c,
            self.temperature_k,
            self.inverse_temperature,
            self.resistance,
            self.conductance,
            self.ln_conductance,
            self.ionization_energy,
        ]


EXPORT_COLUMNS = ExportColumns()
