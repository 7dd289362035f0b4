"""Validate raw numeric input against the lab's bound table.

Each field kind is checked by its own pure function; :func:`validate` only
dispatches on the field enum. A ``None`` value (an empty cell) always
validates, since every field is optional until the row is committed.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Optional, Union

from .config import DEFAULT_BOUNDS, ValidationBounds
from .schema import AcousticField, ResistanceField, coerce_field

Field = Union[ResistanceField, AcousticField]


def parse_value(text) -> Optional[float]:
    """Parse one table cell into a float.

    Args:
        text: Raw cell content. Strings may use a comma as the decimal
            separator; numbers are passed through; ``None`` means empty.

    Returns:
        float | None: Parsed number, or ``None`` for an empty cell.

    Raises:
        ValueError: If the text is not a number.
    """
    if text is None:
        return None
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)
    cleaned = str(text).strip()
    if not cleaned:
        return None
    try:
        return float(cleaned.replace(",", "."))
    except ValueError:
        raise ValueError(f"'{cleaned}' is not a number") from None


def _check_temperature(value: float, bounds: ValidationBounds) -> Optional[str]:
    if value < bounds.temperature_min or value > bounds.temperature_max:
        return (
            f"Temperature must be between {bounds.temperature_min:g} °C "
            f"and {bounds.temperature_max:g} °C"
        )
    return None


def _check_resistance(value: float, bounds: ValidationBounds) -> Optional[str]:
    if value <= 0 or value > bounds.resistance_max:
        return (
            f"Resistance must be greater than 0 Ω and at most "
            f"{bounds.resistance_max:g} Ω"
        )
    return None


def _check_position(value: float, bounds: ValidationBounds) -> Optional[str]:
    if value < bounds.position_min:
        return f"Position must be at least {bounds.position_min:g} mm"
    return None


def _check_delta_i(value: float, bounds: ValidationBounds) -> Optional[str]:
    if value < bounds.deltaI_min or value > bounds.deltaI_max:
        return (
            f"ΔI/I₀ must be between {bounds.deltaI_min:g} "
            f"and {bounds.deltaI_max:g}"
        )
    return None


def _check_frequency(value: float, bounds: ValidationBounds) -> Optional[str]:
    if value <= 0:
        return "Frequency must be greater than 0 MHz"
    return None


def _as_field(field) -> Field:
    if isinstance(field, (ResistanceField, AcousticField)):
        return field
    for kind in (ResistanceField, AcousticField):
        try:
            return coerce_field(field, kind)
        except KeyError:
            continue
    raise KeyError(f"Unknown field '{field}'")


_CHECKS: Dict[Field, Callable[[float, ValidationBounds], Optional[str]]] = {
    ResistanceField.TEMPERATURE_C: _check_temperature,
    ResistanceField.RESISTANCE: _check_resistance,
    AcousticField.X1: _check_position,
    AcousticField.X2: _check_position,
    AcousticField.DELTA_I: _check_delta_i,
    AcousticField.FREQUENCY: _check_frequency,
}


def validate(
    field: Field, value: Optional[float], bounds: ValidationBounds = DEFAULT_BOUNDS
) -> Optional[str]:
    """Check one field value against its bounds.

    Args:
        field: Field discriminator (enum member or its string value).
        value: Parsed value, or ``None`` for an empty cell.
        bounds: Bound table to apply.

    Returns:
        str | None: Human-readable message naming the violated bound, or
        ``None`` when the value is acceptable.

    Raises:
        KeyError: If ``field`` names no known field.
    """
    check = _CHECKS[_as_field(field)]
    if value is None:
        return None
    if not math.isfinite(value):
        return "Value must be a finite number"
    return check(float(value), bounds)


def validate_row_id(value) -> Optional[str]:
    """Row numbers must be positive integers."""
    if value is None or isinstance(value, bool):
        return "ID must be a positive integer"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "ID must be a positive integer"
    if not number.is_integer() or number <= 0:
        return "ID must be a positive integer"
    return None
