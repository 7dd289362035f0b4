"""Write the resistance measurement table to spreadsheet files.

This module is the export boundary between in-memory snapshots and the
workbook handed to students. Cells are pre-formatted strings so that the
spreadsheet shows exactly the precision of the on-screen table; missing
values are empty cells.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional, Sequence

import pandas as pd

from .models import ResistanceMeasurement
from .schema import EXPORT_COLUMNS

DEFAULT_WORKBOOK_NAME = "физика_измерения.xlsx"
DEFAULT_SHEET_NAME = "Измерения"


def format_fixed(value: Optional[float], digits: int) -> str:
    return "" if value is None else f"{value:.{digits}f}"


def format_scientific(value: Optional[float], digits: int = 4) -> str:
    return "" if value is None else f"{value:.{digits}e}"


def format_raw(value: Optional[float]) -> str:
    """Render an entered value exactly as stored (``25.0`` -> ``25``)."""
    if value is None:
        return ""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


_FORMATTERS: Sequence[tuple[str, str, Callable[[Optional[float]], str]]] = (
    (EXPORT_COLUMNS.temperature_c, "temperature_c", format_raw),
    (EXPORT_COLUMNS.temperature_k, "temperature_k", lambda v: format_fixed(v, 2)),
    (EXPORT_COLUMNS.inverse_temperature, "inverse_temperature", format_scientific),
    (EXPORT_COLUMNS.resistance, "resistance", format_raw),
    (EXPORT_COLUMNS.conductance, "conductance", format_scientific),
    (EXPORT_COLUMNS.ln_conductance, "ln_conductance", lambda v: format_fixed(v, 4)),
    (EXPORT_COLUMNS.ionization_energy, "ionization_energy", format_scientific),
)


def build_export_table(rows: Sequence[ResistanceMeasurement]) -> pd.DataFrame:
    """Build the export table with the fixed column order.

    Args:
        rows (Sequence[ResistanceMeasurement]): Rows of one snapshot.

    Returns:
        pandas.DataFrame: One line per row; ``№`` is the integer row number,
        every other column holds a formatted string (``""`` when missing).
        ``T`` uses two decimals, ``lnG`` four decimals, and ``1/T``, ``G``
        and ``ΔEᵢ`` scientific notation with four fraction digits.
    """
    records = []
    for m in rows:
        record = {EXPORT_COLUMNS.number: int(m.id)}
        for column, attr, fmt in _FORMATTERS:
            record[column] = fmt(getattr(m, attr))
        records.append(record)
    return pd.DataFrame.from_records(records, columns=EXPORT_COLUMNS.ordered())


def export_rows(
    rows: Sequence[ResistanceMeasurement],
    path: str | os.PathLike = DEFAULT_WORKBOOK_NAME,
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> Path:
    """Serialize rows to an ``.xlsx`` workbook and return its path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    table = build_export_table(rows)
    table.to_excel(target, sheet_name=sheet_name, index=False, engine="openpyxl")
    return target


def save_export_csv(
    rows: Sequence[ResistanceMeasurement], output_dir: str = "output"
) -> str:
    """Save the export table as ``measurements.csv`` in ``output_dir``."""
    os.makedirs(output_dir, exist_ok=True)
    csv_path = os.path.join(output_dir, "measurements.csv")
    build_export_table(rows).to_csv(csv_path, index=False)
    return csv_path
