"""
A Python package for the semiconductor-resistance and acousto-optic labs.

Turns raw table entries into derived physical quantities and fitted
constants: the impurity ionization energy from ln G against 1/T, and the
ultrasonic attenuation coefficient from intensity ratios along a crystal.

Modules:
    - validation: Parses cell text and checks values against the bound table.
    - derivation: Per-row derived quantities.
    - analysis: Collection-level fits and summaries.
    - store: Stateful tables producing immutable snapshots.
    - storage: Best-effort persistence of the resistance table.
    - output: Spreadsheet export.
    - plotting: Charts with trend lines.
"""

import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .analysis import (
    acoustic_regression,
    calculate_ionization_energy,
    fit_frequency_dependence,
    resistance_summary,
    resistance_trend,
)
from .derivation import derive_acoustic_fields, derive_resistance_fields
from .models import AcousticMeasurement, ResistanceMeasurement
from .output import build_export_table, export_rows
from .schema import AcousticField, ResistanceField
from .storage import JsonFileStorage, MemoryStorage
from .store import AcousticStore, CommandResult, ResistanceStore, Snapshot
from .validation import parse_value, validate

__all__ = [
    # Records
    "ResistanceMeasurement",
    "AcousticMeasurement",
    "ResistanceField",
    "AcousticField",
    # Validation and derivation
    "parse_value",
    "validate",
    "derive_resistance_fields",
    "derive_acoustic_fields",
    # Analysis
    "calculate_ionization_energy",
    "resistance_trend",
    "resistance_summary",
    "acoustic_regression",
    "fit_frequency_dependence",
    # Store and collaborators
    "ResistanceStore",
    "AcousticStore",
    "Snapshot",
    "CommandResult",
    "JsonFileStorage",
    "MemoryStorage",
    "build_export_table",
    "export_rows",
]
