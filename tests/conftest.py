"""Pytest configuration for repository-relative imports."""

import os
import sys

import matplotlib
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")

from physlab.models import ResistanceMeasurement  # noqa: E402
from physlab.derivation import derive_resistance_fields  # noqa: E402


@pytest.fixture
def make_resistance_row():
    def _make(row_id, temperature_c, resistance):
        return derive_resistance_fields(
            ResistanceMeasurement(
                id=row_id, temperature_c=temperature_c, resistance=resistance
            )
        )

    return _make
