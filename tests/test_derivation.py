import math

import pytest

from physlab.derivation import (
    attenuation_coefficient,
    derive_acoustic_fields,
    derive_resistance_fields,
)
from physlab.models import AcousticMeasurement, ResistanceMeasurement

DERIVED = ("temperature_k", "inverse_temperature", "conductance", "ln_conductance")


@pytest.mark.parametrize(
    "temperature_c, resistance", [(None, None), (25.0, None), (None, 100.0)]
)
def test_missing_input_clears_all_derived_fields(temperature_c, resistance):
    stale = ResistanceMeasurement(
        id=1,
        temperature_c=temperature_c,
        resistance=resistance,
        temperature_k=1.0,
        inverse_temperature=1.0,
        conductance=1.0,
        ln_conductance=1.0,
    )
    row = derive_resistance_fields(stale)
    for name in DERIVED:
        assert getattr(row, name) is None


def test_resistance_formulas():
    row = derive_resistance_fields(
        ResistanceMeasurement(id=1, temperature_c=27.0, resistance=250.0)
    )
    assert row.temperature_k == pytest.approx(300.0, rel=1e-9)
    assert row.inverse_temperature == pytest.approx(1 / 300.0, rel=1e-9)
    assert row.conductance == pytest.approx(1 / 250.0, rel=1e-9)
    assert row.ln_conductance == pytest.approx(math.log(1 / 250.0), rel=1e-9)


def test_derivation_does_not_mutate_and_keeps_energy():
    original = ResistanceMeasurement(
        id=2, temperature_c=50.0, resistance=10.0, ionization_energy=1e-20
    )
    row = derive_resistance_fields(original)
    assert original.temperature_k is None
    assert row is not original
    assert row.ionization_energy == 1e-20


def test_zero_kelvin_and_zero_resistance_give_none():
    row = derive_resistance_fields(
        ResistanceMeasurement(id=1, temperature_c=-273.0, resistance=0.0)
    )
    assert row.temperature_k == 0.0
    assert row.inverse_temperature is None
    assert row.conductance is None
    assert row.ln_conductance is None


def test_alpha_half_intensity_over_ten_mm():
    row = derive_acoustic_fields(
        AcousticMeasurement(id=1, x1=0.0, x2=10.0, deltaI=0.5)
    )
    assert row.pathLength == 10.0
    assert row.alpha == pytest.approx(-0.30103, abs=1e-5)
    assert row.wavelength == pytest.approx(0.32)


def test_alpha_degenerate_cases():
    assert attenuation_coefficient(0.0, 10.0, 0.0) == 0.0
    assert attenuation_coefficient(5.0, 5.0, 0.5) is None
    assert attenuation_coefficient(None, 5.0, 0.5) is None
    assert attenuation_coefficient(0.0, 5.0, None) is None


def test_acoustic_partial_row():
    row = derive_acoustic_fields(AcousticMeasurement(id=1, x1=2.0, frequency=None))
    assert row.pathLength is None
    assert row.wavelength is None
    assert row.alpha is None


def test_overflowing_results_become_none():
    row = derive_acoustic_fields(
        AcousticMeasurement(id=1, x1=0.0, x2=1e-320, deltaI=0.5, frequency=1e-310)
    )
    assert row.wavelength is None
    assert row.alpha is None
    assert row.pathLength == 1e-320
