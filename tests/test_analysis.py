import math

import numpy as np
import pytest

from physlab.analysis import (
    FREQUENCY_REFERENCE_SERIES,
    acoustic_regression,
    calculate_ionization_energy,
    fit_frequency_dependence,
    frequency_dependence_series,
    resistance_summary,
    resistance_trend,
)
from physlab.constants import BOLTZMANN_CONSTANT
from physlab.derivation import derive_acoustic_fields
from physlab.models import AcousticMeasurement, ResistanceMeasurement


def _energy_row(row_id, temperature_k, conductance):
    return ResistanceMeasurement(
        id=row_id,
        temperature_c=temperature_k - 273.0,
        temperature_k=temperature_k,
        inverse_temperature=1.0 / temperature_k,
        resistance=1.0 / conductance,
        conductance=conductance,
        ln_conductance=math.log(conductance),
    )


def test_two_point_energy_broadcast_to_every_row():
    rows = [_energy_row(1, 300.0, 1 / 100), _energy_row(2, 400.0, 1 / 50)]
    out = calculate_ionization_energy(rows)
    expected = (
        2
        * BOLTZMANN_CONSTANT
        * (math.log(1 / 100) - math.log(1 / 50))
        / (1 / 300 - 1 / 400)
    )
    assert out[0].ionization_energy == pytest.approx(expected, rel=1e-9)
    assert out[1].ionization_energy == out[0].ionization_energy
    assert rows[0].ionization_energy is None


def test_two_point_uses_temperature_extremes_only(make_resistance_row):
    rows = [
        make_resistance_row(1, 80.0, 40.0),
        make_resistance_row(2, 27.0, 100.0),
        make_resistance_row(3, 127.0, 50.0),
        ResistanceMeasurement(id=4),
    ]
    out = calculate_ionization_energy(rows)
    low, high = rows[1], rows[2]
    expected = (
        2
        * BOLTZMANN_CONSTANT
        * (low.ln_conductance - high.ln_conductance)
        / (low.inverse_temperature - high.inverse_temperature)
    )
    assert all(m.ionization_energy == pytest.approx(expected) for m in out)


def test_fewer_than_two_valid_rows_gives_none(make_resistance_row):
    rows = [make_resistance_row(1, 25.0, 100.0), ResistanceMeasurement(id=2)]
    out = calculate_ionization_energy(rows)
    assert [m.ionization_energy for m in out] == [None, None]


def test_equal_endpoint_temperatures_give_none(make_resistance_row):
    rows = [make_resistance_row(1, 25.0, 100.0), make_resistance_row(2, 25.0, 50.0)]
    out = calculate_ionization_energy(rows)
    assert out[0].ionization_energy is None


def test_least_squares_method(make_resistance_row):
    rows = [
        make_resistance_row(1, 27.0, 100.0),
        make_resistance_row(2, 77.0, 60.0),
        make_resistance_row(3, 127.0, 50.0),
    ]
    out = calculate_ionization_energy(rows, method="least_squares")
    x = np.array([m.inverse_temperature for m in rows])
    y = np.array([m.ln_conductance for m in rows])
    slope = np.polyfit(x, y, 1)[0]
    assert out[0].ionization_energy == pytest.approx(-2 * BOLTZMANN_CONSTANT * slope)


def test_unknown_method_raises():
    with pytest.raises(ValueError):
        calculate_ionization_energy([], method="bogus")


def test_resistance_trend_sorted_by_inverse_temperature(make_resistance_row):
    rows = [
        make_resistance_row(1, 27.0, 100.0),
        make_resistance_row(2, 127.0, 50.0),
        make_resistance_row(3, 77.0, 70.0),
    ]
    trend = resistance_trend(rows)
    assert list(trend.x) == sorted(trend.x)
    assert trend.fit is not None
    xs, _ = trend.line()
    assert xs[0] == pytest.approx(trend.x.min())
    assert xs[-1] == pytest.approx(trend.x.max())


def test_resistance_trend_single_point_has_no_line(make_resistance_row):
    trend = resistance_trend([make_resistance_row(1, 27.0, 100.0)])
    assert trend.fit is None
    assert trend.line()[0].size == 0


def test_resistance_summary(make_resistance_row):
    rows = calculate_ionization_energy(
        [
            make_resistance_row(1, 27.0, 100.0),
            make_resistance_row(2, 127.0, 50.0),
            ResistanceMeasurement(id=3, temperature_c=50.0),
        ]
    )
    summary = resistance_summary(rows)
    assert summary.count == 2
    assert summary.temperature_range == (27.0, 127.0)
    assert summary.resistance_range == (50.0, 100.0)
    assert summary.ionization_energy == rows[0].ionization_energy

    single = resistance_summary(rows[:1])
    assert single.count == 1
    assert single.temperature_range is None


def _acoustic(row_id, x1, x2, delta_i):
    return derive_acoustic_fields(
        AcousticMeasurement(id=row_id, x1=x1, x2=x2, deltaI=delta_i)
    )


def test_acoustic_regression_sorted_by_x2():
    rows = [
        _acoustic(1, 0.0, 20.0, 0.5),
        _acoustic(2, 0.0, 10.0, 0.5),
        _acoustic(3, 0.0, 30.0, 0.5),
        AcousticMeasurement(id=4),
    ]
    result = acoustic_regression(rows)
    np.testing.assert_allclose(result.x2, [10.0, 20.0, 30.0])
    expected = 10 * np.log10(0.5) / np.array([10.0, 20.0, 30.0])
    np.testing.assert_allclose(result.alpha, expected)
    assert result.fit.n == 3
    # attenuation per mm shrinks in magnitude as the path grows
    assert result.fit.slope > 0
    assert 0 < result.correlation <= 1
    assert result.mean_alpha == pytest.approx(np.mean(expected))
    assert result.std_alpha == pytest.approx(np.std(expected))
    assert result.equation.startswith("α = ")


def test_acoustic_regression_empty():
    result = acoustic_regression([AcousticMeasurement(id=1)])
    assert result.x2.size == 0
    assert result.fit is None
    assert result.mean_alpha is None
    assert result.equation == ""
    assert result.line()[0].size == 0


def test_acoustic_regression_single_point_reports_statistics_only():
    result = acoustic_regression([_acoustic(1, 0.0, 10.0, 0.5)])
    assert result.fit is None
    assert result.correlation == 0.0
    assert result.mean_alpha == pytest.approx(-0.30103, abs=1e-5)
    assert result.std_alpha == 0.0


def test_frequency_reference_fits():
    fits = fit_frequency_dependence()
    assert [f.label for f in fits] == list(FREQUENCY_REFERENCE_SERIES)
    first = fits[0]
    f, values = frequency_dependence_series()[first.label]
    expected = np.sum(f**2 * values) / np.sum(f**4)
    assert first.fit.coefficient == pytest.approx(expected)
    assert first.curve_x[0] == pytest.approx(3.0)
    assert first.curve_x[-1] == pytest.approx(13.0)
    assert first.equation.startswith("α²ₗ = ")


def test_frequency_range_filters_displayed_points():
    fits = fit_frequency_dependence(f_range=(5.0, 9.0))
    np.testing.assert_allclose(fits[0].frequency, [5.0, 7.0, 9.0])
    full = fit_frequency_dependence()
    assert fits[0].fit.coefficient == pytest.approx(full[0].fit.coefficient)


def test_frequency_fit_of_empty_series():
    fits = fit_frequency_dependence({"empty": ([], [])})
    assert fits[0].fit is None
    assert fits[0].curve_x.size == 0
    assert fits[0].equation == ""
