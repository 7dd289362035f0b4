import os

from physlab.analysis import calculate_ionization_energy
from physlab.derivation import derive_acoustic_fields
from physlab.models import AcousticMeasurement, ResistanceMeasurement
from physlab.plotting import (
    plot_acoustic_chart,
    plot_frequency_dependence,
    plot_resistance_chart,
)


def test_plot_resistance_chart(tmp_path, make_resistance_row):
    rows = calculate_ionization_energy(
        [
            make_resistance_row(1, 27.0, 100.0),
            make_resistance_row(2, 77.0, 70.0),
            make_resistance_row(3, 127.0, 50.0),
        ]
    )
    out = plot_resistance_chart(rows, output_dir=str(tmp_path))
    assert out.endswith("resistance_chart.png")
    assert os.path.exists(out)


def test_plot_resistance_chart_without_points(tmp_path):
    assert plot_resistance_chart([ResistanceMeasurement(id=1)], str(tmp_path)) is None


def test_plot_acoustic_chart(tmp_path):
    rows = [
        derive_acoustic_fields(AcousticMeasurement(id=1, x1=0.0, x2=10.0, deltaI=0.5)),
        derive_acoustic_fields(AcousticMeasurement(id=2, x1=0.0, x2=20.0, deltaI=0.3)),
    ]
    out = plot_acoustic_chart(rows, output_dir=str(tmp_path))
    assert os.path.exists(out)
    assert plot_acoustic_chart([AcousticMeasurement(id=1)], str(tmp_path)) is None


def test_plot_frequency_dependence(tmp_path):
    out = plot_frequency_dependence(output_dir=str(tmp_path))
    assert out.endswith("frequency_dependence.png")
    assert os.path.exists(out)
