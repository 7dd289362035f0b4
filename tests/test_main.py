import os

import pandas as pd

from main import RESISTANCE_COLUMNS, main, replay_csv
from physlab.storage import JsonFileStorage
from physlab.store import ResistanceStore


def test_replay_skips_invalid_lines(tmp_path):
    path = tmp_path / "resistance.csv"
    path.write_text(
        "temperature_c,resistance\n27,100\n500,80\n77,70\n,\n127,50\n",
        encoding="utf-8",
    )
    store = ResistanceStore()
    skipped = replay_csv(store, str(path), RESISTANCE_COLUMNS)
    assert skipped == 2
    assert [m.temperature_c for m in store.rows] == [27.0, 77.0, 127.0]
    assert not store.errors
    assert store.ionization_energy is not None


def test_main_writes_outputs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    resistance = tmp_path / "resistance.csv"
    resistance.write_text(
        "temperature_c,resistance\n27,100\n77,70\n127,50\n", encoding="utf-8"
    )
    acoustic = tmp_path / "acoustic.csv"
    acoustic.write_text(
        "x1,x2,deltaI,frequency\n0,10,0.5,10\n0,20,0.3,10\n0,30,0.2,10\n",
        encoding="utf-8",
    )
    out_dir = tmp_path / "out"
    code = main(
        [
            str(resistance),
            "--acoustic-csv",
            str(acoustic),
            "--output-dir",
            str(out_dir),
            "--storage",
            str(tmp_path / "cache.json"),
        ]
    )
    assert code == 0
    for name in (
        "measurements.xlsx",
        "measurements.csv",
        "resistance_chart.png",
        "acoustic_chart.png",
        "frequency_dependence.png",
    ):
        assert os.path.exists(out_dir / name)
    table = pd.read_csv(out_dir / "measurements.csv", dtype=str)
    assert len(table) == 3
    assert os.path.exists(tmp_path / "cache.json")


def test_resume_extends_cached_rows(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    first = tmp_path / "first.csv"
    first.write_text("temperature_c,resistance\n27,100\n77,70\n", encoding="utf-8")
    second = tmp_path / "second.csv"
    second.write_text("temperature_c,resistance\n127,50\n", encoding="utf-8")
    cache = str(tmp_path / "cache.json")
    out_dir = str(tmp_path / "out")

    assert main([str(first), "--storage", cache, "--output-dir", out_dir]) == 0
    assert main(
        [str(second), "--storage", cache, "--resume", "--output-dir", out_dir]
    ) == 0
    store = ResistanceStore(storage=JsonFileStorage(cache))
    assert [m.temperature_c for m in store.rows] == [27.0, 77.0, 127.0]

    assert main([str(second), "--storage", cache, "--output-dir", out_dir]) == 0
    table = pd.read_csv(os.path.join(out_dir, "measurements.csv"), dtype=str)
    assert len(table) == 1
