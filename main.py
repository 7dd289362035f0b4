#!/usr/bin/env python3
"""
Main script for running the lab analysis from CSV measurement sheets.
"""

# Pipeline overview (README-style):
# 1) Read raw resistance readings (t in °C, R in Ω) and, optionally, acoustic
#    readings (X1, X2, ΔI/I0, f) from CSV files.
# 2) Replay each reading into the measurement stores cell by cell, exactly as
#    a user would type them; lines with invalid cells are reported and skipped.
#    With --resume the rows cached in --storage are kept and extended.
# 3) Report the ionization energy, the lnG vs 1/T trend line and the
#    attenuation regression.
# 4) Export the resistance table to a workbook and CSV, and draw the charts.

import argparse
import logging
import os
import sys
import time

import pandas as pd

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from physlab.config import ACTIVATION_METHODS, LabConfig
from physlab.output import export_rows, save_export_csv
from physlab.plotting import (
    plot_acoustic_chart,
    plot_frequency_dependence,
    plot_resistance_chart,
)
from physlab.schema import AcousticField, ResistanceField
from physlab.storage import JsonFileStorage
from physlab.store import AcousticStore, ResistanceStore

RESISTANCE_COLUMNS = {
    "temperature_c": ResistanceField.TEMPERATURE_C,
    "resistance": ResistanceField.RESISTANCE,
}
ACOUSTIC_COLUMNS = {
    "x1": AcousticField.X1,
    "x2": AcousticField.X2,
    "deltaI": AcousticField.DELTA_I,
    "frequency": AcousticField.FREQUENCY,
}


def _cell_text(value) -> str:
    if pd.isna(value):
        return ""
    return str(value)


def replay_csv(store, path: str, columns: dict) -> int:
    """Feed every CSV row into ``store`` and return the number of skipped lines.

    A line with any rejected cell is discarded so that the following lines
    can still be appended.
    """
    df = pd.read_csv(path, dtype=str)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"{path} is missing columns: {', '.join(missing)}")

    skipped = 0
    for line_no, (_, record) in enumerate(df.iterrows(), start=2):
        if store.rows[-1].is_filled():
            added = store.add_row()
            if not added:
                logging.warning("Line %d not added: %s", line_no, added.reason)
                skipped += 1
                continue
        row_id = store.rows[-1].id
        failed = False
        for column, field in columns.items():
            result = store.update_field(row_id, field, _cell_text(record[column]))
            if not result:
                logging.warning("Line %d, %s: %s", line_no, column, result.reason)
                failed = True
        if failed or not store.rows[-1].is_filled():
            for field in columns.values():
                store.update_field(row_id, field, "")
            if len(store.rows) > 1:
                store.delete_row(row_id)
            skipped += 1
    return skipped


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("resistance_csv", help="CSV with temperature_c,resistance")
    parser.add_argument("--acoustic-csv", help="CSV with x1,x2,deltaI,frequency")
    parser.add_argument("--output-dir", default="output")
    parser.add_argument(
        "--storage",
        help="JSON file the resistance table is cached to",
    )
    parser.add_argument(
        "--resume",
        action="store_true",
        help="Append the CSV lines to the rows cached in --storage instead of "
        "starting from an empty table",
    )
    parser.add_argument(
        "--method",
        choices=ACTIVATION_METHODS,
        default="two_point",
        help="Ionization-energy estimate",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution function."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("physlab.log", mode="w"),
        ],
    )
    args = parse_args(argv)
    start_time = time.time()
    config = LabConfig(activation_method=args.method)

    storage = JsonFileStorage(args.storage) if args.storage else None
    resistance = ResistanceStore(storage=storage, config=config)
    if args.resume and storage is not None:
        logging.info("Resuming from %d cached rows", len(resistance.rows))
    else:
        resistance.reset()
    rejected = replay_csv(resistance, args.resistance_csv, RESISTANCE_COLUMNS)
    logging.info(
        "Loaded %d resistance rows (%d lines skipped)",
        len(resistance.rows),
        rejected,
    )

    summary = resistance.summary()
    if summary.ionization_energy is None:
        logging.error("Fewer than two complete rows; no ionization energy.")
    else:
        logging.info("Ionization energy (%s): %.4e J", args.method, summary.ionization_energy)
    trend = resistance.trend()
    if trend.fit is not None:
        logging.info(
            "Trend lnG = %.4f * (1/T) + %.4f (r = %.4f)",
            trend.fit.slope,
            trend.fit.intercept,
            trend.fit.correlation,
        )

    os.makedirs(args.output_dir, exist_ok=True)
    workbook = export_rows(
        resistance.rows, os.path.join(args.output_dir, "measurements.xlsx")
    )
    csv_path = save_export_csv(resistance.rows, args.output_dir)
    figures = [plot_resistance_chart(resistance.rows, args.output_dir)]

    if args.acoustic_csv:
        acoustic = AcousticStore(config=config)
        rejected = replay_csv(acoustic, args.acoustic_csv, ACOUSTIC_COLUMNS)
        result = acoustic.analysis()
        logging.info(
            "Loaded %d acoustic rows (%d lines skipped)", len(acoustic.rows), rejected
        )
        if result.fit is not None:
            logging.info("%s (r = %.4f)", result.equation, result.correlation)
        if result.mean_alpha is not None:
            logging.info(
                "Mean α = %.4f ± %.4f dB/mm", result.mean_alpha, result.std_alpha
            )
        figures.append(plot_acoustic_chart(acoustic.rows, args.output_dir))
        figures.append(plot_frequency_dependence(args.output_dir))

    logging.info("Generated output files:")
    logging.info("  - Workbook: %s", workbook)
    logging.info("  - CSV: %s", csv_path)
    for path in figures:
        if path:
            logging.info("  - Figure: %s", path)
    logging.info("Total execution time: %.2f seconds", time.time() - start_time)
    return 0


if __name__ == "__main__":
    sys.exit(main())
