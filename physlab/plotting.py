"""
Chart rendering for the lab tables.

All plotting functions accept rows or precomputed analysis results and do
not perform physics calculations of their own; the fitted lines come from
:mod:`physlab.analysis`.

Figures:
    resistance_chart: ln G against 1/T with the least-squares trend line.
    acoustic_chart: α against X₂ with the regression line, mean and spread.
    frequency_dependence: reference α²_L(f) series with b·f² curves.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .analysis import acoustic_regression, fit_frequency_dependence, resistance_trend
from .models import AcousticMeasurement, ResistanceMeasurement

logger = logging.getLogger(__name__)

FIGURE_DPI = 300
_STYLE_STATE = {"initialized": False}
SERIES_MARKERS = ("o", "^", "P", "s")


@dataclass(frozen=True)
class StyleConfig:
    BASE_FONTSIZE: float = 12.0
    TITLE_FONTSIZE: float = 14.0
    LABEL_FONTSIZE: float = 12.0
    TICK_FONTSIZE: float = 11.0
    LEGEND_FONTSIZE: float = 10.0
    LINEWIDTH: float = 2.0
    LINEWIDTH_THIN: float = 1.2
    MARKERSIZE: float = 6.0
    ALPHA_BAND: float = 0.12
    FIGSIZE_SINGLE: tuple[float, float] = (7.0, 4.2)


STYLE = StyleConfig()


def setup_plot_style() -> None:
    """Apply the global Matplotlib style once per process."""
    if _STYLE_STATE["initialized"]:
        return
    plt.rcParams.update(
        {
            "font.family": "DejaVu Sans",
            "font.size": STYLE.BASE_FONTSIZE,
            "axes.titlesize": STYLE.TITLE_FONTSIZE,
            "axes.labelsize": STYLE.LABEL_FONTSIZE,
            "xtick.labelsize": STYLE.TICK_FONTSIZE,
            "ytick.labelsize": STYLE.TICK_FONTSIZE,
            "legend.fontsize": STYLE.LEGEND_FONTSIZE,
            "mathtext.default": "regular",
            "axes.linewidth": STYLE.LINEWIDTH_THIN,
            "axes.spines.top": False,
            "axes.spines.right": False,
            "grid.alpha": 0.2,
            "grid.linestyle": ":",
            "legend.frameon": False,
            "lines.linewidth": STYLE.LINEWIDTH,
            "lines.markersize": STYLE.MARKERSIZE,
            "savefig.dpi": FIGURE_DPI,
            "savefig.bbox": "tight",
            "savefig.pad_inches": 0.12,
        }
    )
    _STYLE_STATE["initialized"] = True


def save_figure(fig: Figure, output_dir: str, stem: str) -> str:
    """Save ``fig`` as ``<output_dir>/<stem>.png``, close it, and return the path."""
    os.makedirs(output_dir, exist_ok=True)
    path = Path(output_dir) / f"{stem}.png"
    fig.savefig(str(path), dpi=FIGURE_DPI)
    plt.close(fig)
    logger.info("Saved figure %s", path)
    return str(path)


def plot_resistance_chart(
    rows: Sequence[ResistanceMeasurement], output_dir: str = "output"
) -> Optional[str]:
    """Plot ln G against 1/T with the trend line.

    Returns:
        str | None: Saved PNG path, or ``None`` when no row has both derived
        coordinates.
    """
    trend = resistance_trend(rows)
    if trend.x.size == 0:
        return None

    setup_plot_style()
    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    ax.plot(trend.x, trend.y, "o", color="black", label="Measured")
    line_x, line_y = trend.line()
    if line_x.size:
        ax.plot(
            line_x,
            line_y,
            "--",
            color="0.35",
            label=f"Trend (r = {trend.fit.correlation:.4f})",
        )
    ax.set_xlabel(r"$1/T$ (K$^{-1}$)")
    ax.set_ylabel(r"$\ln G$")
    ax.ticklabel_format(axis="x", style="sci", scilimits=(0, 0))
    ax.grid(True)
    energy = rows[0].ionization_energy if rows else None
    if energy is not None:
        ax.set_title(rf"$\Delta E_i$ = {energy:.4e} J")
    ax.legend(loc="best")
    fig.tight_layout()
    return save_figure(fig, output_dir, "resistance_chart")


def plot_acoustic_chart(
    rows: Sequence[AcousticMeasurement], output_dir: str = "output"
) -> Optional[str]:
    """Plot α against X₂ with the regression line and a ±1σ band about the mean."""
    result = acoustic_regression(rows)
    if result.x2.size == 0:
        return None

    setup_plot_style()
    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    ax.plot(result.x2, result.alpha, "o", color="black", label="Measured α")
    line_x, line_y = result.line()
    if line_x.size:
        ax.plot(line_x, line_y, "--", color="0.35", label=result.equation)
    if result.mean_alpha is not None:
        ax.axhline(result.mean_alpha, color="0.5", linewidth=STYLE.LINEWIDTH_THIN)
        ax.axhspan(
            result.mean_alpha - result.std_alpha,
            result.mean_alpha + result.std_alpha,
            color="0.5",
            alpha=STYLE.ALPHA_BAND,
            label=f"mean α = {result.mean_alpha:.4f} ± {result.std_alpha:.4f}",
        )
    ax.set_xlabel(r"$X_2$ (mm)")
    ax.set_ylabel(r"$\alpha$ (dB/mm)")
    ax.grid(True)
    ax.legend(loc="best")
    fig.tight_layout()
    return save_figure(fig, output_dir, "acoustic_chart")


def plot_frequency_dependence(
    output_dir: str = "output", f_range: tuple[float, float] = (3.0, 13.0)
) -> str:
    """Plot the reference α²_L(f) series with their quadratic fits."""
    setup_plot_style()
    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    for index, fit in enumerate(fit_frequency_dependence(f_range=f_range)):
        marker = SERIES_MARKERS[index % len(SERIES_MARKERS)]
        points = ax.plot(fit.frequency, fit.value, marker, linestyle="none", label=fit.label)
        if fit.curve_x.size:
            ax.plot(
                fit.curve_x,
                fit.curve_y,
                "-",
                color=points[0].get_color(),
                linewidth=STYLE.LINEWIDTH_THIN,
                label=fit.equation,
            )
    ax.set_xlabel("f (MHz)")
    ax.set_ylabel(r"$\alpha_L^2$")
    ax.set_xlim(*f_range)
    ax.grid(True)
    ax.legend(loc="upper left", ncol=2, fontsize=8)
    fig.tight_layout()
    return save_figure(fig, output_dir, "frequency_dependence")
