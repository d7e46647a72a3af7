"""Plots of disorder-averaged correlation functions."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from .statistics import CorrelationStatistics


def plot_correlations(
    stats: CorrelationStatistics,
    filename: Optional[str | Path] = None,
) -> None:
    """Plot ``|C(r)|`` of the three channels on log-log axes with error bars."""

    fig, ax = plt.subplots(figsize=(7.0, 4.5))
    series = (
        (stats.R, stats.zz_mean, stats.stderr("zz"), "ZZ"),
        (stats.R, stats.xx_mean, stats.stderr("xx"), "XX"),
        (stats.Rpp, stats.xxpp_mean, stats.stderr("xxpp"), "XX (Rpp)"),
    )
    for r, mean, err, label in series:
        ax.errorbar(r, np.abs(mean), yerr=err, fmt="o-", markersize=4, capsize=2, label=label)

    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Separation r")
    ax.set_ylabel("|C(r)|")
    ax.set_title(f"Disorder-averaged correlations ({stats.samples} samples)")
    ax.legend()
    fig.tight_layout()

    if filename is not None:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=300)
    plt.close(fig)
