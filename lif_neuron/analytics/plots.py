from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np
import matplotlib.pyplot as plt

from ..config import DEFAULTS
from .outputs import Trace
from .spikes import FICurve


def plot_trace(trace: Trace, ax: Optional[plt.Axes] = None):
    """Plot membrane potential vs time: single line, grid on, no legend."""
    if ax is None:
        fig, ax = plt.subplots(figsize=DEFAULTS.figure_size_in, dpi=DEFAULTS.figure_dpi)
    else:
        fig = ax.figure

    ax.plot(trace.times, trace.voltages, linewidth=DEFAULTS.line_width)
    ax.set_xlabel("Time (ms)")
    ax.set_ylabel("Membrane potential (mV)")
    ax.set_title(f"LIF neuron, I = {trace.params.i_input:g} nA")
    ax.grid(True)

    fig.tight_layout()
    return fig


def save_trace_plot(trace: Trace, path: Union[str, Path]) -> Path:
    p = Path(path)
    fig = plot_trace(trace)
    fig.savefig(p)
    plt.close(fig)
    return p


def plot_fi_curve(curve: FICurve):
    """Plot simulated firing rate (markers) and closed-form rate (line) vs current."""
    fig, ax = plt.subplots(figsize=DEFAULTS.figure_size_in, dpi=DEFAULTS.figure_dpi)

    currents = np.asarray(curve.currents)
    if currents.size == 0:
        ax.text(0.5, 0.5, "No data", ha="center", va="center")
        ax.set_xticks([])
        return fig

    analytic = np.asarray(curve.analytic_rates_hz, dtype=float)
    analytic = np.where(np.isfinite(analytic), analytic, np.nan)

    ax.plot(currents, curve.rates_hz, "o", markersize=4, label="Euler")
    ax.plot(currents, analytic, linewidth=DEFAULTS.line_width, label="Analytic")
    ax.set_xlabel("Input current (nA)")
    ax.set_ylabel("Firing rate (Hz)")
    ax.set_title("F-I curve")
    ax.grid(True)
    ax.legend()

    fig.tight_layout()
    return fig
