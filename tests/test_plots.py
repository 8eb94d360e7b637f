from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from lif_neuron.analytics.plots import plot_fi_curve, plot_trace, save_trace_plot
from lif_neuron.analytics.spikes import compute_fi_curve
from lif_neuron.simulation.euler import run_lif_simulation


def test_trace_figure_layout(default_params):
    trace = run_lif_simulation(default_params)
    fig = plot_trace(trace)
    ax = fig.axes[0]

    assert tuple(fig.get_size_inches()) == (8.0, 5.0)
    assert fig.dpi == 100
    assert len(ax.lines) == 1
    assert ax.lines[0].get_linewidth() == 1.5
    assert ax.get_legend() is None
    assert all(line.get_visible() for line in ax.get_xgridlines())
    assert ax.get_xlabel() == "Time (ms)"
    assert np.array_equal(ax.lines[0].get_xdata(), trace.times)
    plt.close(fig)


def test_plot_trace_on_existing_axes(default_params):
    fig, ax = plt.subplots()
    out = plot_trace(run_lif_simulation(default_params.replace(duration=10.0)), ax=ax)

    assert out is fig
    assert len(ax.lines) == 1
    plt.close(fig)


def test_save_trace_plot(default_params, tmp_path):
    path = save_trace_plot(run_lif_simulation(default_params), tmp_path / "trace.png")

    assert path.exists()
    assert path.read_bytes()[:4] == b"\x89PNG"


def test_fi_curve_figure(default_params):
    curve = compute_fi_curve(default_params.replace(duration=50.0), [1.0, 2.0, 3.0])
    fig = plot_fi_curve(curve)

    assert len(fig.axes[0].lines) == 2
    plt.close(fig)
