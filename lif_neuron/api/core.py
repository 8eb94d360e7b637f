from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import logging

import numpy as np

from lif_neuron.config import DEFAULTS
from lif_neuron.analytics.outputs import Trace
from lif_neuron.analytics.spikes import analytic_rate_hz
from lif_neuron.models.parameters import NeuronParams, load_params_from_json
from lif_neuron.simulation.euler import run_lif_simulation

logger = logging.getLogger(__name__)


# --------- User input schema ---------


@dataclass
class UserConfig:
    """Top-level request for one LIF simulation (flat, UI/HTTP friendly)."""

    v_rest_mV: float = DEFAULTS.v_rest_mV
    v_reset_mV: float = DEFAULTS.v_reset_mV
    v_threshold_mV: float = DEFAULTS.v_threshold_mV
    v_spike_mV: float = DEFAULTS.v_spike_mV
    r_membrane_MOhm: float = DEFAULTS.r_membrane_MOhm
    tau_ms: float = DEFAULTS.tau_ms
    i_input_nA: float = DEFAULTS.i_input_nA
    dt_ms: float = DEFAULTS.time_step_ms
    duration_ms: float = DEFAULTS.duration_ms

    # Optional JSON file whose values replace the fields above
    params_json: Optional[str] = None
    label: str = "lif"


@dataclass
class SimulationResult:
    label: str
    params: NeuronParams
    times_ms: np.ndarray
    voltages_mV: np.ndarray
    spike_times_ms: np.ndarray
    steps: int
    spike_count: int
    firing_rate_hz: float
    analytic_rate_hz: float
    final_voltage_mV: float
    trace: Trace = field(repr=False)


# --------- Helper functions ---------


def _build_params(user_config: UserConfig) -> NeuronParams:
    if user_config.params_json:
        path = Path(user_config.params_json)
        if not path.exists():
            raise FileNotFoundError(f"Could not find parameter JSON {str(path)!r}")
        return load_params_from_json(path)

    return NeuronParams(
        v_rest=float(user_config.v_rest_mV),
        v_reset=float(user_config.v_reset_mV),
        v_threshold=float(user_config.v_threshold_mV),
        v_spike=float(user_config.v_spike_mV),
        r_membrane=float(user_config.r_membrane_MOhm),
        tau=float(user_config.tau_ms),
        i_input=float(user_config.i_input_nA),
        dt=float(user_config.dt_ms),
        duration=float(user_config.duration_ms),
    )


# --------- Public API ---------


def run_neuron_simulation(user_config: UserConfig) -> SimulationResult:
    """High-level entry point: build parameters, run the engine, summarise the trace."""
    params = _build_params(user_config).validate()
    logger.info(f"Running simulation {user_config.label!r}")

    trace = run_lif_simulation(params)

    return SimulationResult(
        label=user_config.label,
        params=params,
        times_ms=trace.times,
        voltages_mV=trace.voltages,
        spike_times_ms=trace.spike_times,
        steps=trace.steps,
        spike_count=trace.spike_count(),
        firing_rate_hz=trace.firing_rate_hz(),
        analytic_rate_hz=analytic_rate_hz(params),
        final_voltage_mV=trace.final_voltage(),
        trace=trace,
    )
