from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

import logging

import numpy as np

from ..analytics.outputs import Trace
from ..models.parameters import NeuronParams

logger = logging.getLogger(__name__)


@dataclass
class LIFState:
    """Mutable state of one run; created at t = 0 with V = v_rest."""

    voltage: np.float64
    time: np.float64
    step: int = 0


def step_count(params: NeuronParams) -> int:
    """Number of Euler steps for ``params`` (floor of duration / dt)."""
    params.validate()
    return params.steps


def membrane_derivative(v: float, params: NeuronParams) -> np.float64:
    """dV/dt of the leaky integrator at voltage ``v``.

    Evaluated in float64 so that ``tau == 0`` gives inf/NaN instead of raising.
    """
    v = np.float64(v)
    return (-(v - np.float64(params.v_rest)) + np.float64(params.r_membrane) * np.float64(params.i_input)) / np.float64(params.tau)


def _advance(state: LIFState, params: NeuronParams) -> List[Tuple[float, float]]:
    """Run one Euler step in place and return the 1 or 3 samples it produces."""
    dv = membrane_derivative(state.voltage, params)
    state.voltage = state.voltage + dv * np.float64(params.dt)
    state.time = state.time + np.float64(params.dt)
    state.step += 1

    t = float(state.time)
    out = [(t, float(state.voltage))]

    # Threshold is checked only after the update
    if state.voltage >= params.v_threshold:
        out.append((t, float(params.v_spike)))
        state.voltage = np.float64(params.v_reset)
        out.append((t, float(state.voltage)))
    return out


def iter_samples(params: NeuronParams) -> Iterator[Tuple[float, float]]:
    """Lazily yield the (time, voltage) samples of a run.

    The first sample is ``(0.0, v_rest)``; each of the ``params.steps``
    Euler steps then yields one sample, or three when it reaches threshold.
    Configuration is validated here, before the iterator is returned.
    """
    params.validate()
    return _generate_samples(params, params.steps)


def _generate_samples(params: NeuronParams, n_steps: int) -> Iterator[Tuple[float, float]]:
    state = LIFState(voltage=np.float64(params.v_rest), time=np.float64(0.0))

    yield float(state.time), float(state.voltage)

    while state.step < n_steps:
        # errstate must not stay active across the yields below
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            produced = _advance(state, params)
        yield from produced


def run_lif_simulation(params: NeuronParams) -> Trace:
    """Run the forward‑Euler LIF simulation and return the full trace."""
    params.validate()
    n_steps = params.steps
    logger.debug(
        f"Starting LIF run: {n_steps} steps, dt={params.dt} ms, I={params.i_input} nA"
    )

    state = LIFState(voltage=np.float64(params.v_rest), time=np.float64(0.0))
    times: List[float] = [float(state.time)]
    voltages: List[float] = [float(state.voltage)]
    spike_times: List[float] = []

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        while state.step < n_steps:
            produced = _advance(state, params)
            for t, v in produced:
                times.append(t)
                voltages.append(v)
            if len(produced) > 1:
                spike_times.append(produced[0][0])

    trace = Trace(
        params=params,
        times=np.asarray(times, dtype=float),
        voltages=np.asarray(voltages, dtype=float),
        spike_times=np.asarray(spike_times, dtype=float),
        steps=state.step,
    )
    logger.info(
        f"LIF run finished: {trace.steps} steps, {trace.spike_count()} spikes, "
        f"{len(trace)} samples."
    )
    return trace
