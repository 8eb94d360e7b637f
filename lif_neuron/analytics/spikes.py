from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import logging
import math

import numpy as np

from ..models.parameters import NeuronParams
from ..simulation.euler import run_lif_simulation

logger = logging.getLogger(__name__)


def analytic_isi_ms(params: NeuronParams) -> float:
    """Closed-form interspike interval of the continuous LIF under constant input.

    Integrating tau * dV/dt = -(V - v_rest) + R*I from v_reset to v_threshold:

        T = tau * ln((R*I + v_rest - v_reset) / (R*I + v_rest - v_threshold))

    Returns ``inf`` when the neuron does not fire tonically (see
    :meth:`NeuronParams.fires_tonically`) and ``0.0`` when the reset
    potential is at or above threshold.
    """
    if not params.fires_tonically():
        return math.inf
    if params.v_reset >= params.v_threshold:
        # Reset lands on or above threshold: fires on every step
        return 0.0
    drive = params.equilibrium_voltage
    return float(params.tau * math.log((drive - params.v_reset) / (drive - params.v_threshold)))


def analytic_rate_hz(params: NeuronParams) -> float:
    isi = analytic_isi_ms(params)
    if math.isinf(isi):
        return 0.0
    if isi == 0.0:
        return math.inf
    return 1000.0 / isi


@dataclass
class FICurve:
    """Firing rate vs. input current for otherwise identical parameters."""

    currents: np.ndarray  # nA
    spike_counts: np.ndarray
    rates_hz: np.ndarray
    analytic_rates_hz: np.ndarray

    def rheobase(self) -> Optional[float]:
        """Smallest swept current that produced at least one spike."""
        fired = self.spike_counts > 0
        if not np.any(fired):
            return None
        return float(np.min(self.currents[fired]))

    def to_dict(self) -> Dict[str, Any]:
        rheo = self.rheobase()
        return {
            "currents_nA": self.currents.tolist(),
            "spike_counts": self.spike_counts.tolist(),
            "rates_hz": self.rates_hz.tolist(),
            "analytic_rates_hz": self.analytic_rates_hz.tolist(),
            "rheobase_nA": rheo,
        }


def compute_fi_curve(params: NeuronParams, currents: Iterable[float]) -> FICurve:
    """Sweep the input current, running one independent simulation per value."""
    currents_arr = np.asarray(list(currents), dtype=float)
    N = int(currents_arr.size)

    counts = np.zeros(N, dtype=int)
    rates = np.zeros(N, dtype=float)
    analytic = np.zeros(N, dtype=float)

    logger.info(f"Computing F-I curve over {N} currents.")
    for i, current in enumerate(currents_arr):
        p = params.replace(i_input=float(current))
        trace = run_lif_simulation(p)
        counts[i] = trace.spike_count()
        rates[i] = trace.firing_rate_hz()
        analytic[i] = analytic_rate_hz(p)

    return FICurve(
        currents=currents_arr,
        spike_counts=counts,
        rates_hz=rates,
        analytic_rates_hz=analytic,
    )

