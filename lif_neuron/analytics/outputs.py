from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Dict, Iterator, List, Tuple, Union

import numpy as np

from ..models.parameters import NeuronParams


Sample = Tuple[float, float]


@dataclass
class Trace:
    """Container for one LIF run: the (time, voltage) samples and spike events.

    A step that crosses threshold contributes three samples sharing one
    timestamp: the integrated value, ``v_spike`` and ``v_reset``. The spike
    times are also kept separately in ``spike_times`` so numeric analysis does
    not need to scan for ``v_spike`` samples.
    """

    params: NeuronParams
    times: np.ndarray  # ms
    voltages: np.ndarray  # mV
    spike_times: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=float))
    steps: int = 0

    def __len__(self) -> int:
        return int(self.times.size)

    def __iter__(self) -> Iterator[Sample]:
        for t, v in zip(self.times.tolist(), self.voltages.tolist()):
            yield t, v

    def samples(self) -> List[Sample]:
        return list(self)

    def spike_count(self) -> int:
        return int(self.spike_times.size)

    def final_voltage(self) -> float:
        return float(self.voltages[-1])

    def firing_rate_hz(self) -> float:
        """Mean firing rate over the simulated duration (duration is in ms)."""
        duration_ms = self.steps * self.params.dt
        if duration_ms <= 0.0:
            return 0.0
        return float(self.spike_count() / duration_ms * 1000.0)

    def interspike_intervals(self) -> np.ndarray:
        if self.spike_times.size < 2:
            return np.zeros(0, dtype=float)
        return np.diff(self.spike_times)

    def summary(self) -> Dict[str, Any]:
        isi = self.interspike_intervals()
        return {
            "steps": int(self.steps),
            "n_samples": len(self),
            "spike_count": self.spike_count(),
            "firing_rate_hz": self.firing_rate_hz(),
            "mean_isi_ms": float(np.mean(isi)) if isi.size else None,
            "final_voltage_mV": self.final_voltage(),
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON‑friendly dump: parameters, summary metrics and every sample."""
        return {
            "params": self.params.to_dict(),
            **self.summary(),
            "spike_times_ms": self.spike_times.tolist(),
            "times_ms": self.times.tolist(),
            "voltages_mV": self.voltages.tolist(),
        }

    def to_csv(self, target: Union[str, Path, IO[str]]) -> Union[Path, IO[str]]:
        """Write the samples as a two-column CSV with a header row.

        ``target`` is a path or an open text stream. ``%.17g`` keeps every
        float64 sample exact.
        """
        if isinstance(target, (str, Path)):
            target = Path(target)
        data = np.column_stack([self.times, self.voltages])
        np.savetxt(target, data, delimiter=",", header="time_ms,voltage_mV", comments="", fmt="%.17g")
        return target
