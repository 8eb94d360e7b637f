from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace as dc_replace
from pathlib import Path
from typing import Any, Mapping, Union

import json
import logging
import math

from ..config import DEFAULTS
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NeuronParams:
    """Constants of one LIF run.

    The membrane potential follows

        tau * dV/dt = -(V - v_rest) + r_membrane * i_input

    and is reset to ``v_reset`` whenever it reaches ``v_threshold``.
    Units are documentary only: mV, MΩ, ms, nA (so R * I is in mV).
    """

    v_rest: float = DEFAULTS.v_rest_mV
    v_reset: float = DEFAULTS.v_reset_mV
    v_threshold: float = DEFAULTS.v_threshold_mV
    v_spike: float = DEFAULTS.v_spike_mV  # plotted peak, not part of the dynamics
    r_membrane: float = DEFAULTS.r_membrane_MOhm
    tau: float = DEFAULTS.tau_ms
    i_input: float = DEFAULTS.i_input_nA
    dt: float = DEFAULTS.time_step_ms
    duration: float = DEFAULTS.duration_ms

    @property
    def steps(self) -> int:
        """Number of Euler steps: duration / dt truncated, trailing partial step dropped."""
        return int(math.floor(self.duration / self.dt))

    @property
    def equilibrium_voltage(self) -> float:
        return self.v_rest + self.r_membrane * self.i_input

    def fires_tonically(self) -> bool:
        """True when the membrane returns to threshold after every reset.

        An equilibrium exactly at threshold is only approached asymptotically
        and never fires, unless the reset potential is itself at or above
        threshold (then each step fires once threshold has been reached).
        """
        if self.v_reset >= self.v_threshold:
            return self.equilibrium_voltage >= self.v_threshold or self.v_rest >= self.v_threshold
        return self.equilibrium_voltage > self.v_threshold

    def replace(self, **changes: float) -> "NeuronParams":
        unknown = set(changes) - set(PARAM_NAMES)
        if unknown:
            raise ConfigurationError(f"Unknown parameter(s): {sorted(unknown)}")
        return dc_replace(self, **changes)

    def validate(self) -> "NeuronParams":
        """Reject configurations the stepping loop cannot run.

        ``tau == 0`` is deliberately accepted; it yields inf/NaN voltages.
        """
        for name in PARAM_NAMES:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(
                    f"{name} must be a number, got {type(value).__name__}"
                )
        if not (self.dt > 0.0) or not math.isfinite(self.dt):
            raise ConfigurationError(f"dt must be a positive finite number, got {self.dt!r}")
        if not (self.duration >= 0.0) or not math.isfinite(self.duration):
            raise ConfigurationError(
                f"duration must be a non-negative finite number, got {self.duration!r}"
            )
        if not math.isfinite(self.duration / self.dt):
            raise ConfigurationError(
                f"duration / dt overflows (duration={self.duration!r}, dt={self.dt!r})"
            )
        return self

    def to_dict(self) -> dict[str, float]:
        return {k: float(v) for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NeuronParams":
        """Build from a mapping holding any subset of the nine parameter names."""
        unknown = set(data) - set(PARAM_NAMES)
        if unknown:
            raise ConfigurationError(f"Unknown parameter(s): {sorted(unknown)}")
        values: dict[str, float] = {}
        for key, raw in data.items():
            try:
                values[key] = float(raw)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"{key} must be a number, got {raw!r}") from e
        return cls(**values)


PARAM_NAMES: tuple[str, ...] = tuple(f.name for f in fields(NeuronParams))

DEFAULT_PARAMS = NeuronParams()


# ---- JSON helpers ----

JsonPath = Union[str, Path]


def load_params_from_json(path: JsonPath) -> NeuronParams:
    """Load a NeuronParams instance from a JSON object; missing keys use defaults."""
    p = Path(path)
    logger.info(f"Loading parameters from: {p}")
    with p.open("r", encoding="utf-8") as f:
        cfg = json.load(f)

    if not isinstance(cfg, dict):
        raise ConfigurationError(f"{p} must contain a JSON object, got {type(cfg).__name__}")

    return NeuronParams.from_dict(cfg)


def save_params_to_json(params: NeuronParams, path: JsonPath) -> None:
    p = Path(path)
    with p.open("w", encoding="utf-8") as f:
        json.dump(params.to_dict(), f, indent=2)
    logger.debug(f"Parameters saved to: {p}")
