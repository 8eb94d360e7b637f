from dataclasses import dataclass


@dataclass
class SimulationDefaults:
    """Default knobs for single-neuron LIF runs (reference parameter set)."""
    v_rest_mV: float = -70.0
    v_reset_mV: float = -70.0
    v_threshold_mV: float = -55.0
    v_spike_mV: float = 30.0     # display value for the action potential peak
    r_membrane_MOhm: float = 10.0
    tau_ms: float = 10.0
    i_input_nA: float = 2.0
    time_step_ms: float = 0.1
    duration_ms: float = 100.0

    # Trace plot (800 x 500 px canvas)
    figure_size_in: tuple[float, float] = (8.0, 5.0)
    figure_dpi: int = 100
    line_width: float = 1.5

    # Upper bound on Euler steps per HTTP request (summed over an F-I sweep)
    max_request_steps: int = 2_000_000


DEFAULTS = SimulationDefaults()
