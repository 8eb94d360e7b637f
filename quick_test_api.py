from __future__ import annotations

from lif_neuron.api.core import UserConfig, run_neuron_simulation


def main() -> None:
    # Reference parameter set, then a sub-threshold input for comparison.
    for label, current in (("reference", 2.0), ("subthreshold", 1.0)):
        user_cfg = UserConfig(
            v_rest_mV=-70.0,
            v_reset_mV=-70.0,
            v_threshold_mV=-55.0,
            v_spike_mV=30.0,
            r_membrane_MOhm=10.0,
            tau_ms=10.0,
            i_input_nA=current,
            dt_ms=0.1,
            duration_ms=100.0,
            label=label,
        )

        result = run_neuron_simulation(user_cfg)

        print(f"[{result.label}] I = {current} nA")
        print("  Steps:", result.steps)
        print("  Spike count:", result.spike_count)
        print("  Firing rate (Hz):", f"{result.firing_rate_hz:.2f}")
        print("  Analytic rate (Hz):", f"{result.analytic_rate_hz:.2f}")
        print("  Final voltage (mV):", f"{result.final_voltage_mV:.4f}")
        print("  Number of samples:", len(result.times_ms))


if __name__ == "__main__":
    main()
