from __future__ import annotations

import io

import matplotlib.pyplot as plt
import streamlit as st

from lif_neuron.analytics.plots import plot_trace
from lif_neuron.api.core import UserConfig, run_neuron_simulation
from lif_neuron.config import DEFAULTS
from lif_neuron.errors import ConfigurationError
from lif_neuron.logging_config import setup_logging


def main() -> None:
    setup_logging()
    st.title("Leaky Integrate-and-Fire Neuron")

    st.sidebar.header("Membrane Potentials (mV)")
    v_rest = st.sidebar.number_input("Resting potential", value=DEFAULTS.v_rest_mV, step=1.0)
    v_reset = st.sidebar.number_input("Reset potential", value=DEFAULTS.v_reset_mV, step=1.0)
    v_threshold = st.sidebar.number_input("Threshold", value=DEFAULTS.v_threshold_mV, step=1.0)
    v_spike = st.sidebar.number_input("Spike peak (display)", value=DEFAULTS.v_spike_mV, step=1.0)

    st.sidebar.header("Membrane & Input")
    r_membrane = st.sidebar.number_input("Resistance R (MΩ)", value=DEFAULTS.r_membrane_MOhm, step=0.5)
    tau = st.sidebar.number_input("Time constant τ (ms)", value=DEFAULTS.tau_ms, step=0.5)
    i_input = st.sidebar.number_input("Input current I (nA)", value=DEFAULTS.i_input_nA, step=0.1)

    st.sidebar.header("Simulation")
    dt = st.sidebar.number_input("Time step dt (ms)", min_value=0.001, value=DEFAULTS.time_step_ms, step=0.01, format="%.3f")
    duration = st.sidebar.number_input("Duration T (ms)", min_value=0.0, value=DEFAULTS.duration_ms, step=10.0)

    run_btn = st.button("Run Simulation")

    if run_btn:
        user_cfg = UserConfig(
            v_rest_mV=v_rest,
            v_reset_mV=v_reset,
            v_threshold_mV=v_threshold,
            v_spike_mV=v_spike,
            r_membrane_MOhm=r_membrane,
            tau_ms=tau,
            i_input_nA=i_input,
            dt_ms=dt,
            duration_ms=duration,
            label="streamlit",
        )

        try:
            result = run_neuron_simulation(user_cfg)
        except ConfigurationError as e:
            st.error(f"Invalid configuration: {e}")
            return

        st.subheader("Results")
        col1, col2, col3 = st.columns(3)
        col1.metric("Spikes", f"{result.spike_count}")
        col2.metric("Firing rate (Hz)", f"{result.firing_rate_hz:.1f}")
        col3.metric("Final V (mV)", f"{result.final_voltage_mV:.2f}")
        st.write(
            f"Steps: {result.steps}  ·  equilibrium {result.params.equilibrium_voltage:.1f} mV  ·  "
            f"analytic rate {result.analytic_rate_hz:.1f} Hz"
        )

        fig = plot_trace(result.trace)
        st.pyplot(fig)
        plt.close(fig)

        buf = io.StringIO()
        result.trace.to_csv(buf)
        st.download_button("Download trace (CSV)", buf.getvalue(), file_name="lif_trace.csv", mime="text/csv")


if __name__ == "__main__":
    main()
