from __future__ import annotations

import argparse
from typing import Optional, Sequence

from lif_neuron.analytics.plots import save_trace_plot
from lif_neuron.config import DEFAULTS
from lif_neuron.errors import ConfigurationError
from lif_neuron.logging_config import setup_logging
from lif_neuron.models.parameters import NeuronParams, load_params_from_json
from lif_neuron.simulation.euler import run_lif_simulation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate a single leaky integrate-and-fire neuron.")
    parser.add_argument("--v-rest", type=float, default=DEFAULTS.v_rest_mV, help="resting potential (mV)")
    parser.add_argument("--v-reset", type=float, default=DEFAULTS.v_reset_mV, help="reset potential (mV)")
    parser.add_argument("--v-threshold", type=float, default=DEFAULTS.v_threshold_mV, help="threshold (mV)")
    parser.add_argument("--v-spike", type=float, default=DEFAULTS.v_spike_mV, help="plotted spike peak (mV)")
    parser.add_argument("--r", type=float, default=DEFAULTS.r_membrane_MOhm, help="membrane resistance (MOhm)")
    parser.add_argument("--tau", type=float, default=DEFAULTS.tau_ms, help="membrane time constant (ms)")
    parser.add_argument("--current", type=float, default=DEFAULTS.i_input_nA, help="input current (nA)")
    parser.add_argument("--dt", type=float, default=DEFAULTS.time_step_ms, help="time step (ms)")
    parser.add_argument("--duration", type=float, default=DEFAULTS.duration_ms, help="total time (ms)")
    parser.add_argument("--params-json", help="JSON file with parameters; overrides the flags above")
    parser.add_argument("--plot", help="write the voltage trace figure to this PNG path")
    parser.add_argument("--csv", help="write the samples to this CSV path")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def params_from_args(args: argparse.Namespace) -> NeuronParams:
    if args.params_json:
        return load_params_from_json(args.params_json)
    return NeuronParams(
        v_rest=args.v_rest,
        v_reset=args.v_reset,
        v_threshold=args.v_threshold,
        v_spike=args.v_spike,
        r_membrane=args.r,
        tau=args.tau,
        i_input=args.current,
        dt=args.dt,
        duration=args.duration,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        trace = run_lif_simulation(params_from_args(args))
    except ConfigurationError as e:
        print(f"error: {e}")
        return 2

    print(trace.summary())

    if args.csv:
        print("Trace written to:", trace.to_csv(args.csv))
    if args.plot:
        print("Plot written to:", save_trace_plot(trace, args.plot))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
