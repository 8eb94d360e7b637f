from __future__ import annotations


class LIFError(Exception):
    """Base class for errors raised by the lif_neuron package."""


class ConfigurationError(LIFError, ValueError):
    """A parameter set that cannot be simulated (raised before any stepping)."""
