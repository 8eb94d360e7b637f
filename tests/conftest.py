from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from lif_neuron.models.parameters import DEFAULT_PARAMS, NeuronParams


@pytest.fixture
def default_params() -> NeuronParams:
    return DEFAULT_PARAMS


@pytest.fixture
def subthreshold_params() -> NeuronParams:
    # equilibrium -60 mV, threshold -55 mV
    return DEFAULT_PARAMS.replace(i_input=1.0)
