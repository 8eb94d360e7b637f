from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from lif_neuron.api.app import app
from lif_neuron.api.core import UserConfig, run_neuron_simulation
from lif_neuron.config import DEFAULTS


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_defaults(client):
    resp = client.get("/defaults")
    assert resp.status_code == 200
    assert resp.json()["i_input"] == 2.0


def test_simulate_reference(client):
    resp = client.post("/simulate", json={})
    assert resp.status_code == 200
    body = resp.json()

    assert body["spike_count"] == 7
    assert body["n_samples"] == 1015
    assert body["voltages_mV"][0] == -70.0
    assert body["analytic_rate_hz"] > 0.0


def test_simulate_without_samples(client):
    resp = client.post("/simulate", json={"i_input": 1.0, "include_samples": False})
    assert resp.status_code == 200
    body = resp.json()

    assert body["spike_count"] == 0
    assert "voltages_mV" not in body
    assert "times_ms" not in body


def test_simulate_rejects_bad_time_step(client):
    resp = client.post("/simulate", json={"dt": 0.0})
    assert resp.status_code == 422
    assert "dt" in resp.json()["detail"]


def test_simulate_zero_tau_returns_nulls(client):
    resp = client.post("/simulate", json={"tau": 0.0, "duration": 1.0})
    assert resp.status_code == 200
    body = resp.json()

    assert body["voltages_mV"][1] is None
    assert body["analytic_rate_hz"] is None


def test_fi_curve_endpoint(client):
    resp = client.post("/fi-curve", json={"currents": [1.0, 2.0], "duration": 100.0})
    assert resp.status_code == 200
    body = resp.json()

    assert body["spike_counts"] == [0, 7]
    assert body["rheobase_nA"] == 2.0


def test_fi_curve_requires_currents(client):
    resp = client.post("/fi-curve", json={"currents": []})
    assert resp.status_code == 422


def test_run_neuron_simulation_defaults():
    result = run_neuron_simulation(UserConfig())

    assert result.steps == 1000
    assert result.spike_count == 7
    assert result.firing_rate_hz == pytest.approx(70.0)
    assert len(result.times_ms) == len(result.voltages_mV) == 1015


def test_run_neuron_simulation_from_json(tmp_path):
    path = tmp_path / "sub.json"
    path.write_text(json.dumps({"i_input": 1.0}), encoding="utf-8")

    result = run_neuron_simulation(UserConfig(params_json=str(path), label="sub"))

    assert result.label == "sub"
    assert result.spike_count == 0
    assert result.final_voltage_mV == pytest.approx(-60.0, abs=1e-3)


def test_run_neuron_simulation_missing_json(tmp_path):
    with pytest.raises(FileNotFoundError):
        run_neuron_simulation(UserConfig(params_json=str(tmp_path / "missing.json")))


def test_simulate_rejects_unknown_keys(client):
    resp = client.post("/simulate", json={"I": 1.0, "include_samples": False})
    assert resp.status_code == 422


def test_simulate_rejects_overflowing_step_count(client):
    resp = client.post("/simulate", json={"dt": 1e-300, "duration": 1e10})
    assert resp.status_code == 422
    assert "overflows" in resp.json()["detail"]


def test_simulate_enforces_step_limit(client):
    resp = client.post("/simulate", json={"duration": 1e9})
    assert resp.status_code == 422
    assert str(DEFAULTS.max_request_steps) in resp.json()["detail"]


def test_fi_curve_step_limit_counts_every_current(client):
    # 100000 steps per run is allowed alone, but not 21 times over
    single = client.post("/simulate", json={"duration": 10000.0, "include_samples": False})
    assert single.status_code == 200

    resp = client.post("/fi-curve", json={"duration": 10000.0, "currents": [0.1 * k for k in range(21)]})
    assert resp.status_code == 422
