from __future__ import annotations

import logging
import math
from typing import Any, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from lif_neuron.analytics.spikes import analytic_rate_hz, compute_fi_curve
from lif_neuron.config import DEFAULTS
from lif_neuron.errors import ConfigurationError
from lif_neuron.models.parameters import DEFAULT_PARAMS, PARAM_NAMES, NeuronParams
from lif_neuron.simulation.euler import run_lif_simulation

logger = logging.getLogger(__name__)

app = FastAPI(title="LIF Neuron Simulator API")


class ParamsBody(BaseModel):
    """Any subset of the nine parameters; omitted ones take the reference defaults."""

    model_config = ConfigDict(extra="forbid")

    v_rest: Optional[float] = None
    v_reset: Optional[float] = None
    v_threshold: Optional[float] = None
    v_spike: Optional[float] = None
    r_membrane: Optional[float] = None
    tau: Optional[float] = None
    i_input: Optional[float] = None
    dt: Optional[float] = None
    duration: Optional[float] = None

    def to_params(self, n_runs: int = 1) -> NeuronParams:
        """Validated parameters; refuses requests above ``DEFAULTS.max_request_steps`` in total."""
        values = {k: v for k, v in self.model_dump().items() if k in PARAM_NAMES and v is not None}
        params = NeuronParams.from_dict(values).validate()
        total = params.steps * n_runs
        if total > DEFAULTS.max_request_steps:
            raise ConfigurationError(
                f"Request needs {total} Euler steps; the limit is {DEFAULTS.max_request_steps}"
            )
        return params


class SimulateBody(ParamsBody):
    include_samples: bool = True


class FICurveBody(ParamsBody):
    currents: List[float] = Field(..., min_length=1, max_length=500)


def _json_safe(value: Any) -> Any:
    """Replace inf/NaN (tau == 0 runs) with None; JSON has no encoding for them."""
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    return value


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.warning(f"Rejected configuration on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.get("/defaults")
async def defaults() -> dict:
    return DEFAULT_PARAMS.to_dict()


@app.post("/simulate")
def simulate(body: SimulateBody) -> dict:
    params = body.to_params()
    trace = run_lif_simulation(params)

    payload = trace.to_dict()
    payload["analytic_rate_hz"] = analytic_rate_hz(params)
    if not body.include_samples:
        payload.pop("times_ms")
        payload.pop("voltages_mV")
    return _json_safe(payload)


@app.post("/fi-curve")
def fi_curve(body: FICurveBody) -> dict:
    params = body.to_params(n_runs=len(body.currents))
    curve = compute_fi_curve(params, body.currents)
    return _json_safe({"params": params.to_dict(), **curve.to_dict()})
