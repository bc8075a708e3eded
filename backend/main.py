# file: backend/main.py
"""
FastAPI Backend — RNG Kernel API v1.

Stateless: the serialized generator state travels inside every request
and the advanced state comes back in every response. No generator lives
in memory between requests.

Endpoints:
  GET  /generators   — registered tags + capabilities
  POST /generators   — create a seeded generator, return its state
  POST /draw         — raw / bounded uniform values
  POST /rewind       — step backwards with previous_ulong
  POST /skip         — jump ahead or back without producing outputs
  POST /sample       — distribution samples + closed-form statistics
"""
from __future__ import annotations

import logging
import math
import os
import sys
from typing import Any, Callable, Dict, List, Optional, Union

from dotenv import load_dotenv

env_path = os.path.join(os.path.dirname(__file__), ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Add project root to path for kernel imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rng_kernel.errors import (
    InvalidParameterError,
    RandomError,
    UnknownTagError,
    UnsupportedOperationError,
)
from rng_kernel.generator import AbstractRandom
from rng_kernel.hashing import state_hash
from rng_kernel.registry import GeneratorRegistry, register_builtin_generators

from rng_distributions import DISTRIBUTIONS, AbstractDistribution

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")
MAX_DRAWS = int(os.environ.get("MAX_DRAWS", "10000"))
PORT = int(os.environ.get("PORT", "8000"))

logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger("rng_api")

# ---------------------------------------------------------------------------
# Registry (explicit startup registration)
# ---------------------------------------------------------------------------

REGISTRY = register_builtin_generators(GeneratorRegistry())

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="RNG Kernel API",
    version="1.0.0",
    description="Deterministic generators and distribution samplers — stateless API",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        FRONTEND_URL,
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Draw kinds
# ---------------------------------------------------------------------------

_DRAW_KINDS: Dict[str, Callable[..., Any]] = {
    "ulong": AbstractRandom.next_ulong,
    "long": AbstractRandom.next_long,
    "uint": AbstractRandom.next_uint,
    "int": AbstractRandom.next_int,
    "double": AbstractRandom.next_double,
    "inclusive_double": AbstractRandom.next_inclusive_double,
    "exclusive_double": AbstractRandom.next_exclusive_double,
    "float": AbstractRandom.next_float,
    "inclusive_float": AbstractRandom.next_inclusive_float,
    "exclusive_float": AbstractRandom.next_exclusive_float,
}

_STATISTICS = ("minimum", "maximum", "mean", "median", "mode", "variance")

# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------


class CreateGeneratorRequest(BaseModel):
    tag: str
    seed: Optional[int] = None


class DrawRequest(BaseModel):
    state: str
    count: int = 1
    kind: str = "ulong"
    inner_bound: Optional[Union[int, float]] = None
    outer_bound: Optional[Union[int, float]] = None
    mean: float = 0.0
    std_dev: float = 1.0


class RewindRequest(BaseModel):
    state: str
    count: int = 1


class SkipRequest(BaseModel):
    state: str
    distance: int


class SampleRequest(BaseModel):
    state: str
    distribution: str
    parameters: Dict[str, float] = {}
    count: int = 1


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------


def _http_error(exc: RandomError) -> HTTPException:
    """Map kernel errors onto HTTP status codes."""
    if isinstance(exc, UnknownTagError):
        status = 404
    elif isinstance(exc, UnsupportedOperationError):
        status = 422
    else:
        status = 400
    logger.warning("Rejected request: %s", exc)
    return HTTPException(status_code=status, detail=str(exc))


def _check_count(count: int) -> None:
    if count < 0 or count > MAX_DRAWS:
        raise InvalidParameterError("count", f"must be in [0, {MAX_DRAWS}], got {count}")


def _load(state: str) -> AbstractRandom:
    return REGISTRY.deserialize(state)


def _state_payload(generator: AbstractRandom) -> Dict[str, Any]:
    return {
        "tag": generator.tag,
        "state": generator.string_serialize(),
        "state_hash": state_hash(generator),
    }


def _integral_bound(value: Optional[Union[int, float]], name: str) -> Optional[int]:
    if value is None or isinstance(value, int):
        return value
    if not value.is_integer():
        raise InvalidParameterError(name, f"integer draws need integral bounds, got {value!r}")
    return int(value)


def _statistics(dist: AbstractDistribution) -> Dict[str, Any]:
    """Closed-form statistics; undefined or unsupported ones become None."""
    out: Dict[str, Any] = {}
    for name in _STATISTICS:
        try:
            value = getattr(dist, name)
        except UnsupportedOperationError:
            value = None
        if isinstance(value, tuple):
            value = [_json_number(v) for v in value]
        elif value is not None:
            value = _json_number(value)
        out[name] = value
    return out


def _json_number(value: float) -> Any:
    """JSON has no infinities; report them as the strings "inf" / "-inf"."""
    if math.isfinite(value):
        return value
    return str(value)


def _json_values(values: List[Any]) -> List[Any]:
    return [_json_number(v) if isinstance(v, float) else v for v in values]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/generators")
def list_generators() -> Dict[str, Any]:
    generators = []
    for tag in REGISTRY.tags():
        prototype = REGISTRY.get(tag)
        generators.append({
            "tag": tag,
            "type": type(prototype).__name__,
            "state_count": prototype.state_count,
            "capabilities": prototype.CAPABILITIES.to_dict(),
        })
    return {"generators": generators}


@app.post("/generators")
def create_generator(req: CreateGeneratorRequest) -> Dict[str, Any]:
    try:
        generator = REGISTRY.create(req.tag, req.seed)
    except RandomError as exc:
        raise _http_error(exc)
    logger.info("Created %s (seeded=%s)", req.tag, req.seed is not None)
    return _state_payload(generator)


@app.post("/draw")
def draw(req: DrawRequest) -> Dict[str, Any]:
    method = _DRAW_KINDS.get(req.kind)
    if method is None and req.kind != "normal":
        raise HTTPException(
            status_code=400,
            detail=f"Unknown kind: {req.kind!r}. Valid kinds: {sorted(_DRAW_KINDS) + ['normal']}",
        )
    try:
        _check_count(req.count)
        generator = _load(req.state)
        if req.kind == "normal":
            values: List[Any] = [generator.next_normal(req.mean, req.std_dev) for _ in range(req.count)]
        else:
            inner, outer = req.inner_bound, req.outer_bound
            if req.kind in ("ulong", "long", "uint", "int"):
                inner = _integral_bound(inner, "inner_bound")
                outer = _integral_bound(outer, "outer_bound")
            values = [method(generator, inner, outer) for _ in range(req.count)]
    except RandomError as exc:
        raise _http_error(exc)

    logger.info("Drew %d %s value(s) from %s", req.count, req.kind, generator.tag)
    return {"values": _json_values(values), **_state_payload(generator)}


@app.post("/rewind")
def rewind(req: RewindRequest) -> Dict[str, Any]:
    try:
        _check_count(req.count)
        generator = _load(req.state)
        values = [generator.previous_ulong() for _ in range(req.count)]
    except RandomError as exc:
        raise _http_error(exc)
    logger.info("Rewound %s by %d step(s)", generator.tag, req.count)
    return {"values": values, **_state_payload(generator)}


@app.post("/skip")
def skip(req: SkipRequest) -> Dict[str, Any]:
    try:
        generator = _load(req.state)
        value = generator.skip(req.distance)
    except RandomError as exc:
        raise _http_error(exc)
    logger.info("Skipped %s by %d step(s)", generator.tag, req.distance)
    return {"value": value, **_state_payload(generator)}


@app.post("/sample")
def sample(req: SampleRequest) -> Dict[str, Any]:
    cls = DISTRIBUTIONS.get(req.distribution)
    if cls is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown distribution: {req.distribution!r}. "
                   f"Valid distributions: {sorted(DISTRIBUTIONS)}",
        )
    unknown = sorted(set(req.parameters) - set(cls.PARAMETER_NAMES))
    if unknown:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown parameters for {req.distribution}: {unknown}. "
                   f"Valid parameters: {list(cls.PARAMETER_NAMES)}",
        )
    try:
        _check_count(req.count)
        generator = _load(req.state)
        params = [
            req.parameters.get(name, default)
            for name, default in zip(cls.PARAMETER_NAMES, cls.DEFAULTS)
        ]
        dist = cls(generator, *params)
        values = dist.next_doubles(req.count)
    except RandomError as exc:
        raise _http_error(exc)

    logger.info("Sampled %d value(s) from %r", req.count, dist)
    return {
        "values": _json_values(values),
        "parameters": dist.parameters,
        "steps": dist.steps,
        "statistics": _statistics(dist),
        **_state_payload(generator),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
