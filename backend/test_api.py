# file: backend/test_api.py
"""
RNG Kernel API — endpoint tests against the in-process FastAPI app.

Run:  pytest backend/test_api.py
"""

from __future__ import annotations

import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from backend.main import MAX_DRAWS, app
from rng_kernel.distinct import DistinctRandom
from rng_kernel.hashing import state_hash
from rng_kernel.tricycle import TricycleRandom


@pytest.fixture
def client():
    return TestClient(app)


def _create(client, tag, seed):
    response = client.post("/generators", json={"tag": tag, "seed": seed})
    assert response.status_code == 200, response.text
    return response.json()["state"]


# ── Registry ──────────────────────────────────────────────────


def test_list_generators(client):
    response = client.get("/generators")
    assert response.status_code == 200
    generators = {g["tag"]: g for g in response.json()["generators"]}
    assert sorted(generators) == ["DisR", "TriR"]
    assert generators["TriR"]["state_count"] == 3
    assert generators["TriR"]["capabilities"]["supports_previous"] is True
    assert generators["TriR"]["capabilities"]["supports_skip"] is False
    assert generators["DisR"]["capabilities"]["supports_skip"] is True


def test_create_seeded_generator(client):
    body = client.post("/generators", json={"tag": "TriR", "seed": 42}).json()
    expected = TricycleRandom(42)
    assert body["tag"] == "TriR"
    assert body["state"] == expected.string_serialize()
    assert body["state_hash"] == state_hash(expected)


def test_create_unseeded_generator(client):
    first = client.post("/generators", json={"tag": "DisR"}).json()
    second = client.post("/generators", json={"tag": "DisR"}).json()
    assert first["state"].startswith("#DisR`")
    assert first["state"] != second["state"]


def test_create_unknown_tag(client):
    response = client.post("/generators", json={"tag": "Nope", "seed": 1})
    assert response.status_code == 404
    assert "Nope" in response.json()["detail"]


# ── Draws ─────────────────────────────────────────────────────


def test_draw_matches_local_generator(client):
    state = _create(client, "TriR", 7)
    body = client.post("/draw", json={"state": state, "count": 3}).json()

    local = TricycleRandom(7)
    assert body["values"] == [local.next_ulong() for _ in range(3)]
    assert body["state"] == local.string_serialize()


def test_draw_is_stateless(client):
    state = _create(client, "TriR", 8)
    request = {"state": state, "count": 5, "kind": "double"}
    assert client.post("/draw", json=request).json() == client.post("/draw", json=request).json()


def test_draw_bounded_ints(client):
    state = _create(client, "TriR", 9)
    body = client.post(
        "/draw",
        json={"state": state, "count": 500, "kind": "int", "inner_bound": 15, "outer_bound": 5},
    ).json()
    assert all(5 < v <= 15 for v in body["values"])


def test_draw_normal(client):
    state = _create(client, "DisR", 10)
    body = client.post(
        "/draw", json={"state": state, "count": 4, "kind": "normal", "mean": 10.0, "std_dev": 0.5}
    ).json()
    local = DistinctRandom(10)
    assert body["values"] == [local.next_normal(10.0, 0.5) for _ in range(4)]


@pytest.mark.parametrize(
    "extra",
    [
        {"kind": "uint", "inner_bound": -1},
        {"kind": "int", "inner_bound": 2.5},
        {"kind": "ulong", "inner_bound": 0, "outer_bound": 2**64},
        {"kind": "nope"},
        {"count": MAX_DRAWS + 1},
        {"count": -1},
    ],
)
def test_draw_rejects_bad_requests(client, extra):
    state = _create(client, "TriR", 11)
    response = client.post("/draw", json={"state": state, **extra})
    assert response.status_code == 400, response.text


def test_draw_bad_state(client):
    assert client.post("/draw", json={"state": "#TriR`1~2`"}).status_code == 400
    assert client.post("/draw", json={"state": "garbage"}).status_code == 400
    assert client.post("/draw", json={"state": "#Nope`1`"}).status_code == 404


# ── Rewind / skip ─────────────────────────────────────────────


def test_rewind_undoes_draws(client):
    state = _create(client, "TriR", 12)
    drawn = client.post("/draw", json={"state": state, "count": 4}).json()
    rewound = client.post("/rewind", json={"state": drawn["state"], "count": 4}).json()
    assert rewound["values"] == list(reversed(drawn["values"]))
    assert rewound["state"] == state


def test_skip_on_distinct(client):
    state = _create(client, "DisR", 13)
    drawn = client.post("/draw", json={"state": state, "count": 6}).json()
    skipped = client.post("/skip", json={"state": state, "distance": 6}).json()
    assert skipped["value"] == drawn["values"][-1]
    assert skipped["state"] == drawn["state"]

    back = client.post("/skip", json={"state": skipped["state"], "distance": -6}).json()
    assert back["state"] == state


def test_skip_unsupported(client):
    state = _create(client, "TriR", 14)
    response = client.post("/skip", json={"state": state, "distance": 3})
    assert response.status_code == 422
    assert "skip" in response.json()["detail"]


# ── Distributions ─────────────────────────────────────────────


def test_sample_normal(client):
    state = _create(client, "TriR", 15)
    body = client.post(
        "/sample",
        json={"state": state, "distribution": "normal", "parameters": {"mu": 2.0}, "count": 3},
    ).json()
    assert body["parameters"] == {"mu": 2.0, "sigma": 1.0}
    assert body["steps"] == 1
    assert len(body["values"]) == 3
    stats = body["statistics"]
    assert stats["minimum"] == "-inf"
    assert stats["maximum"] == "inf"
    assert stats["mean"] == stats["median"] == 2.0
    assert stats["mode"] == [2.0]
    assert stats["variance"] == 1.0


def test_sample_statistics_unavailable(client):
    state = _create(client, "TriR", 16)
    gamma = client.post(
        "/sample",
        json={"state": state, "distribution": "gamma", "parameters": {"alpha": 0.5}},
    ).json()
    assert gamma["statistics"]["mode"] is None
    assert gamma["statistics"]["median"] is None
    assert gamma["statistics"]["mean"] == 0.5
    assert gamma["steps"] is None

    kuma = client.post("/sample", json={"state": state, "distribution": "kumaraswamy"}).json()
    assert kuma["statistics"]["mean"] is None
    assert 0.0 <= kuma["values"][0] < 1.0


@pytest.mark.parametrize(
    "payload",
    [
        {"distribution": "cauchy"},
        {"distribution": "normal", "parameters": {"rho": 1.0}},
        {"distribution": "normal", "parameters": {"sigma": -1.0}},
        {"distribution": "gamma", "count": -1},
    ],
)
def test_sample_rejects_bad_requests(client, payload):
    state = _create(client, "TriR", 17)
    response = client.post("/sample", json={"state": state, **payload})
    assert response.status_code == 400, response.text


# ── Non-finite values and float kinds ─────────────────────────


def test_sample_overflow_reported_as_string(client):
    state = _create(client, "TriR", 18)
    response = client.post(
        "/sample",
        json={
            "state": state,
            "distribution": "gamma",
            "parameters": {"alpha": 1.0, "beta": 1e-320},
            "count": 3,
        },
    )
    assert response.status_code == 200, response.text
    assert response.json()["values"] == ["inf", "inf", "inf"]


def test_draw_overflow_reported_as_string(client):
    state = _create(client, "TriR", 19)
    response = client.post(
        "/draw",
        json={"state": state, "count": 4, "kind": "double", "inner_bound": -1e308, "outer_bound": 1e308},
    )
    assert response.status_code == 200, response.text
    assert all(v in ("inf", "nan") for v in response.json()["values"])


@pytest.mark.parametrize("kind", ["float", "inclusive_float", "exclusive_float"])
def test_draw_float_kinds(client, kind):
    state = _create(client, "DisR", 20)
    body = client.post(
        "/draw",
        json={"state": state, "count": 50, "kind": kind, "inner_bound": 2.0, "outer_bound": 4.0},
    ).json()
    local = DistinctRandom(20)
    method = getattr(local, f"next_{kind}")
    assert body["values"] == [method(2.0, 4.0) for _ in range(50)]
    assert all(2.0 <= v <= 4.0 for v in body["values"])
