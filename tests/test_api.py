"""Tests for the HTTP API served by the local development app."""

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_api_root(client):
    resp = client.get("/api")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Beam Cutting Optimizer API"}


def test_home_serves_page(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "Beam Cutting Optimizer" in resp.text


def test_solve_with_default_stock(client):
    resp = client.post("/api/solve", json={"required": [
        {"length": 500, "quantity": 2},
        {"length": 800, "quantity": 3},
    ]})

    assert resp.status_code == 200
    data = resp.json()
    assert data["expanded_demand"] == [800, 800, 800, 500, 500]
    assert data["bars_needed"] == 2
    assert len(data["bar_plans"]) == 8
    assert data["bar_plans"][0]["cuts"] == [800, 800, 800]
    assert data["bar_plans"][0]["waste_mm"] == 300
    assert data["bar_plans"][1]["cuts"] == [500, 500]
    assert data["total_capacity"] == 21600
    assert data["total_used"] == 3400
    assert data["total_waste"] == 18200
    assert data["efficiency_percent"] == 16


def test_solve_returns_segments(client):
    resp = client.post("/api/solve", json={
        "required": [{"length": 60, "quantity": 1}],
        "stock": [{"length": 100, "quantity": 1}],
    })

    assert resp.status_code == 200
    bar = resp.json()["bar_plans"][0]
    assert bar["used_percent"] == 60
    assert bar["segments"] == [
        {"kind": "cut", "length": 60, "width_percent": 60.0},
        {"kind": "waste", "length": 40, "width_percent": 40.0},
    ]


def test_solve_capacity_exceeded(client):
    resp = client.post("/api/solve", json={
        "required": [{"length": 500, "quantity": 2}, {"length": 800, "quantity": 3}],
        "stock": [{"length": 2700, "quantity": 1}],
    })

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["kind"] == "capacity_exceeded"
    assert detail["total_demand"] == 3400
    assert detail["total_capacity"] == 2700
    assert "exceeds capacity" in detail["message"]


def test_solve_placement_failed(client):
    resp = client.post("/api/solve", json={
        "required": [{"length": 70, "quantity": 2}, {"length": 60, "quantity": 1}],
        "stock": [{"length": 100, "quantity": 2}],
    })

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["kind"] == "placement_failed"
    assert detail["unplaceable"] == [60]


@pytest.mark.parametrize("body", [
    {"required": []},
    {"required": [{"length": 0, "quantity": 1}]},
    {"required": [{"length": 500, "quantity": -2}]},
    {"required": [{"length": "abc", "quantity": 1}]},
    {"required": [{"length": 500, "quantity": 1}], "stock": []},
    {"required": [{"length": 500, "quantity": 1}], "stock": [{"length": 0, "quantity": 1}]},
])
def test_solve_rejects_invalid_input(client, body):
    resp = client.post("/api/solve", json=body)

    assert resp.status_code == 422
