from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from deal_calculator.main import app

client = TestClient(app)


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_defaults_expose_canonical_inputs():
    body = client.get("/defaults").json()

    assert body["assumptions"]["working_capital_pct"] == 0.12
    assert body["assumptions"]["valuation_multiple"] == 4.2
    assert set(body["funding_sources"]["sources"]) == {
        "personal_loan",
        "owner_cash",
        "outside_equity",
        "seller_note",
        "home_equity",
        "sba_loan",
    }
    assert [scenario["name"] for scenario in body["scenarios"]] == ["Small", "Target", "Large", "Custom"]


def test_run_with_defaults():
    response = client.post("/run", json={})

    assert response.status_code == 200
    results = response.json()["results"]
    assert len(results) == 4
    assert results[1]["deal"]["purchase_price"] == pytest.approx(2_625_000)
    assert results[1]["trace"] == []


def test_run_with_custom_scenario_and_trace():
    payload = {"scenarios": [{"name": "Deal", "target_revenue": 1_800_000}], "include_trace": True}
    results = client.post("/run", json=payload).json()["results"]

    assert len(results) == 1
    assert results[0]["scenario"]["name"] == "Deal"
    assert results[0]["trace"]


def test_snapshot_lifecycle():
    snapshot = {"id": "api-base", "name": "Base", "scenarios": [{"name": "Target", "target_revenue": 2_500_000}]}
    created = client.post("/snapshots", json={"snapshot": snapshot})

    assert created.status_code == 200
    assert created.json() == {"snapshot_id": "api-base"}
    assert "api-base" in client.get("/snapshots").json()["snapshots"]
    assert client.get("/snapshots/api-base").json()["snapshot"]["name"] == "Base"

    results = client.get("/snapshots/api-base/results").json()["results"]
    assert len(results) == 1
    assert results[0]["ownership"]["your_ownership"] < 0.95

    rerun = client.post("/run", json={"snapshot_id": "api-base", "include_trace": False}).json()["results"]
    assert rerun == results


def test_unknown_snapshot_returns_404():
    assert client.get("/snapshots/missing").status_code == 404
    assert client.get("/snapshots/missing/results").status_code == 404
    assert client.post("/run", json={"snapshot_id": "missing"}).status_code == 404


def test_malformed_run_payload_is_rejected():
    response = client.post("/run", json={"scenarios": [{"name": "Bad", "target_revenue": "lots"}]})

    assert response.status_code == 422
