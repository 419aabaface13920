from __future__ import annotations

from typing import Dict

from fastapi import FastAPI, HTTPException

from .sample_data import build_default_assumptions, build_default_funding_sources, build_default_scenarios
from .schemas import (
    DefaultsResponse,
    RunRequest,
    RunResponse,
    SnapshotCreateRequest,
    SnapshotCreateResponse,
    SnapshotListResponse,
    SnapshotResponse,
)
from .services.calculator import ScenarioCalculator
from .snapshots import InputSnapshot, SnapshotStore


app = FastAPI(title="SBA Acquisition Deal Calculator", version="0.1.0")

SNAPSHOTS = SnapshotStore()
calculator = ScenarioCalculator()


def load_snapshot(snapshot_id: str) -> InputSnapshot:
    try:
        return SNAPSHOTS.load(snapshot_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Snapshot not found") from None


@app.post("/snapshots", response_model=SnapshotCreateResponse)
def create_snapshot(payload: SnapshotCreateRequest) -> SnapshotCreateResponse:
    snapshot_id = SNAPSHOTS.save(payload.snapshot)
    return SnapshotCreateResponse(snapshot_id=snapshot_id)


@app.get("/snapshots", response_model=SnapshotListResponse)
def list_snapshots() -> SnapshotListResponse:
    return SnapshotListResponse(snapshots=SNAPSHOTS.list_ids())


@app.get("/snapshots/{snapshot_id}", response_model=SnapshotResponse)
def get_snapshot(snapshot_id: str) -> SnapshotResponse:
    return SnapshotResponse(snapshot=load_snapshot(snapshot_id))


@app.get("/snapshots/{snapshot_id}/results", response_model=RunResponse)
def get_snapshot_results(snapshot_id: str) -> RunResponse:
    snapshot = load_snapshot(snapshot_id)
    results = calculator.run(snapshot.assumptions, snapshot.funding_sources, snapshot.scenarios)
    return RunResponse(results=results)


@app.post("/run", response_model=RunResponse)
def run_scenarios(payload: RunRequest) -> RunResponse:
    if payload.snapshot_id:
        snapshot = load_snapshot(payload.snapshot_id)
        assumptions = snapshot.assumptions
        funding_sources = snapshot.funding_sources
        scenarios = snapshot.scenarios
    else:
        assumptions = build_default_assumptions()
        funding_sources = build_default_funding_sources()
        scenarios = build_default_scenarios()
    if payload.assumptions is not None:
        assumptions = payload.assumptions
    if payload.funding_sources is not None:
        funding_sources = payload.funding_sources
    if payload.scenarios is not None:
        scenarios = payload.scenarios
    runner = ScenarioCalculator(include_trace=True) if payload.include_trace else calculator
    return RunResponse(results=runner.run(assumptions, funding_sources, scenarios))


@app.get("/defaults", response_model=DefaultsResponse)
def get_defaults() -> DefaultsResponse:
    return DefaultsResponse(
        assumptions=build_default_assumptions(),
        funding_sources=build_default_funding_sources(),
        scenarios=build_default_scenarios(),
    )


@app.get("/health")
def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}
