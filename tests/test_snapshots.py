from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from deal_calculator.models.assumptions import Assumptions
from deal_calculator.models.funding import FundingKind
from deal_calculator.sample_data import build_default_funding_sources
from deal_calculator.snapshots import InputSnapshot, SnapshotStore, deserialize_snapshot, serialize_snapshot


def _snapshot(snapshot_id: str = "base") -> InputSnapshot:
    return InputSnapshot(
        id=snapshot_id,
        name="Base case",
        assumptions=Assumptions(valuation_multiple=3.8),
        funding_sources=build_default_funding_sources().replace(FundingKind.SBA_LOAN, enabled=True),
    )


def test_snapshot_survives_serialization():
    snapshot = _snapshot()
    restored = deserialize_snapshot(serialize_snapshot(snapshot))

    assert restored == snapshot
    assert restored.funding_sources[FundingKind.SBA_LOAN].enabled
    assert len(restored.scenarios) == 4


def test_malformed_snapshot_is_rejected():
    with pytest.raises(ValidationError):
        deserialize_snapshot("{not json")


def test_snapshot_missing_a_funding_kind_is_rejected():
    payload = json.loads(serialize_snapshot(_snapshot()))
    del payload["funding_sources"]["sources"]["home_equity"]

    with pytest.raises(ValidationError):
        deserialize_snapshot(json.dumps(payload))


def test_store_round_trip_and_missing_key():
    store = SnapshotStore()
    store.save(_snapshot("a"))
    store.save(_snapshot("b"))

    assert store.list_ids() == ["a", "b"]
    assert store.load("a").assumptions.valuation_multiple == 3.8
    assert "b" in store
    store.delete("b")
    assert len(store) == 1
    with pytest.raises(KeyError):
        store.load("b")
