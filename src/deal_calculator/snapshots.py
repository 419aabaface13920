from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models.assumptions import Assumptions
from .models.funding import FundingSources
from .models.results import ScenarioDefinition
from .sample_data import build_default_funding_sources, build_default_scenarios


class InputSnapshot(BaseModel):
    """Everything needed to reproduce a calculation: assumptions, funding and scenarios."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    assumptions: Assumptions = Field(default_factory=Assumptions)
    funding_sources: FundingSources = Field(default_factory=build_default_funding_sources)
    scenarios: List[ScenarioDefinition] = Field(default_factory=build_default_scenarios)


def serialize_snapshot(snapshot: InputSnapshot) -> str:
    return snapshot.model_dump_json()


def deserialize_snapshot(payload: str) -> InputSnapshot:
    """Parse a JSON snapshot; malformed input raises ``pydantic.ValidationError``."""
    return InputSnapshot.model_validate_json(payload)


class SnapshotStore:
    """In-memory snapshot store keyed by snapshot id.

    Snapshots are kept serialized so that what comes back out is exactly
    what a durable store would return.
    """

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def save(self, snapshot: InputSnapshot) -> str:
        self._items[snapshot.id] = serialize_snapshot(snapshot)
        return snapshot.id

    def load(self, snapshot_id: str) -> InputSnapshot:
        try:
            payload = self._items[snapshot_id]
        except KeyError:
            raise KeyError(f"Snapshot {snapshot_id} not found") from None
        return deserialize_snapshot(payload)

    def delete(self, snapshot_id: str) -> None:
        self._items.pop(snapshot_id, None)

    def list_ids(self) -> List[str]:
        return list(self._items.keys())

    def __contains__(self, snapshot_id: str) -> bool:
        return snapshot_id in self._items

    def __len__(self) -> int:
        return len(self._items)
