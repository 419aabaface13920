from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .models.assumptions import Assumptions
from .models.funding import FundingSources
from .models.results import ScenarioDefinition, ScenarioResult
from .snapshots import InputSnapshot


class SnapshotCreateRequest(BaseModel):
    snapshot: InputSnapshot


class SnapshotCreateResponse(BaseModel):
    snapshot_id: str


class SnapshotListResponse(BaseModel):
    snapshots: List[str]


class SnapshotResponse(BaseModel):
    snapshot: InputSnapshot


class RunRequest(BaseModel):
    snapshot_id: Optional[str] = None
    assumptions: Optional[Assumptions] = None
    funding_sources: Optional[FundingSources] = None
    scenarios: Optional[List[ScenarioDefinition]] = None
    include_trace: bool = Field(default=False, description="Attach the per-stage calculation trace")


class RunResponse(BaseModel):
    results: List[ScenarioResult]


class DefaultsResponse(BaseModel):
    assumptions: Assumptions
    funding_sources: FundingSources
    scenarios: List[ScenarioDefinition]
