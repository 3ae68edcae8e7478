"""Results reporting entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from graphql_field_timer.field_isolation import FieldIdentifier
from graphql_field_timer.request_timing import TimingOutcome


class ResultStatus(str, Enum):
    """Rendered status of one ranked field."""

    OK = "OK"
    GRAPHQL_ERROR = "GRAPHQL_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


STATUS_BY_OUTCOME = {
    TimingOutcome.SUCCESS: ResultStatus.OK,
    TimingOutcome.GRAPHQL_ERROR: ResultStatus.GRAPHQL_ERROR,
    TimingOutcome.TRANSPORT_ERROR: ResultStatus.TRANSPORT_ERROR,
}


@dataclass(frozen=True)
class RankedResult:
    """One field's timing in the ranked report."""

    rank: int
    identifier: FieldIdentifier
    position: int
    duration_seconds: float | None
    outcome: TimingOutcome
    status: ResultStatus
    message: str | None
    query: str

    @property
    def is_ok(self) -> bool:
        return self.status == ResultStatus.OK


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered next to the ranked timings."""

    run_start: datetime
    endpoint_url: str
    operation_name: str | None
    timeout_seconds: float
    max_concurrency: int
