"""Machine-readable rendering of ranked field timings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .report_models import RankedResult, RunMetadata


def build_json_report(ranked: Sequence[RankedResult], metadata: RunMetadata) -> dict[str, Any]:
    return {
        "run": {
            "run_start": metadata.run_start.isoformat(),
            "endpoint": metadata.endpoint_url,
            "operation_name": metadata.operation_name,
            "timeout_seconds": metadata.timeout_seconds,
            "max_concurrency": metadata.max_concurrency,
        },
        "fields": [
            {
                "rank": entry.rank,
                "field": entry.identifier.label,
                "name": entry.identifier.name,
                "alias": entry.identifier.alias,
                "position": entry.position,
                "duration_seconds": entry.duration_seconds,
                "outcome": entry.outcome.value,
                "status": entry.status.value,
                "message": entry.message,
            }
            for entry in ranked
        ],
    }
