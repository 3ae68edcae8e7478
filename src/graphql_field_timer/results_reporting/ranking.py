"""Ranking of field timing results."""

from __future__ import annotations

from collections.abc import Sequence

from graphql_field_timer.request_timing import TimingResult

from .report_models import STATUS_BY_OUTCOME, RankedResult


def rank_results(results: Sequence[TimingResult]) -> tuple[RankedResult, ...]:
    """Order results slowest first.

    Equal durations keep their original field order; results without a
    recorded duration come last, also in original field order.
    """
    ordered = sorted(
        enumerate(results),
        key=lambda item: (
            item[1].duration_seconds is None,
            -(item[1].duration_seconds or 0.0),
            item[1].position,
            item[0],
        ),
    )
    return tuple(
        RankedResult(
            rank=rank,
            identifier=result.identifier,
            position=result.position,
            duration_seconds=result.duration_seconds,
            outcome=result.outcome,
            status=STATUS_BY_OUTCOME[result.outcome],
            message=result.message,
            query=result.query,
        )
        for rank, (_, result) in enumerate(ordered, start=1)
    )
