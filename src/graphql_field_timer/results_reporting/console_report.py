"""Console rendering of ranked field timings."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

import click

from .report_models import RankedResult, ResultStatus

_BADGES = {
    ResultStatus.OK: (" OK  ", {"fg": "black", "bg": "green"}),
    ResultStatus.GRAPHQL_ERROR: (" GQL ", {"fg": "black", "bg": "yellow"}),
    ResultStatus.TRANSPORT_ERROR: (" ERR ", {"fg": "white", "bg": "red"}),
}


def format_ranked_table(ranked: Sequence[RankedResult]) -> list[str]:
    """Render one styled line per field, failures followed by their message."""
    lines: list[str] = []
    for entry in ranked:
        text, colors = _BADGES[entry.status]
        badge = click.style(text, bold=True, **colors)
        duration = click.style(f" {format_duration(entry.duration_seconds)} ", dim=True)
        lines.append(f"{badge} {duration} {entry.identifier.label}")
        if not entry.is_ok and entry.message:
            lines.extend(f"      {line}" for line in entry.message.splitlines())
    return lines


def format_summary(ranked: Sequence[RankedResult]) -> str:
    counts = Counter(entry.status for entry in ranked)
    return (
        f"{len(ranked)} fields: {counts[ResultStatus.OK]} ok, "
        f"{counts[ResultStatus.GRAPHQL_ERROR]} graphql errors, "
        f"{counts[ResultStatus.TRANSPORT_ERROR]} transport errors"
    )


def format_duration(duration_seconds: float | None) -> str:
    if duration_seconds is None:
        return "   n/a"
    return f"{duration_seconds:.3f}s"
