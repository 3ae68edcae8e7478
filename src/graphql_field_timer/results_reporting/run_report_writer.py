"""Results workbook writer service."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .report_models import RankedResult, ResultStatus, RunMetadata

TIMINGS_SHEET_NAME = "Timings"
RUN_INFO_SHEET_NAME = "RunInfo"

TIMINGS_COLUMNS: tuple[str, ...] = (
    "Rank",
    "Field",
    "Position",
    "Duration (s)",
    "Status",
    "Message",
    "Query",
)
_COLUMN_WIDTHS = (8, 40, 10, 14, 18, 60, 80)


def write_results_workbook(
    output_path: Path | str,
    ranked: Sequence[RankedResult],
    run_metadata: RunMetadata,
) -> Path:
    """Write ranked timings and run metadata to an Excel workbook."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    sheet.title = TIMINGS_SHEET_NAME

    _write_header_row(sheet)
    for row, entry in enumerate(ranked, start=2):
        values = (
            entry.rank,
            entry.identifier.label,
            entry.position + 1,
            entry.duration_seconds,
            entry.status.value,
            entry.message or "",
            entry.query,
        )
        for column, value in enumerate(values, start=1):
            sheet.cell(row=row, column=column, value=value)
        sheet.cell(row=row, column=4).number_format = "0.000"
        sheet.cell(row=row, column=7).alignment = Alignment(wrap_text=True, vertical="top")
    sheet.freeze_panes = "A2"

    _write_run_info_sheet(workbook, ranked, run_metadata)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_header_row(sheet: Worksheet) -> None:
    for column, (name, width) in enumerate(zip(TIMINGS_COLUMNS, _COLUMN_WIDTHS, strict=True), 1):
        sheet.cell(row=1, column=column, value=name)
        sheet.cell(row=1, column=column).style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column)].width = width


def _write_run_info_sheet(
    workbook: Workbook, ranked: Sequence[RankedResult], run_metadata: RunMetadata
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    counts = Counter(entry.status for entry in ranked)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("endpoint", run_metadata.endpoint_url),
        ("operation_name", run_metadata.operation_name or ""),
        ("timeout_seconds", run_metadata.timeout_seconds),
        ("max_concurrency", run_metadata.max_concurrency),
        ("total", len(ranked)),
        ("ok", counts[ResultStatus.OK]),
        ("graphql_errors", counts[ResultStatus.GRAPHQL_ERROR]),
        ("transport_errors", counts[ResultStatus.TRANSPORT_ERROR]),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
