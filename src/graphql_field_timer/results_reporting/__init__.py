"""Results reporting exports."""

from .console_report import format_duration, format_ranked_table, format_summary
from .json_report import build_json_report
from .ranking import rank_results
from .report_models import RankedResult, ResultStatus, RunMetadata
from .run_report_writer import RUN_INFO_SHEET_NAME, TIMINGS_SHEET_NAME, write_results_workbook

__all__ = [
    "RankedResult",
    "ResultStatus",
    "RunMetadata",
    "RUN_INFO_SHEET_NAME",
    "TIMINGS_SHEET_NAME",
    "build_json_report",
    "format_duration",
    "format_ranked_table",
    "format_summary",
    "rank_results",
    "write_results_workbook",
]
