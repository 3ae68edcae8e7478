"""Run execution domain exports."""

from .field_timing_coordinator import (
    FatalRunError,
    FieldTimer,
    RunCancelledError,
    RunExecutionError,
    time_fields,
)
from .field_timing_run_use_case import (
    execute_field_timing_run,
    load_run_artifacts,
    run_field_timings,
)
from .run_contracts import RunArtifacts, RunOutcome, RunRequest

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunArtifacts",
    "RunExecutionError",
    "FatalRunError",
    "RunCancelledError",
    "FieldTimer",
    "time_fields",
    "execute_field_timing_run",
    "load_run_artifacts",
    "run_field_timings",
]
