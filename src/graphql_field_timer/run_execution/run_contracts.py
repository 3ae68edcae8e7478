"""Run execution entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from graphql_field_timer.configuration.runtime_settings import EndpointSettings, ExecutionPolicy
from graphql_field_timer.document_model import Document
from graphql_field_timer.field_isolation import IsolatedField
from graphql_field_timer.request_timing import TimingResult
from graphql_field_timer.results_reporting import RankedResult, RunMetadata


@dataclass(frozen=True)
class RunRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for executing one run.

    Unset options fall back to the configuration file, then to defaults.
    """

    query_text: str
    url: str | None = None
    header_lines: tuple[str, ...] = ()
    variables_text: str | None = None
    variables_path: str | None = None
    operation_name: str | None = None
    config_path: str | None = None
    timeout_seconds: float | None = None
    max_concurrency: int | None = None
    verify_ssl: bool | None = None
    fail_fast: bool | None = None


@dataclass(frozen=True)
class RunArtifacts:
    """Parsed and isolated inputs required during run execution."""

    endpoint: EndpointSettings
    policy: ExecutionPolicy
    variables: Mapping[str, Any]
    document: Document
    isolated_fields: tuple[IsolatedField, ...]


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    metadata: RunMetadata
    results: tuple[TimingResult, ...]
    ranked: tuple[RankedResult, ...]

    @property
    def failed_count(self) -> int:
        return sum(1 for result in self.results if not result.succeeded)
