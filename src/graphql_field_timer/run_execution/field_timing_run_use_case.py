"""Field timing run use-case service."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from graphql_field_timer.configuration import (
    DEFAULT_TIMEOUT_SECONDS,
    Configuration,
    ConfigurationError,
    EndpointSettings,
    ExecutionPolicy,
    load_configuration,
    load_variables_file,
    parse_headers,
    parse_variables,
    validate_endpoint_url,
)
from graphql_field_timer.field_isolation import iter_isolated_documents
from graphql_field_timer.query_parsing import ParseError, parse_query_document
from graphql_field_timer.request_timing import GraphQLTimingClient
from graphql_field_timer.results_reporting import RunMetadata, rank_results

from .field_timing_coordinator import (
    FatalRunError,
    FieldTimer,
    ResultCallback,
    RunExecutionError,
    time_fields,
)
from .run_contracts import RunArtifacts, RunOutcome, RunRequest

_LOGGER = logging.getLogger(__name__)

ClientFactory = Callable[[EndpointSettings], FieldTimer]


def execute_field_timing_run(
    request: RunRequest,
    *,
    client_factory: ClientFactory | None = None,
    cancel_event: threading.Event | None = None,
    on_result: ResultCallback | None = None,
) -> RunOutcome:
    """Execute one full field timing run and return the ranked outcome."""
    artifacts = load_run_artifacts(request)
    return run_field_timings(
        artifacts,
        client_factory=client_factory,
        cancel_event=cancel_event,
        on_result=on_result,
    )


def load_run_artifacts(request: RunRequest) -> RunArtifacts:
    """Resolve settings, parse the query, and isolate its top-level fields.

    Raises:
      RunExecutionError: If the configuration or request inputs are invalid.
      FatalRunError: If the query cannot be parsed or has no field to time.
    """
    try:
        configuration = load_configuration(request.config_path) if request.config_path else None
        endpoint = _resolve_endpoint(request, configuration)
        policy = _resolve_policy(request, configuration)
        variables = _resolve_variables(request, configuration)
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc

    try:
        document = parse_query_document(request.query_text, request.operation_name)
    except ParseError as exc:
        raise FatalRunError(f"Query could not be parsed: {exc}") from exc

    isolated_fields = tuple(iter_isolated_documents(document))
    if not isolated_fields:
        raise FatalRunError("Query has no top-level fields to time.")
    return RunArtifacts(
        endpoint=endpoint,
        policy=policy,
        variables=variables,
        document=document,
        isolated_fields=isolated_fields,
    )


def run_field_timings(
    artifacts: RunArtifacts,
    *,
    client_factory: ClientFactory | None = None,
    cancel_event: threading.Event | None = None,
    on_result: ResultCallback | None = None,
) -> RunOutcome:
    """Time every isolated field of prepared artifacts and rank the results."""
    resolved_client_factory = client_factory or GraphQLTimingClient
    run_start = datetime.now(UTC)
    _LOGGER.info(
        "Timing %d field(s) against %s (max_concurrency=%d)",
        len(artifacts.isolated_fields),
        artifacts.endpoint.url,
        artifacts.policy.max_concurrency,
    )
    client = resolved_client_factory(artifacts.endpoint)
    try:
        results = time_fields(
            artifacts.isolated_fields,
            client,
            artifacts.variables,
            policy=artifacts.policy,
            cancel_event=cancel_event,
            on_result=on_result,
        )
    finally:
        close = getattr(client, "close", None)
        if callable(close):
            close()

    outcome = RunOutcome(
        metadata=RunMetadata(
            run_start=run_start,
            endpoint_url=artifacts.endpoint.url,
            operation_name=artifacts.document.operation.name,
            timeout_seconds=artifacts.endpoint.timeout_seconds,
            max_concurrency=artifacts.policy.max_concurrency,
        ),
        results=results,
        ranked=rank_results(results),
    )
    _LOGGER.info("Timed %d field(s), %d failed", len(outcome.results), outcome.failed_count)
    return outcome


def _resolve_endpoint(
    request: RunRequest, configuration: Configuration | None
) -> EndpointSettings:
    raw_url = request.url or (configuration.url if configuration else None)
    if not raw_url:
        raise ConfigurationError("Endpoint URL is required (--url or endpoint.url).")
    timeout_seconds = request.timeout_seconds
    if timeout_seconds is None:
        timeout_seconds = (
            configuration.timeout_seconds if configuration else DEFAULT_TIMEOUT_SECONDS
        )
    if timeout_seconds <= 0:
        raise ConfigurationError("Timeout must be greater than zero.")
    verify_ssl = request.verify_ssl
    if verify_ssl is None:
        verify_ssl = configuration.verify_ssl if configuration else True
    configured_headers = configuration.headers if configuration else ()
    return EndpointSettings(
        url=validate_endpoint_url(raw_url),
        headers=configured_headers + parse_headers(request.header_lines),
        timeout_seconds=float(timeout_seconds),
        verify_ssl=verify_ssl,
    )


def _resolve_policy(request: RunRequest, configuration: Configuration | None) -> ExecutionPolicy:
    configured = configuration.execution if configuration else ExecutionPolicy()
    max_concurrency = (
        request.max_concurrency
        if request.max_concurrency is not None
        else configured.max_concurrency
    )
    if max_concurrency <= 0:
        raise ConfigurationError("Concurrency must be greater than zero.")
    fail_fast = request.fail_fast if request.fail_fast is not None else configured.fail_fast
    return ExecutionPolicy(max_concurrency=max_concurrency, fail_fast=fail_fast)


def _resolve_variables(
    request: RunRequest, configuration: Configuration | None
) -> dict[str, Any]:
    variables: dict[str, Any] = dict(configuration.variables) if configuration else {}
    if request.variables_path:
        variables.update(load_variables_file(request.variables_path))
    variables.update(parse_variables(request.variables_text))
    return variables
