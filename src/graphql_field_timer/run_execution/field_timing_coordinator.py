"""Coordinates one timed request per isolated field."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Any, Protocol

from graphql_field_timer.configuration.runtime_settings import ExecutionPolicy
from graphql_field_timer.field_isolation import IsolatedField
from graphql_field_timer.request_timing import TimingResult, TransportFailure

_LOGGER = logging.getLogger(__name__)

ResultCallback = Callable[[TimingResult], None]


class RunExecutionError(Exception):
    """Raised when a run cannot be completed."""


class FatalRunError(RunExecutionError):
    """Raised when continuing the run is futile (nothing to time, endpoint unreachable)."""


class RunCancelledError(RunExecutionError):
    """Raised when a run is interrupted; carries the results completed so far."""

    def __init__(self, results: Sequence[TimingResult]) -> None:
        self.results = tuple(results)
        super().__init__(f"Run cancelled after {len(self.results)} completed field(s).")


class FieldTimer(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol implemented by the timing client and test fakes."""

    def time_field(
        self, isolated: IsolatedField, variables: Mapping[str, Any] | None = None
    ) -> TimingResult: ...


def time_fields(
    isolated_fields: Sequence[IsolatedField],
    client: FieldTimer,
    variables: Mapping[str, Any] | None = None,
    *,
    policy: ExecutionPolicy | None = None,
    cancel_event: threading.Event | None = None,
    on_result: ResultCallback | None = None,
) -> tuple[TimingResult, ...]:
    """Time every isolated field and return one result per field, in field order.

    Field-level failures are kept in the results. A fatal endpoint failure
    raises `FatalRunError`; cancellation raises `RunCancelledError`.
    """
    resolved_policy = policy or ExecutionPolicy()
    shared_variables = dict(variables or {})
    if resolved_policy.max_concurrency <= 1:
        return _time_sequentially(
            isolated_fields, client, shared_variables, resolved_policy, cancel_event, on_result
        )
    return _time_concurrently(
        isolated_fields, client, shared_variables, resolved_policy, cancel_event, on_result
    )


def _time_sequentially(
    isolated_fields: Sequence[IsolatedField],
    client: FieldTimer,
    variables: Mapping[str, Any],
    policy: ExecutionPolicy,
    cancel_event: threading.Event | None,
    on_result: ResultCallback | None,
) -> tuple[TimingResult, ...]:
    results: list[TimingResult] = []
    for index, isolated in enumerate(isolated_fields):
        if cancel_event is not None and cancel_event.is_set():
            raise RunCancelledError(results)
        try:
            result = client.time_field(isolated, variables)
        except KeyboardInterrupt as exc:
            raise RunCancelledError(results) from exc
        _raise_if_fatal(result, is_first=index == 0, policy=policy)
        results.append(result)
        if on_result is not None:
            on_result(result)
    return tuple(results)


def _time_concurrently(
    isolated_fields: Sequence[IsolatedField],
    client: FieldTimer,
    variables: Mapping[str, Any],
    policy: ExecutionPolicy,
    cancel_event: threading.Event | None,
    on_result: ResultCallback | None,
) -> tuple[TimingResult, ...]:
    completed: dict[int, TimingResult] = {}

    def _call(isolated: IsolatedField) -> TimingResult | None:
        if cancel_event is not None and cancel_event.is_set():
            return None
        return client.time_field(isolated, variables)

    executor = ThreadPoolExecutor(max_workers=policy.max_concurrency)
    try:
        pending: dict[Future[TimingResult | None], int] = {
            executor.submit(_call, isolated): index
            for index, isolated in enumerate(isolated_fields)
        }
        while pending:
            done, _ = wait(pending.keys(), return_when=FIRST_COMPLETED)
            for future in done:
                index = pending.pop(future)
                result = future.result()
                if result is None:
                    continue
                _raise_if_fatal(result, is_first=index == 0, policy=policy)
                completed[index] = result
                if on_result is not None:
                    on_result(result)
    except KeyboardInterrupt as exc:
        executor.shutdown(wait=True, cancel_futures=True)
        raise RunCancelledError(_in_field_order(completed)) from exc
    except BaseException:
        executor.shutdown(wait=True, cancel_futures=True)
        raise
    executor.shutdown(wait=True)

    if len(completed) < len(isolated_fields):
        raise RunCancelledError(_in_field_order(completed))
    return _in_field_order(completed)


def _in_field_order(completed: Mapping[int, TimingResult]) -> tuple[TimingResult, ...]:
    return tuple(completed[index] for index in sorted(completed))


def _raise_if_fatal(result: TimingResult, *, is_first: bool, policy: ExecutionPolicy) -> None:
    if not policy.fail_fast:
        return
    failure = result.transport_failure
    unreachable = failure == TransportFailure.NAME_RESOLUTION or (
        is_first and failure == TransportFailure.CONNECTION
    )
    if unreachable:
        _LOGGER.error("Aborting run, endpoint unreachable: %s", result.message)
        raise FatalRunError(f"Endpoint is unreachable: {result.message}")
