"""Request timing domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from graphql_field_timer.field_isolation import FieldIdentifier, IsolatedField


class TimingOutcome(str, Enum):
    """Classification of one timed request."""

    SUCCESS = "success"
    TRANSPORT_ERROR = "transport_error"
    GRAPHQL_ERROR = "graphql_error"


class TransportFailure(str, Enum):
    """Reason a request did not produce a usable GraphQL response."""

    CONNECTION = "connection"
    NAME_RESOLUTION = "name_resolution"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    INVALID_RESPONSE = "invalid_response"
    REQUEST_FAILED = "request_failed"


@dataclass(frozen=True)
class TimingResult:  # pylint: disable=too-many-instance-attributes
    """Outcome of sending one isolated field document."""

    identifier: FieldIdentifier
    position: int
    outcome: TimingOutcome
    duration_seconds: float | None
    message: str | None = None
    status_code: int | None = None
    transport_failure: TransportFailure | None = None
    query: str = ""

    @property
    def succeeded(self) -> bool:
        return self.outcome == TimingOutcome.SUCCESS

    @staticmethod
    def success(
        isolated: IsolatedField, duration_seconds: float, status_code: int | None
    ) -> TimingResult:
        return TimingResult(
            identifier=isolated.identifier,
            position=isolated.position,
            outcome=TimingOutcome.SUCCESS,
            duration_seconds=duration_seconds,
            status_code=status_code,
            query=isolated.query_text,
        )

    @staticmethod
    def graphql_error(
        isolated: IsolatedField,
        duration_seconds: float,
        message: str,
        status_code: int | None,
    ) -> TimingResult:
        return TimingResult(
            identifier=isolated.identifier,
            position=isolated.position,
            outcome=TimingOutcome.GRAPHQL_ERROR,
            duration_seconds=duration_seconds,
            message=message,
            status_code=status_code,
            query=isolated.query_text,
        )

    @staticmethod
    def transport_error(
        isolated: IsolatedField,
        failure: TransportFailure,
        message: str,
        *,
        duration_seconds: float | None = None,
        status_code: int | None = None,
    ) -> TimingResult:
        return TimingResult(
            identifier=isolated.identifier,
            position=isolated.position,
            outcome=TimingOutcome.TRANSPORT_ERROR,
            duration_seconds=duration_seconds,
            message=message,
            status_code=status_code,
            transport_failure=failure,
            query=isolated.query_text,
        )
