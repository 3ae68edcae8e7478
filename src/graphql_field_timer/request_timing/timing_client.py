"""GraphQL request timing service."""

from __future__ import annotations

import json
import logging
import socket
import threading
import time
from collections.abc import Callable, Mapping
from typing import Any, Protocol

import requests
from urllib3.exceptions import NameResolutionError

from graphql_field_timer.configuration.runtime_settings import EndpointSettings
from graphql_field_timer.field_isolation import IsolatedField

from .timing_outcomes import TimingResult, TransportFailure

_LOGGER = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "Content-Type": "application/json; charset=utf-8",
    "Accept": "application/json",
}
_BODY_SNIPPET_LENGTH = 200
WARM_UP_QUERY = "query { __typename }"


class HttpResponse(Protocol):
    """Subset of the `requests.Response` API read by the client."""

    status_code: int
    reason: str

    @property
    def content(self) -> bytes: ...


class HttpSession(Protocol):
    """Protocol implemented by `requests.Session` and test fakes."""

    def post(self, url: str, **kwargs: Any) -> HttpResponse: ...

    def close(self) -> None: ...


class GraphQLTimingClient:
    """Sends isolated documents to the endpoint and times each round trip."""

    def __init__(
        self,
        endpoint: EndpointSettings,
        *,
        session: HttpSession | None = None,
        clock: Callable[[], float] = time.perf_counter,
        warm_up: bool = True,
    ) -> None:
        self._endpoint = endpoint
        self._session = session or requests.Session()
        self._clock = clock
        self._headers = _merge_headers(endpoint.headers)
        self._needs_warm_up = warm_up
        self._warm_up_lock = threading.Lock()

    def __enter__(self) -> GraphQLTimingClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def time_field(
        self, isolated: IsolatedField, variables: Mapping[str, Any] | None = None
    ) -> TimingResult:
        """Send one isolated document and classify the response.

        Elapsed time covers transmission through reading the complete body.
        Field-level failures are returned as results, never raised.
        """
        self._ensure_connection()
        body = json.dumps(build_request_payload(isolated, variables)).encode("utf-8")
        _LOGGER.debug("Sending field '%s' to %s", isolated.identifier.label, self._endpoint.url)
        start = self._clock()
        try:
            response = self._post(body)
            content = response.content
        except requests.exceptions.Timeout as exc:
            return self._transport_failure(
                isolated, TransportFailure.TIMEOUT, f"Request timed out: {exc}", start
            )
        except requests.exceptions.ConnectionError as exc:
            failure = (
                TransportFailure.NAME_RESOLUTION
                if _is_name_resolution_failure(exc)
                else TransportFailure.CONNECTION
            )
            return self._transport_failure(isolated, failure, f"Connection failed: {exc}", start)
        except requests.exceptions.RequestException as exc:
            return self._transport_failure(
                isolated, TransportFailure.REQUEST_FAILED, f"Request failed: {exc}", start
            )
        except ValueError as exc:
            return self._transport_failure(
                isolated,
                TransportFailure.REQUEST_FAILED,
                f"Request could not be sent: {exc}",
                start,
            )
        elapsed = self._clock() - start
        return _classify_response(isolated, response, content, elapsed)

    def _ensure_connection(self) -> None:
        """Open the pooled connection with one untimed request.

        The first timed field would otherwise also pay for name resolution,
        the TCP connect and the TLS handshake that later fields reuse.
        """
        with self._warm_up_lock:
            if not self._needs_warm_up:
                return
            self._needs_warm_up = False
            body = json.dumps({"query": WARM_UP_QUERY, "variables": {}}).encode("utf-8")
            try:
                _ = self._post(body).content
            except (requests.exceptions.RequestException, ValueError) as exc:
                _LOGGER.debug("Connection warm-up to %s failed: %s", self._endpoint.url, exc)

    def _post(self, body: bytes) -> HttpResponse:
        return self._session.post(
            self._endpoint.url,
            data=body,
            headers=self._headers,
            timeout=self._endpoint.timeout_seconds,
            verify=self._endpoint.verify_ssl,
        )

    def _transport_failure(
        self,
        isolated: IsolatedField,
        failure: TransportFailure,
        message: str,
        start: float,
    ) -> TimingResult:
        elapsed = self._clock() - start
        _LOGGER.warning(
            "Field '%s' failed (%s): %s", isolated.identifier.label, failure.value, message
        )
        return TimingResult.transport_error(isolated, failure, message, duration_seconds=elapsed)


def build_request_payload(
    isolated: IsolatedField, variables: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Build the JSON request body for one isolated document."""
    payload: dict[str, Any] = {
        "query": isolated.query_text,
        "variables": dict(variables or {}),
    }
    if isolated.operation_name:
        payload["operationName"] = isolated.operation_name
    return payload


def _classify_response(
    isolated: IsolatedField, response: HttpResponse, content: bytes, elapsed: float
) -> TimingResult:
    status_code = response.status_code
    if not 200 <= status_code < 300:
        message = f"HTTP {status_code} {response.reason or ''}".rstrip()
        snippet = _body_snippet(content)
        if snippet:
            message = f"{message}: {snippet}"
        _LOGGER.warning("Field '%s' failed: %s", isolated.identifier.label, message)
        return TimingResult.transport_error(
            isolated,
            TransportFailure.HTTP_STATUS,
            message,
            duration_seconds=elapsed,
            status_code=status_code,
        )

    try:
        payload = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        return TimingResult.transport_error(
            isolated,
            TransportFailure.INVALID_RESPONSE,
            f"Response body is not valid JSON: {exc}",
            duration_seconds=elapsed,
            status_code=status_code,
        )
    if not isinstance(payload, Mapping):
        return TimingResult.transport_error(
            isolated,
            TransportFailure.INVALID_RESPONSE,
            "Response body must be a JSON object.",
            duration_seconds=elapsed,
            status_code=status_code,
        )

    errors = payload.get("errors")
    if errors:
        return TimingResult.graphql_error(
            isolated, elapsed, _summarize_graphql_errors(errors), status_code
        )
    if "data" not in payload:
        return TimingResult.transport_error(
            isolated,
            TransportFailure.INVALID_RESPONSE,
            "Response contains neither data nor errors.",
            duration_seconds=elapsed,
            status_code=status_code,
        )
    return TimingResult.success(isolated, elapsed, status_code)


def _summarize_graphql_errors(errors: Any) -> str:
    if not isinstance(errors, list):
        return json.dumps(errors, ensure_ascii=False)
    messages = []
    for error in errors:
        if isinstance(error, Mapping) and isinstance(error.get("message"), str):
            messages.append(error["message"])
        else:
            messages.append(json.dumps(error, ensure_ascii=False))
    return "; ".join(messages)


def _body_snippet(content: bytes) -> str:
    text = content.decode("utf-8", errors="replace").strip()
    if len(text) > _BODY_SNIPPET_LENGTH:
        return text[:_BODY_SNIPPET_LENGTH] + "..."
    return text


def _merge_headers(headers: tuple[tuple[str, str], ...]) -> dict[str, str]:
    merged = dict(_DEFAULT_HEADERS)
    for name, value in headers:
        for existing in [key for key in merged if key.lower() == name.lower()]:
            del merged[existing]
        merged[name] = value
    return merged


def _is_name_resolution_failure(exc: BaseException) -> bool:
    pending: list[BaseException] = [exc]
    seen: set[int] = set()
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, (socket.gaierror, NameResolutionError)):
            return True
        linked = (current.__cause__, current.__context__, getattr(current, "reason", None))
        pending.extend(item for item in (*linked, *current.args) if isinstance(item, BaseException))
    return False
