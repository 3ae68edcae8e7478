"""Scenario-style integration tests against a local GraphQL-shaped HTTP server."""

from __future__ import annotations

import json
import socket
import threading
import time
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
from graphql_field_timer.request_timing import WARM_UP_QUERY, TimingOutcome, TransportFailure
from graphql_field_timer.run_execution import (
    FatalRunError,
    RunRequest,
    execute_field_timing_run,
)


class _GraphQLHandler(BaseHTTPRequestHandler):
    """Answers by the single root field the request selects."""

    delays = {"slow": 0.2}
    received: list[dict] = []

    def do_POST(self) -> None:
        length = int(self.headers.get("Content-Length", "0"))
        body = json.loads(self.rfile.read(length))
        query = body["query"]
        if query == WARM_UP_QUERY:
            self._reply(200, json.dumps({"data": {"__typename": "Query"}}).encode())
            return
        self.received.append(body)
        if "broken" in query:
            self._reply(500, b"server exploded")
            return
        if "denied" in query:
            self._reply(200, json.dumps({"errors": [{"message": "not allowed"}]}).encode())
            return
        for key, delay in self.delays.items():
            if key in query:
                time.sleep(delay)
        self._reply(200, json.dumps({"data": {"ok": True}}).encode())

    def _reply(self, status: int, payload: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format: str, *args) -> None:  # pylint: disable=redefined-builtin
        pass


@pytest.fixture(autouse=True)
def _no_proxy(monkeypatch) -> None:
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY"):
        monkeypatch.delenv(name.lower(), raising=False)
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")


@pytest.fixture
def endpoint_url() -> Iterator[str]:
    _GraphQLHandler.received = []
    server = ThreadingHTTPServer(("127.0.0.1", 0), _GraphQLHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"http://{host}:{port}/graphql"
    finally:
        server.shutdown()
        server.server_close()


def _closed_port_url() -> str:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as placeholder:
        placeholder.bind(("127.0.0.1", 0))
        port = placeholder.getsockname()[1]
    return f"http://127.0.0.1:{port}/graphql"


def test_each_field_is_sent_alone_and_ranked_slowest_first(endpoint_url: str) -> None:
    outcome = execute_field_timing_run(
        RunRequest(query_text="query Q { fast slow other }", url=endpoint_url)
    )

    assert len(_GraphQLHandler.received) == 3
    assert [body["operationName"] for body in _GraphQLHandler.received] == [
        "Q__fast",
        "Q__slow",
        "Q__other",
    ]
    assert all(result.succeeded for result in outcome.results)
    assert outcome.ranked[0].identifier.name == "slow"
    assert outcome.ranked[0].duration_seconds >= 0.2


def test_failing_fields_do_not_affect_their_neighbours(endpoint_url: str) -> None:
    outcome = execute_field_timing_run(
        RunRequest(query_text="{ a broken denied b }", url=endpoint_url)
    )

    by_name = {result.identifier.name: result for result in outcome.results}
    assert by_name["a"].outcome == TimingOutcome.SUCCESS
    assert by_name["b"].outcome == TimingOutcome.SUCCESS
    assert by_name["broken"].transport_failure == TransportFailure.HTTP_STATUS
    assert by_name["broken"].status_code == 500
    assert by_name["denied"].outcome == TimingOutcome.GRAPHQL_ERROR
    assert by_name["denied"].message == "not allowed"
    assert outcome.failed_count == 2


def test_fragments_and_variables_reach_the_server(endpoint_url: str) -> None:
    execute_field_timing_run(
        RunRequest(
            query_text=(
                "query Q($x: Int) { a(arg: $x) { nested } ...Frag } fragment Frag on T { d }"
            ),
            url=endpoint_url,
            variables_text='{"x": 5}',
        )
    )

    first, second = _GraphQLHandler.received
    assert first["variables"] == {"x": 5}
    assert "fragment Frag" not in first["query"]
    assert "fragment Frag on T {\n  d\n}" in second["query"]
    assert "...Frag" in second["query"]


def test_concurrent_run_returns_every_field(endpoint_url: str) -> None:
    outcome = execute_field_timing_run(
        RunRequest(query_text="{ a b c d e }", url=endpoint_url, max_concurrency=3)
    )

    assert [result.identifier.name for result in outcome.results] == ["a", "b", "c", "d", "e"]
    assert len(_GraphQLHandler.received) == 5


def test_refused_connection_on_first_call_aborts_the_run() -> None:
    with pytest.raises(FatalRunError, match="unreachable"):
        execute_field_timing_run(
            RunRequest(query_text="{ a b c }", url=_closed_port_url(), timeout_seconds=2.0)
        )


def test_refused_connection_is_recorded_when_fail_fast_is_disabled() -> None:
    outcome = execute_field_timing_run(
        RunRequest(
            query_text="{ a b }",
            url=_closed_port_url(),
            timeout_seconds=2.0,
            fail_fast=False,
        )
    )

    assert [result.transport_failure for result in outcome.results] == [
        TransportFailure.CONNECTION,
        TransportFailure.CONNECTION,
    ]
