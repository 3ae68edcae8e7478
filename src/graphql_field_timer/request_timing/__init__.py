"""Request timing exports."""

from .timing_client import (
    WARM_UP_QUERY,
    GraphQLTimingClient,
    HttpResponse,
    HttpSession,
    build_request_payload,
)
from .timing_outcomes import TimingOutcome, TimingResult, TransportFailure

__all__ = [
    "GraphQLTimingClient",
    "HttpResponse",
    "HttpSession",
    "TimingOutcome",
    "TimingResult",
    "TransportFailure",
    "WARM_UP_QUERY",
    "build_request_payload",
]
