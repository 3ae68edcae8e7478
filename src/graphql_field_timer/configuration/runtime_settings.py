"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class EndpointSettings:
    """Target endpoint and request shape shared by every timed call."""

    url: str
    headers: tuple[tuple[str, str], ...] = ()
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    verify_ssl: bool = True


@dataclass(frozen=True)
class ExecutionPolicy:
    """How the run coordinator schedules calls.

    `max_concurrency` above 1 trades measurement accuracy for speed: parallel
    requests contend for the same network path and server.
    """

    max_concurrency: int = 1
    fail_fast: bool = True


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate loaded from a configuration file."""

    path: Path | None
    url: str | None
    headers: tuple[tuple[str, str], ...]
    timeout_seconds: float
    verify_ssl: bool
    execution: ExecutionPolicy
    variables: Mapping[str, Any] = field(default_factory=dict)
