"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .request_inputs import ConfigurationError, normalize_header_mapping, validate_endpoint_url
from .runtime_settings import DEFAULT_TIMEOUT_SECONDS, Configuration, ExecutionPolicy


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate a YAML or JSON run configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    endpoint = _optional_mapping(parsed.get("endpoint"), "endpoint")
    url = endpoint.get("url")
    if url is not None:
        url = validate_endpoint_url(_require_non_empty_string(url, "endpoint.url"))

    return Configuration(
        path=path,
        url=url,
        headers=normalize_header_mapping(endpoint.get("headers"), "endpoint.headers"),
        timeout_seconds=_require_positive_number(
            endpoint.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS), "endpoint.timeout_seconds"
        ),
        verify_ssl=_require_bool(endpoint.get("verify_ssl", True), "endpoint.verify_ssl"),
        execution=_parse_execution_section(parsed.get("execution")),
        variables=dict(_optional_mapping(parsed.get("variables"), "variables")),
    )


def _parse_execution_section(value: Any) -> ExecutionPolicy:
    section = _optional_mapping(value, "execution")
    return ExecutionPolicy(
        max_concurrency=_require_positive_int(
            section.get("max_concurrency", 1), "execution.max_concurrency"
        ),
        fail_fast=_require_bool(section.get("fail_fast", True), "execution.fail_fast"),
    )


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _require_positive_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigurationError(f"{field_name} must be a number.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return float(value)
