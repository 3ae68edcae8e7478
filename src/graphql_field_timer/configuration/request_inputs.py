"""Parsing helpers for raw request inputs (headers, variables, endpoint URL)."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit


class ConfigurationError(Exception):
    """Raised when the configuration file or a request input is invalid."""


def parse_header(raw_header: str) -> tuple[str, str]:
    """Split a `Name: value` header string into a trimmed pair."""
    name, separator, value = raw_header.partition(":")
    if not separator:
        raise ConfigurationError(f"Header '{raw_header}' must have the form 'Name: value'.")
    name = name.strip()
    if not name:
        raise ConfigurationError(f"Header '{raw_header}' has an empty name.")
    return name, _require_header_text(value.strip(), name)


def parse_headers(raw_headers: Iterable[str]) -> tuple[tuple[str, str], ...]:
    return tuple(parse_header(raw_header) for raw_header in raw_headers)


def normalize_header_mapping(value: Any, field_name: str) -> tuple[tuple[str, str], ...]:
    """Normalize a configured header mapping into ordered name/value pairs."""
    if value is None:
        return ()
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{field_name} must be a mapping of header names to values.")
    headers: list[tuple[str, str]] = []
    for name, header_value in value.items():
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"{field_name} keys must be non-empty strings.")
        if isinstance(header_value, bool) or not isinstance(header_value, str | int | float):
            raise ConfigurationError(f"{field_name}.{name} must be a string.")
        text = _require_header_text(str(header_value).strip(), f"{field_name}.{name}")
        headers.append((name.strip(), text))
    return tuple(headers)


def _require_header_text(value: str, label: str) -> str:
    # http.client sends header values as latin-1
    try:
        value.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ConfigurationError(
            f"Header {label} contains characters that cannot be sent in an HTTP header."
        ) from exc
    return value


def parse_variables(raw_variables: str | None) -> dict[str, Any]:
    """Decode a JSON variables blob; an empty or missing blob yields `{}`."""
    if raw_variables is None or not raw_variables.strip():
        return {}
    try:
        decoded = json.loads(raw_variables)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Variables are not valid JSON: {exc}") from exc
    if not isinstance(decoded, Mapping):
        raise ConfigurationError("Variables JSON root must be an object.")
    return dict(decoded)


def load_variables_file(path: Path | str) -> dict[str, Any]:
    variables_path = Path(path)
    if not variables_path.exists():
        raise ConfigurationError(f"Variables file not found: {variables_path}")
    return parse_variables(variables_path.read_text(encoding="utf-8"))


def validate_endpoint_url(url: str) -> str:
    """Return the trimmed URL when it is an absolute http(s) URL."""
    candidate = url.strip()
    parts = urlsplit(candidate)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"Endpoint URL must be an absolute http(s) URL: '{url}'")
    return candidate
