"""Request input parsing tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from graphql_field_timer.configuration import (
    ConfigurationError,
    load_variables_file,
    parse_header,
    parse_headers,
    parse_variables,
    validate_endpoint_url,
)


def test_parse_header_trims_name_and_value() -> None:
    assert parse_header("  Authorization :  Bearer a:b ") == ("Authorization", "Bearer a:b")


def test_parse_header_allows_empty_value() -> None:
    assert parse_header("X-Empty:") == ("X-Empty", "")


@pytest.mark.parametrize(
    ("raw", "message"), [("NoColon", "must have the form"), (": value", "empty name")]
)
def test_parse_header_rejects_malformed_input(raw: str, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        parse_header(raw)


def test_parse_header_keeps_latin_1_values() -> None:
    assert parse_header("X-City: Z\u00fcrich") == ("X-City", "Z\u00fcrich")


def test_parse_header_rejects_values_http_cannot_encode() -> None:
    with pytest.raises(ConfigurationError, match="cannot be sent in an HTTP header"):
        parse_header("X-Weather: snow \u2603")


def test_parse_headers_keeps_order() -> None:
    assert parse_headers(["A: 1", "B: 2"]) == (("A", "1"), ("B", "2"))


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_parse_variables_treats_missing_input_as_empty(raw: str | None) -> None:
    assert parse_variables(raw) == {}


def test_parse_variables_decodes_object() -> None:
    assert parse_variables('{"id": "42", "ids": [1, 2]}') == {"id": "42", "ids": [1, 2]}


@pytest.mark.parametrize(
    ("raw", "message"), [("{bad", "not valid JSON"), ('"text"', "root must be an object")]
)
def test_parse_variables_rejects_invalid_json(raw: str, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        parse_variables(raw)


def test_load_variables_file(tmp_path: Path) -> None:
    path = tmp_path / "variables.json"
    path.write_text('{"first": 5}', encoding="utf-8")

    assert load_variables_file(path) == {"first": 5}
    with pytest.raises(ConfigurationError, match="Variables file not found"):
        load_variables_file(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "url", ["https://api.example.com/graphql", "http://localhost:4000/graphql"]
)
def test_validate_endpoint_url_accepts_http_urls(url: str) -> None:
    assert validate_endpoint_url(f" {url} ") == url


@pytest.mark.parametrize("url", ["api.example.com/graphql", "ftp://host/graphql", "https://"])
def test_validate_endpoint_url_rejects_other_values(url: str) -> None:
    with pytest.raises(ConfigurationError, match="absolute http"):
        validate_endpoint_url(url)
