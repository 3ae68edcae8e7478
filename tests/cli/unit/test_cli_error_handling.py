"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from graphql_field_timer.cli import main


def _query_file(tmp_path: Path, text: str = "{ a b }") -> str:
    path = tmp_path / "query.graphql"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_concurrency_returns_click_usage_error(tmp_path: Path, capsys) -> None:
    exit_code = main(["run", "-f", _query_file(tmp_path), "--concurrency", "0"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "--concurrency" in captured.err


def test_missing_url_reports_error_and_exits_with_one(tmp_path: Path, capsys) -> None:
    exit_code = main(["run", "-f", _query_file(tmp_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Endpoint URL is required" in captured.err
    assert "Traceback" not in captured.err


def test_malformed_query_reports_parse_error(tmp_path: Path, capsys) -> None:
    exit_code = main(["run", "-f", _query_file(tmp_path, "{ a "), "-u", "http://x/graphql"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Query could not be parsed" in captured.err


def test_split_reports_parse_error(tmp_path: Path, capsys) -> None:
    exit_code = main(["split", "-f", _query_file(tmp_path, "subscription { s }")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "subscription" in captured.err


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "field-timer.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
