"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys

import click

from graphql_field_timer.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from graphql_field_timer.document_model import render_document
from graphql_field_timer.field_isolation import iter_isolated_documents
from graphql_field_timer.query_parsing import ParseError, parse_query_document
from graphql_field_timer.results_reporting import (
    build_json_report,
    format_ranked_table,
    format_summary,
    rank_results,
    write_results_workbook,
)
from graphql_field_timer.run_execution import (
    RunCancelledError,
    RunExecutionError,
    RunOutcome,
    RunRequest,
    load_run_artifacts,
    run_field_timings,
)

_PACKAGE_LOGGER = logging.getLogger("graphql_field_timer")
_PACKAGE_LOGGER.addHandler(logging.NullHandler())

INTERRUPTED_EXIT_CODE = 130


class CliError(Exception):
    """Custom CLI error."""


class RunInterrupted(CliError):
    """Raised when the user interrupts a run."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="graphql-field-timer")
def cli() -> None:
    """Time each top-level field of a GraphQL query in isolation."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML run configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML run configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="split")
@click.option(
    "-f",
    "--file",
    "query_file",
    type=click.File("r", encoding="utf-8"),
    default="-",
    help="GraphQL query file (reads stdin when omitted)",
)
@click.option("--operation-name", help="Operation to use when the file defines several")
def split(query_file, operation_name: str | None) -> None:
    """Print the isolated per-field queries without sending them."""
    try:
        document = parse_query_document(query_file.read(), operation_name)
    except ParseError as exc:
        raise CliError(f"Query could not be parsed: {exc}") from exc
    for isolated in iter_isolated_documents(document):
        click.echo(f"# {isolated.position + 1}. {isolated.identifier.label}")
        click.echo(render_document(isolated.document))


@cli.command(name="run")
@click.option("-u", "--url", help="GraphQL endpoint URL")
@click.option(
    "-f",
    "--file",
    "query_file",
    type=click.File("r", encoding="utf-8"),
    default="-",
    help="GraphQL query file (reads stdin when omitted)",
)
@click.option(
    "--header",
    "headers",
    multiple=True,
    help="Request header as 'Name: value'; may be repeated",
)
@click.option("-v", "--variables", "variables_text", help="Variables as a JSON object")
@click.option(
    "--variables-file",
    type=click.Path(path_type=str),
    help="Path to a JSON file holding the variables object",
)
@click.option("--operation-name", help="Operation to time when the file defines several")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=str),
    help="Path to YAML/JSON run configuration file",
)
@click.option("--timeout", type=float, help="Per-request timeout in seconds")
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    help="Requests in flight at once; values above 1 skew timings in exchange for speed",
)
@click.option("--insecure", is_flag=True, default=False, help="Skip TLS certificate checks")
@click.option(
    "--no-fail-fast",
    is_flag=True,
    default=False,
    help="Keep going when the endpoint looks unreachable",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=str),
    help="Optional path of an .xlsx workbook to write the ranked results to",
)
@click.option("--verbose", count=True, help="Log progress to stderr; repeat for debug output")
def run_timings(  # pylint: disable=too-many-arguments,too-many-locals
    url: str | None,
    query_file,
    headers: tuple[str, ...],
    variables_text: str | None,
    variables_file: str | None,
    operation_name: str | None,
    config_path: str | None,
    timeout: float | None,
    concurrency: int | None,
    insecure: bool,
    no_fail_fast: bool,
    output_format: str,
    output_path: str | None,
    verbose: int,
) -> None:
    """Send one request per top-level field and rank fields by response time."""
    _configure_logging(verbose)
    request = RunRequest(
        query_text=query_file.read(),
        url=url,
        header_lines=headers,
        variables_text=variables_text,
        variables_path=variables_file,
        operation_name=operation_name,
        config_path=config_path,
        timeout_seconds=timeout,
        max_concurrency=concurrency,
        verify_ssl=False if insecure else None,
        fail_fast=False if no_fail_fast else None,
    )
    try:
        artifacts = load_run_artifacts(request)
        if output_format == "table":
            with click.progressbar(
                length=len(artifacts.isolated_fields),
                label="Timing fields",
                file=sys.stderr,
            ) as progress:
                outcome = run_field_timings(artifacts, on_result=lambda _: progress.update(1))
        else:
            outcome = run_field_timings(artifacts)
    except RunCancelledError as exc:
        partial = rank_results(exc.results)
        for line in format_ranked_table(partial):
            click.echo(line)
        raise RunInterrupted(str(exc)) from exc
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc

    _echo_outcome(outcome, output_format)
    if output_path:
        try:
            written = write_results_workbook(output_path, outcome.ranked, outcome.metadata)
        except OSError as exc:
            raise CliError(str(exc)) from exc
        click.echo(str(written), err=True)


def _echo_outcome(outcome: RunOutcome, output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps(build_json_report(outcome.ranked, outcome.metadata), indent=2))
        return
    for line in format_ranked_table(outcome.ranked):
        click.echo(line)
    click.echo(format_summary(outcome.ranked), err=True)


def _configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    _PACKAGE_LOGGER.addHandler(handler)
    _PACKAGE_LOGGER.setLevel(logging.DEBUG if verbosity > 1 else logging.INFO)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except RunInterrupted as exc:
        click.echo(str(exc), err=True)
        return INTERRUPTED_EXIT_CODE
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return INTERRUPTED_EXIT_CODE
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
