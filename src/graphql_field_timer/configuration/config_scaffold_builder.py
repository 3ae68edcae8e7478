"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "field-timer.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Run configuration template for graphql-field-timer.
# Replace the <REQUIRED> placeholder unless you pass --url on the command line.
# Remove or fill <OPTIONAL> entries; command line options override this file.

endpoint:
  url: "<REQUIRED>"
  # Seconds before one field request is recorded as a transport error.
  timeout_seconds: 30
  verify_ssl: true
  headers:
    # Authorization: "<OPTIONAL>"

execution:
  # 1 sends one request at a time. Higher values finish sooner but the
  # requests compete for the same server, which skews the measured timings.
  max_concurrency: 1
  # Abort the run when the endpoint cannot be reached at all.
  fail_fast: true

# Variables sent with every isolated field request.
variables: {}
"""


def build_placeholder_configuration() -> str:
    """Build a YAML run configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder run configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
