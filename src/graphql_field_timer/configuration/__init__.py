"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import load_configuration
from .request_inputs import (
    ConfigurationError,
    load_variables_file,
    parse_header,
    parse_headers,
    parse_variables,
    validate_endpoint_url,
)
from .runtime_settings import (
    DEFAULT_TIMEOUT_SECONDS,
    Configuration,
    EndpointSettings,
    ExecutionPolicy,
)

__all__ = [
    "Configuration",
    "EndpointSettings",
    "ExecutionPolicy",
    "DEFAULT_TIMEOUT_SECONDS",
    "ConfigurationError",
    "load_configuration",
    "load_variables_file",
    "parse_header",
    "parse_headers",
    "parse_variables",
    "validate_endpoint_url",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
