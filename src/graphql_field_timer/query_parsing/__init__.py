"""Query parsing exports."""

from .operation_parser import ParseError, parse_query_document

__all__ = [
    "ParseError",
    "parse_query_document",
]
