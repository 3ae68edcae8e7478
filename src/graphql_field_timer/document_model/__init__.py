"""Document model exports."""

from .document_nodes import (
    Argument,
    Directive,
    Document,
    Field,
    FragmentDefinition,
    FragmentSpread,
    InlineFragment,
    OperationDefinition,
    OperationType,
    Selection,
    VariableDefinition,
)
from .document_printer import render_document, render_selection

__all__ = [
    "Argument",
    "Directive",
    "Document",
    "Field",
    "FragmentDefinition",
    "FragmentSpread",
    "InlineFragment",
    "OperationDefinition",
    "OperationType",
    "Selection",
    "VariableDefinition",
    "render_document",
    "render_selection",
]
