"""Render document model entities back to GraphQL source text."""

from __future__ import annotations

from collections.abc import Sequence

from .document_nodes import (
    Argument,
    Directive,
    Document,
    Field,
    FragmentDefinition,
    FragmentSpread,
    InlineFragment,
    OperationDefinition,
    Selection,
    VariableDefinition,
)

_INDENT = "  "


def render_document(document: Document) -> str:
    """Render a document as GraphQL text, operation first, then fragments."""
    blocks = [_render_operation(document.operation)]
    blocks.extend(_render_fragment(fragment) for fragment in document.fragments)
    return "\n\n".join(blocks) + "\n"


def render_selection(selection: Selection, depth: int = 0) -> str:
    """Render one selection, including its nested selection set."""
    indent = _INDENT * depth
    if isinstance(selection, Field):
        head = f"{selection.alias}: {selection.name}" if selection.alias else selection.name
        head += _render_arguments(selection.arguments) + _render_directives(selection.directives)
        if not selection.selection_set:
            return indent + head
        return indent + head + " " + _render_selection_set(selection.selection_set, depth)
    if isinstance(selection, FragmentSpread):
        return f"{indent}...{selection.name}{_render_directives(selection.directives)}"
    if isinstance(selection, InlineFragment):
        head = "..."
        if selection.type_condition:
            head += f" on {selection.type_condition}"
        head += _render_directives(selection.directives)
        return indent + head + " " + _render_selection_set(selection.selection_set, depth)
    raise TypeError(f"Unsupported selection type: {type(selection).__name__}")


def _render_operation(operation: OperationDefinition) -> str:
    head = operation.operation_type.value
    if operation.name:
        head += f" {operation.name}"
    if operation.variable_definitions:
        head += "(" + ", ".join(_render_variable(v) for v in operation.variable_definitions) + ")"
    head += _render_directives(operation.directives)
    return head + " " + _render_selection_set(operation.selection_set, 0)


def _render_fragment(fragment: FragmentDefinition) -> str:
    head = f"fragment {fragment.name} on {fragment.type_condition}"
    head += _render_directives(fragment.directives)
    return head + " " + _render_selection_set(fragment.selection_set, 0)


def _render_selection_set(selections: Sequence[Selection], depth: int) -> str:
    lines = [render_selection(selection, depth + 1) for selection in selections]
    closing = _INDENT * depth + "}"
    return "{\n" + "\n".join(lines) + "\n" + closing


def _render_variable(variable: VariableDefinition) -> str:
    text = f"${variable.name}: {variable.type_signature}"
    if variable.default_value is not None:
        text += f" = {variable.default_value}"
    return text + _render_directives(variable.directives)


def _render_arguments(arguments: Sequence[Argument]) -> str:
    if not arguments:
        return ""
    return "(" + ", ".join(f"{argument.name}: {argument.value}" for argument in arguments) + ")"


def _render_directives(directives: Sequence[Directive]) -> str:
    return "".join(
        f" @{directive.name}{_render_arguments(directive.arguments)}" for directive in directives
    )
