"""GraphQL operation document parser service."""

from __future__ import annotations

from collections.abc import Iterable

from graphql import GraphQLSyntaxError, parse, print_ast
from graphql.language import (
    ArgumentNode,
    DirectiveNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionNode,
    SelectionSetNode,
    VariableDefinitionNode,
)
from graphql.language import OperationType as AstOperationType

from graphql_field_timer.document_model import (
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

_TIMEABLE_OPERATIONS = {
    AstOperationType.QUERY: OperationType.QUERY,
    AstOperationType.MUTATION: OperationType.MUTATION,
}


class ParseError(Exception):
    """Raised when query text cannot be turned into a timeable document."""

    def __init__(
        self, reason: str, *, line: int | None = None, column: int | None = None
    ) -> None:
        self.reason = reason
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{reason}{location}")


def parse_query_document(source: str, operation_name: str | None = None) -> Document:
    """Parse GraphQL text into a document holding one query or mutation.

    Args:
      source: Raw GraphQL document text.
      operation_name: Operation to select when the text defines several.

    Returns:
      The parsed document with every fragment definition found in the text.

    Raises:
      ParseError: On malformed syntax, subscriptions, missing or ambiguous
        operations, type-system definitions, or duplicate fragment names.
    """
    if not source.strip():
        raise ParseError("Query text is empty.")
    try:
        ast = parse(source)
    except GraphQLSyntaxError as exc:
        line, column = _first_location(exc)
        raise ParseError(exc.message, line=line, column=column) from exc

    operations: list[OperationDefinitionNode] = []
    fragments: list[FragmentDefinition] = []
    seen_fragment_names: set[str] = set()
    for definition in ast.definitions:
        if isinstance(definition, OperationDefinitionNode):
            operations.append(definition)
        elif isinstance(definition, FragmentDefinitionNode):
            fragment = _convert_fragment(definition)
            if fragment.name in seen_fragment_names:
                raise ParseError(
                    f"Fragment '{fragment.name}' is defined more than once.",
                    **_node_location(definition),
                )
            seen_fragment_names.add(fragment.name)
            fragments.append(fragment)
        else:
            raise ParseError(
                f"Unsupported definition '{definition.kind}'; only operations and "
                "fragments can be timed.",
                **_node_location(definition),
            )

    operation_node = _select_operation(operations, operation_name)
    return Document(operation=_convert_operation(operation_node), fragments=tuple(fragments))


def _select_operation(
    operations: list[OperationDefinitionNode], operation_name: str | None
) -> OperationDefinitionNode:
    if not operations:
        raise ParseError("Document does not contain an operation definition.")
    if operation_name is not None:
        matches = [
            node
            for node in operations
            if node.name is not None and node.name.value == operation_name
        ]
        if not matches:
            raise ParseError(f"Operation '{operation_name}' is not defined in the document.")
        if len(matches) > 1:
            raise ParseError(f"Operation '{operation_name}' is defined more than once.")
        return matches[0]
    if len(operations) > 1:
        raise ParseError("Document defines several operations; select one by operation name.")
    return operations[0]


def _convert_operation(node: OperationDefinitionNode) -> OperationDefinition:
    operation_type = _TIMEABLE_OPERATIONS.get(node.operation)
    if operation_type is None:
        raise ParseError(
            f"Operation type '{node.operation.value}' cannot be timed; use a query or mutation.",
            **_node_location(node),
        )
    return OperationDefinition(
        operation_type=operation_type,
        name=node.name.value if node.name else None,
        variable_definitions=tuple(
            _convert_variable(variable) for variable in node.variable_definitions or ()
        ),
        selection_set=_convert_selection_set(node.selection_set),
        directives=_convert_directives(node.directives),
    )


def _convert_fragment(node: FragmentDefinitionNode) -> FragmentDefinition:
    return FragmentDefinition(
        name=node.name.value,
        type_condition=node.type_condition.name.value,
        selection_set=_convert_selection_set(node.selection_set),
        directives=_convert_directives(node.directives),
    )


def _convert_variable(node: VariableDefinitionNode) -> VariableDefinition:
    return VariableDefinition(
        name=node.variable.name.value,
        type_signature=print_ast(node.type),
        default_value=print_ast(node.default_value) if node.default_value else None,
        directives=_convert_directives(node.directives),
    )


def _convert_selection_set(node: SelectionSetNode | None) -> tuple[Selection, ...]:
    if node is None:
        return ()
    return tuple(_convert_selection(selection) for selection in node.selections)


def _convert_selection(node: SelectionNode) -> Selection:
    if isinstance(node, FieldNode):
        return Field(
            name=node.name.value,
            alias=node.alias.value if node.alias else None,
            arguments=_convert_arguments(node.arguments),
            directives=_convert_directives(node.directives),
            selection_set=_convert_selection_set(node.selection_set),
        )
    if isinstance(node, FragmentSpreadNode):
        return FragmentSpread(name=node.name.value, directives=_convert_directives(node.directives))
    if isinstance(node, InlineFragmentNode):
        return InlineFragment(
            type_condition=node.type_condition.name.value if node.type_condition else None,
            directives=_convert_directives(node.directives),
            selection_set=_convert_selection_set(node.selection_set),
        )
    raise ParseError(f"Unsupported selection '{node.kind}'.", **_node_location(node))


def _convert_arguments(nodes: Iterable[ArgumentNode] | None) -> tuple[Argument, ...]:
    return tuple(
        Argument(name=node.name.value, value=print_ast(node.value)) for node in nodes or ()
    )


def _convert_directives(nodes: Iterable[DirectiveNode] | None) -> tuple[Directive, ...]:
    return tuple(
        Directive(name=node.name.value, arguments=_convert_arguments(node.arguments))
        for node in nodes or ()
    )


def _first_location(error: GraphQLSyntaxError) -> tuple[int | None, int | None]:
    if not error.locations:
        return None, None
    location = error.locations[0]
    return location.line, location.column


def _node_location(node) -> dict[str, int | None]:
    loc = getattr(node, "loc", None)
    if loc is None:
        return {"line": None, "column": None}
    return {"line": loc.start_token.line, "column": loc.start_token.column}
