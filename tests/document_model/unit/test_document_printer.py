"""Document printer tests."""

from __future__ import annotations

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
    VariableDefinition,
    render_document,
    render_selection,
)
from graphql_field_timer.query_parsing import parse_query_document


def test_renders_anonymous_query_with_operation_keyword() -> None:
    document = Document(
        operation=OperationDefinition(
            operation_type=OperationType.QUERY,
            name=None,
            variable_definitions=(),
            selection_set=(Field(name="a"),),
        )
    )

    assert render_document(document) == "query {\n  a\n}\n"


def test_renders_operation_header_fields_and_fragments() -> None:
    document = Document(
        operation=OperationDefinition(
            operation_type=OperationType.MUTATION,
            name="M",
            variable_definitions=(
                VariableDefinition(name="id", type_signature="ID!"),
                VariableDefinition(name="n", type_signature="Int", default_value="2"),
            ),
            selection_set=(
                Field(
                    name="like",
                    alias="l",
                    arguments=(Argument("id", "$id"), Argument("times", "$n")),
                    directives=(Directive("include", (Argument("if", "true"),)),),
                    selection_set=(FragmentSpread(name="Counts"),),
                ),
            ),
            directives=(Directive("trace"),),
        ),
        fragments=(
            FragmentDefinition(
                name="Counts",
                type_condition="Post",
                selection_set=(Field(name="count"),),
            ),
        ),
    )

    assert render_document(document) == (
        "mutation M($id: ID!, $n: Int = 2) @trace {\n"
        "  l: like(id: $id, times: $n) @include(if: true) {\n"
        "    ...Counts\n"
        "  }\n"
        "}\n"
        "\n"
        "fragment Counts on Post {\n"
        "  count\n"
        "}\n"
    )


def test_renders_inline_fragment_with_and_without_type_condition() -> None:
    typed = InlineFragment(type_condition="User", selection_set=(Field(name="email"),))
    untyped = InlineFragment(
        directives=(Directive("skip", (Argument("if", "$hide"),)),),
        selection_set=(Field(name="id"),),
    )

    assert render_selection(typed) == "... on User {\n  email\n}"
    assert render_selection(untyped, depth=1) == "  ... @skip(if: $hide) {\n    id\n  }"


def test_rendered_document_parses_back_to_the_same_model() -> None:
    source = """
    query Q($x: Int = 1, $tags: [String!]) @live {
      a: item(id: $x, tags: $tags) { ...Parts ... on Special @include(if: true) { extra } }
      plain
    }
    fragment Parts on Item { id nested { ...Leaf } }
    fragment Leaf on Nested { value(format: "short") }
    """
    document = parse_query_document(source)

    assert parse_query_document(render_document(document)) == document
