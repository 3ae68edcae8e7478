"""Document model entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OperationType(str, Enum):
    """Operation kinds that can be timed."""

    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class Argument:
    """Argument with its value kept as printed GraphQL text."""

    name: str
    value: str


@dataclass(frozen=True)
class Directive:
    """Directive attached to a field, spread, fragment, or operation."""

    name: str
    arguments: tuple[Argument, ...] = ()


@dataclass(frozen=True)
class VariableDefinition:
    """Variable declared by an operation."""

    name: str
    type_signature: str
    default_value: str | None = None
    directives: tuple[Directive, ...] = ()


@dataclass(frozen=True)
class Field:
    """Field selection; a nested selection set is kept as an opaque unit."""

    name: str
    alias: str | None = None
    arguments: tuple[Argument, ...] = ()
    directives: tuple[Directive, ...] = ()
    selection_set: tuple[Selection, ...] = ()

    @property
    def response_key(self) -> str:
        """Return the key this field occupies in the response payload."""
        return self.alias or self.name


@dataclass(frozen=True)
class FragmentSpread:
    """Reference to a named fragment."""

    name: str
    directives: tuple[Directive, ...] = ()


@dataclass(frozen=True)
class InlineFragment:
    """Anonymous fragment with an optional type condition."""

    type_condition: str | None = None
    directives: tuple[Directive, ...] = ()
    selection_set: tuple[Selection, ...] = ()


Selection = Field | FragmentSpread | InlineFragment


@dataclass(frozen=True)
class FragmentDefinition:
    """Named fragment definition."""

    name: str
    type_condition: str
    selection_set: tuple[Selection, ...]
    directives: tuple[Directive, ...] = ()


@dataclass(frozen=True)
class OperationDefinition:
    """Single query or mutation definition."""

    operation_type: OperationType
    name: str | None
    variable_definitions: tuple[VariableDefinition, ...]
    selection_set: tuple[Selection, ...]
    directives: tuple[Directive, ...] = ()


@dataclass(frozen=True)
class Document:
    """One operation plus the fragment definitions it can reference."""

    operation: OperationDefinition
    fragments: tuple[FragmentDefinition, ...] = ()

    @property
    def fragments_by_name(self) -> dict[str, FragmentDefinition]:
        """Return fragment definitions keyed by name."""
        return {fragment.name: fragment for fragment in self.fragments}
