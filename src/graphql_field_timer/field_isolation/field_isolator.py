"""Top-level field isolation service."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, replace

from graphql_field_timer.document_model import (
    Document,
    Field,
    FragmentDefinition,
    FragmentSpread,
    InlineFragment,
    OperationDefinition,
    Selection,
)

from .isolation_models import FieldIdentifier, IsolatedField

_LOGGER = logging.getLogger(__name__)

_OPERATION_NAME_SEPARATOR = "__"


@dataclass(frozen=True)
class _SpreadWrapper:
    """Root-level fragment spread enclosing a timeable field."""

    spread: FragmentSpread
    definition: FragmentDefinition


@dataclass(frozen=True)
class _TimeableUnit:
    """Top-level field together with the root fragments it was reached through."""

    field: Field
    wrappers: tuple[_SpreadWrapper | InlineFragment, ...]

    @property
    def identifier(self) -> FieldIdentifier:
        return FieldIdentifier(
            name=self.field.name,
            alias=self.field.alias,
            via=tuple(_describe_wrapper(wrapper) for wrapper in self.wrappers),
        )


def list_top_level_fields(document: Document) -> tuple[FieldIdentifier, ...]:
    """Return identifiers of every timeable top-level field in query order."""
    return tuple(unit.identifier for unit in _collect_units(document))


def isolate(document: Document, field_index: int) -> Document:
    """Return a standalone document that keeps only the top-level field at `field_index`.

    Raises:
      IndexError: If the document has no top-level field at that position.
    """
    units = _collect_units(document)
    if not 0 <= field_index < len(units):
        raise IndexError(f"Document has no top-level field at index {field_index}.")
    names = _derived_operation_names(document.operation.name, units)
    return _build_derived_document(document, units[field_index], names[field_index])


def iter_isolated_documents(document: Document) -> Iterator[IsolatedField]:
    """Yield one isolated document per top-level field, in query order."""
    units = _collect_units(document)
    names = _derived_operation_names(document.operation.name, units)
    for position, (unit, operation_name) in enumerate(zip(units, names, strict=True)):
        yield IsolatedField(
            position=position,
            identifier=unit.identifier,
            document=_build_derived_document(document, unit, operation_name),
        )


def fragment_closure(
    selections: Iterable[Selection], fragments_by_name: Mapping[str, FragmentDefinition]
) -> set[str]:
    """Return names of all defined fragments reachable from `selections`.

    Spreads of fragments that are not defined are skipped; they surface when
    the document is executed.
    """
    reachable: set[str] = set()
    stack: list[Selection] = list(selections)
    while stack:
        selection = stack.pop()
        if isinstance(selection, FragmentSpread):
            if selection.name in reachable:
                continue
            definition = fragments_by_name.get(selection.name)
            if definition is None:
                _LOGGER.debug("Fragment '%s' is referenced but not defined.", selection.name)
                continue
            reachable.add(selection.name)
            stack.extend(definition.selection_set)
        else:
            stack.extend(selection.selection_set)
    return reachable


def _collect_units(document: Document) -> list[_TimeableUnit]:
    units: list[_TimeableUnit] = []
    _expand_root_selections(
        document.operation.selection_set,
        wrappers=(),
        fragments_by_name=document.fragments_by_name,
        expanding=frozenset(),
        units=units,
    )
    return units


def _expand_root_selections(
    selections: Sequence[Selection],
    *,
    wrappers: tuple[_SpreadWrapper | InlineFragment, ...],
    fragments_by_name: Mapping[str, FragmentDefinition],
    expanding: frozenset[str],
    units: list[_TimeableUnit],
) -> None:
    for selection in selections:
        if isinstance(selection, Field):
            units.append(_TimeableUnit(field=selection, wrappers=wrappers))
        elif isinstance(selection, InlineFragment):
            _expand_root_selections(
                selection.selection_set,
                wrappers=(*wrappers, selection),
                fragments_by_name=fragments_by_name,
                expanding=expanding,
                units=units,
            )
        else:
            definition = fragments_by_name.get(selection.name)
            if definition is None:
                _LOGGER.warning(
                    "Skipping root spread of undefined fragment '%s'.", selection.name
                )
                continue
            if selection.name in expanding:
                _LOGGER.warning("Skipping cyclic root spread of fragment '%s'.", selection.name)
                continue
            _expand_root_selections(
                definition.selection_set,
                wrappers=(*wrappers, _SpreadWrapper(spread=selection, definition=definition)),
                fragments_by_name=fragments_by_name,
                expanding=expanding | {selection.name},
                units=units,
            )


def _build_derived_document(
    document: Document, unit: _TimeableUnit, operation_name: str | None
) -> Document:
    root_selection: Selection = unit.field
    narrowed: dict[str, FragmentDefinition] = {}
    for wrapper in reversed(unit.wrappers):
        if isinstance(wrapper, InlineFragment):
            root_selection = replace(wrapper, selection_set=(root_selection,))
        else:
            narrowed[wrapper.definition.name] = replace(
                wrapper.definition, selection_set=(root_selection,)
            )
            root_selection = wrapper.spread

    required = fragment_closure(unit.field.selection_set, document.fragments_by_name)
    fragments = tuple(
        narrowed.get(fragment.name, fragment)
        for fragment in document.fragments
        if fragment.name in required or fragment.name in narrowed
    )
    operation: OperationDefinition = replace(
        document.operation,
        name=operation_name,
        selection_set=(root_selection,),
    )
    return Document(operation=operation, fragments=fragments)


def _derived_operation_names(
    base_name: str | None, units: Sequence[_TimeableUnit]
) -> list[str | None]:
    if base_name is None:
        return [None] * len(units)
    totals = Counter(unit.field.response_key for unit in units)
    seen: Counter[str] = Counter()
    names: list[str | None] = []
    for unit in units:
        key = unit.field.response_key
        seen[key] += 1
        suffix = f"_{seen[key]}" if totals[key] > 1 and seen[key] > 1 else ""
        names.append(f"{base_name}{_OPERATION_NAME_SEPARATOR}{key}{suffix}")
    return names


def _describe_wrapper(wrapper: _SpreadWrapper | InlineFragment) -> str:
    if isinstance(wrapper, InlineFragment):
        return f"... on {wrapper.type_condition}" if wrapper.type_condition else "..."
    return f"...{wrapper.spread.name}"
