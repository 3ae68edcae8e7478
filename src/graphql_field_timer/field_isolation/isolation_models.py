"""Field isolation entities."""

from __future__ import annotations

from dataclasses import dataclass

from graphql_field_timer.document_model import Document, render_document


@dataclass(frozen=True)
class FieldIdentifier:
    """Identifies one top-level field of the source operation."""

    name: str
    alias: str | None = None
    via: tuple[str, ...] = ()

    @property
    def response_key(self) -> str:
        """Return alias when present, else the field name."""
        return self.alias or self.name

    @property
    def label(self) -> str:
        """Human-readable label including the root fragments the field came from."""
        base = f"{self.alias}: {self.name}" if self.alias else self.name
        return " > ".join((*self.via, base))


@dataclass(frozen=True)
class IsolatedField:
    """Derived document that exercises exactly one top-level field."""

    position: int
    identifier: FieldIdentifier
    document: Document

    @property
    def operation_name(self) -> str | None:
        return self.document.operation.name

    @property
    def query_text(self) -> str:
        return render_document(self.document)
