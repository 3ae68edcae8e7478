"""Field isolation exports."""

from .field_isolator import (
    fragment_closure,
    isolate,
    iter_isolated_documents,
    list_top_level_fields,
)
from .isolation_models import FieldIdentifier, IsolatedField

__all__ = [
    "FieldIdentifier",
    "IsolatedField",
    "fragment_closure",
    "isolate",
    "iter_isolated_documents",
    "list_top_level_fields",
]
