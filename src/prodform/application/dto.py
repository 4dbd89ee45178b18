"""Data Transfer Objects — plain containers that cross layer boundaries.

The view never sees the mutable RecordStore; it renders a frozen
snapshot taken after each controller action.
"""

from __future__ import annotations

from dataclasses import dataclass

from prodform.domain.model.product import FormFields, ProductRecord
from prodform.domain.model.value_objects import ViewMode


@dataclass(frozen=True)
class ViewSnapshot:
    """Read-only picture of the form for the presentation layer."""

    mode: ViewMode
    collection: tuple[ProductRecord, ...]
    active: ProductRecord | None
    fields: FormFields
    search_input: str
    validation_error: str | None
    pending: frozenset[str]

    @property
    def editing(self) -> bool:
        """True when the create tab shows a fetched record for update."""
        return self.mode is ViewMode.CREATE and self.active is not None

    @property
    def editable(self) -> bool:
        return self.mode is ViewMode.CREATE

    @property
    def busy(self) -> bool:
        return bool(self.pending)
