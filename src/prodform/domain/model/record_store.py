"""In-memory state of the product form.

The store keeps the last fetched collection, the record being edited or
viewed, the raw form input and the current tab. It is owned by a single
FormController and never talks to the network itself.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from prodform.domain.exceptions import ValidationError
from prodform.domain.model.product import FormFields, ProductId, ProductRecord
from prodform.domain.model.value_objects import ViewMode


@dataclass
class RecordStore:
    """Mutable form state.

    Invariants:
      * ``active`` is either None or a record carrying a remote id.
      * ``collection`` holds records with unique ids and is only ever
        replaced as a whole, never patched.
      * Changing ``mode`` wipes ``active``, ``fields`` and ``search_input``.
    """

    mode: ViewMode = ViewMode.CREATE
    collection: tuple[ProductRecord, ...] = ()
    active: ProductRecord | None = None
    fields: FormFields = field(default_factory=FormFields.blank)
    search_input: str = ""

    # --- Collection -----------------------------------------------------------

    def replace_collection(self, records: Iterable[ProductRecord]) -> None:
        """Swap in the result of a full fetch."""
        records = tuple(records)
        seen: set[ProductId] = set()
        for record in records:
            if record.is_draft:
                raise ValidationError(
                    f"Fetched product '{record.name}' has no id"
                )
            if record.id in seen:
                raise ValidationError(
                    f"Fetched collection contains duplicate id {record.id!r}"
                )
            seen.add(record.id)
        self.collection = records

    def find(self, product_id: ProductId) -> ProductRecord | None:
        for record in self.collection:
            if str(record.id) == str(product_id):
                return record
        return None

    # --- Active record --------------------------------------------------------

    def select(self, record: ProductRecord) -> None:
        """Make a fetched record the active one and copy it into the form."""
        if record.is_draft:
            raise ValidationError("Only records fetched from the store can be selected")
        self.active = record
        self.fields = FormFields.from_record(record)

    def clear_active(self) -> None:
        self.active = None
        self.fields = FormFields.blank()

    def is_active(self, product_id: ProductId) -> bool:
        return self.active is not None and str(self.active.id) == str(product_id)

    # --- Mode -----------------------------------------------------------------

    def switch_mode(self, mode: ViewMode) -> None:
        """Change tab, dropping any edit or search state from the old one."""
        self.mode = ViewMode(mode)
        self.clear_active()
        self.search_input = ""

    def reset(self) -> None:
        self.mode = ViewMode.CREATE
        self.collection = ()
        self.clear_active()
        self.search_input = ""
