"""Product records and the form that edits them.

A record with an id is assumed to exist in the remote store. Anything the
user is still typing lives in FormFields as raw text until it is validated
into a ProductDraft.
"""

from __future__ import annotations

from dataclasses import dataclass

from prodform.domain.exceptions import ValidationError
from prodform.domain.model.value_objects import Price

ProductId = str | int


@dataclass(frozen=True)
class ProductDraft:
    """Validated field values, ready to be sent for create or update."""

    name: str
    price: Price
    description: str


@dataclass(frozen=True)
class ProductRecord:
    """A product as known to the client.

    ``id`` is assigned by the remote store and stays None for drafts.
    """

    name: str
    price: float
    description: str
    id: ProductId | None = None

    @property
    def is_draft(self) -> bool:
        return self.id is None


@dataclass(frozen=True)
class FormFields:
    """Raw text of the three editable inputs, exactly as typed."""

    name: str = ""
    price: str = ""
    description: str = ""

    @classmethod
    def blank(cls) -> FormFields:
        return cls()

    @classmethod
    def from_record(cls, record: ProductRecord) -> FormFields:
        return cls(
            name=record.name,
            price=str(record.price),
            description=record.description,
        )

    @property
    def is_blank(self) -> bool:
        return not (self.name or self.price or self.description)

    def validate(self) -> ProductDraft:
        """Turn the raw input into a ProductDraft or raise ValidationError.

        Presence is checked before the price is parsed, so an empty form
        always reports the missing fields first.
        """
        name = self.name.strip()
        description = self.description.strip()
        price = self.price.strip()
        if not name or not price or not description:
            raise ValidationError(
                "Name, price and description are required fields"
            )
        try:
            parsed = Price.parse(price)
        except ValidationError as exc:
            raise ValidationError(
                f"Invalid price: {self.price!r} must be a non-negative number"
            ) from exc
        return ProductDraft(name=name, price=parsed, description=description)
