"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from prodform.domain.exceptions import ValidationError


class ViewMode(str, Enum):
    """Which tab of the form is presented."""

    CREATE = "create"
    LIST = "list"
    SEARCH = "search"


@dataclass(frozen=True)
class Price:
    """A non-negative, finite price.

    The remote store expects a JSON number, so the amount is kept as a
    float rather than a Decimal.
    """

    amount: float

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, (int, float)):
            raise ValidationError(
                f"Price amount must be a number, got {type(self.amount).__name__}"
            )
        if not math.isfinite(self.amount):
            raise ValidationError(f"Price must be finite, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Price cannot be negative, got {self.amount}")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def parse(raw: str | float | int) -> Price:
        """Coerce user input into a Price, rejecting malformed or negative text."""
        try:
            amount = float(str(raw).strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid price: {raw!r}") from exc
        try:
            return Price(amount)
        except ValidationError as exc:
            raise ValidationError(f"Invalid price: {raw!r}") from exc
