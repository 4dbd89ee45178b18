"""Abstract repository for the remote product collection.

Defined in the domain layer so the domain never depends on
infrastructure. The concrete HTTP client lives in the infrastructure
layer; tests use an in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from prodform.domain.model.product import ProductDraft, ProductId, ProductRecord


class ProductRepository(ABC):
    """Stateless gateway to the remote store.

    Every call is a single attempt. Failures surface as
    EntityNotFoundError or RemoteServiceError.
    """

    @abstractmethod
    async def list_all(self) -> list[ProductRecord]:
        """Return every product the remote store holds."""

    @abstractmethod
    async def get_by_id(self, product_id: ProductId) -> ProductRecord:
        """Return a product by its ID, raising EntityNotFoundError if absent."""

    @abstractmethod
    async def create(self, draft: ProductDraft) -> ProductRecord:
        """Create a product; the returned record carries the assigned ID."""

    @abstractmethod
    async def update(self, product_id: ProductId, draft: ProductDraft) -> ProductRecord:
        """Overwrite name, price and description of an existing product."""

    @abstractmethod
    async def delete(self, product_id: ProductId) -> None:
        """Remove a product from the remote store."""
