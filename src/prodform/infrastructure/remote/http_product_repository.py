"""httpx-backed implementation of ProductRepository.

Talks to a plain REST collection at ``/produtos`` whose payloads use the
Portuguese field names ``nome``, ``preco`` and ``descricao``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from prodform.domain.exceptions import EntityNotFoundError, RemoteServiceError
from prodform.domain.model.product import ProductDraft, ProductId, ProductRecord
from prodform.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

RESOURCE_PATH = "/produtos"


class HttpProductRepository(ProductRepository):

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    # --- ProductRepository interface ------------------------------------------

    async def list_all(self) -> list[ProductRecord]:
        payload = await self._request("GET", RESOURCE_PATH)
        if not isinstance(payload, list):
            raise RemoteServiceError(
                f"Expected a list of products, got {type(payload).__name__}"
            )
        return [self._from_wire(item) for item in payload]

    async def get_by_id(self, product_id: ProductId) -> ProductRecord:
        payload = await self._request("GET", self._item_path(product_id), product_id)
        return self._from_wire(payload)

    async def create(self, draft: ProductDraft) -> ProductRecord:
        payload = await self._request("POST", RESOURCE_PATH, json=self._to_wire(draft))
        return self._from_wire(payload)

    async def update(self, product_id: ProductId, draft: ProductDraft) -> ProductRecord:
        payload = await self._request(
            "PATCH", self._item_path(product_id), product_id, json=self._to_wire(draft)
        )
        return self._from_wire(payload)

    async def delete(self, product_id: ProductId) -> None:
        await self._request("DELETE", self._item_path(product_id), product_id)

    # --- Transport helpers ----------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        product_id: ProductId | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise RemoteServiceError(f"Could not reach the product service: {exc}") from exc

        if response.status_code == 404 and product_id is not None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("%s %s returned %s", method, path, response.status_code)
            raise RemoteServiceError(
                f"Product service answered {response.status_code} for {method} {path}"
            ) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteServiceError(f"Invalid JSON from {method} {path}") from exc

    @staticmethod
    def _item_path(product_id: ProductId) -> str:
        return f"{RESOURCE_PATH}/{quote(str(product_id), safe='')}"

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _to_wire(draft: ProductDraft) -> dict[str, Any]:
        return {
            "nome": draft.name,
            "preco": draft.price.amount,
            "descricao": draft.description,
        }

    @staticmethod
    def _from_wire(item: Any) -> ProductRecord:
        if not isinstance(item, dict):
            raise RemoteServiceError(f"Malformed product payload: {item!r}")
        try:
            record = ProductRecord(
                id=item["id"],
                name=item["nome"],
                price=float(item["preco"]),
                description=item["descricao"],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RemoteServiceError(f"Malformed product payload: {item!r}") from exc
        if (
            isinstance(record.id, bool)
            or not isinstance(record.id, (str, int))
            or record.id == ""
            or not isinstance(record.name, str)
            or not isinstance(record.description, str)
        ):
            raise RemoteServiceError(f"Malformed product payload: {item!r}")
        return record
