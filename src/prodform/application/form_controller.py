"""Application service: the product form.

FormController is the only writer of the RecordStore. Each public
coroutine performs one user action: validate, call the remote store once,
then apply the outcome to the store and report it through the
NotificationSink. Errors never escape a user action.

Overlapping actions are not serialized. Instead, fetches that write to the
store carry a generation token, and a completion whose token has been
superseded leaves the store alone.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from prodform.application.dto import ViewSnapshot
from prodform.application.notifications import Notification, NotificationSink
from prodform.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
)
from prodform.domain.model.product import FormFields, ProductId, ProductRecord
from prodform.domain.model.record_store import RecordStore
from prodform.domain.model.value_objects import ViewMode
from prodform.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

# Single-flight channels.
_REFRESH = "refresh"
_SELECT = "select"


class FormController:

    def __init__(
        self,
        product_repo: ProductRepository,
        notifier: NotificationSink,
        store: RecordStore | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._notifier = notifier
        self._store = store if store is not None else RecordStore()
        self._tokens: dict[str, int] = {_REFRESH: 0, _SELECT: 0}
        self._pending: Counter[str] = Counter()
        self._validation_error: str | None = None

    # --- View interface -------------------------------------------------------

    def snapshot(self) -> ViewSnapshot:
        store = self._store
        return ViewSnapshot(
            mode=store.mode,
            collection=store.collection,
            active=store.active,
            fields=store.fields,
            search_input=store.search_input,
            validation_error=self._validation_error,
            pending=frozenset(kind for kind, count in self._pending.items() if count),
        )

    async def load(self) -> bool:
        """Fetch the full collection. Returns False if the fetch failed."""
        return await self._refresh()

    def select_tab(self, mode: ViewMode) -> None:
        """Switch tab. Any edit, search or pending selection is dropped."""
        self._store.switch_mode(mode)
        self._advance(_SELECT)
        self._validation_error = None

    async def submit(self, fields: FormFields) -> ProductRecord | None:
        """Create a new product, or update the active one.

        Returns the saved record, or None when validation or the remote
        call failed. On failure the typed input is kept so the user can
        correct it and resubmit.
        """
        store = self._store
        if store.mode is not ViewMode.CREATE:
            self._reject(ValidationError("Products can only be saved from the create tab"))
            return None

        store.fields = fields
        try:
            draft = fields.validate()
        except ValidationError as exc:
            self._reject(exc)
            return None
        self._validation_error = None

        active = store.active
        selection = self._tokens[_SELECT]
        action = "create" if active is None else "update"
        try:
            async with self._in_flight(action):
                if active is None:
                    record = await self._product_repo.create(draft)
                else:
                    record = await self._product_repo.update(active.id, draft)
        except DomainException as exc:
            self._fail(f"Failed to {action} product: {exc}")
            return None

        if self._tokens[_SELECT] == selection:
            store.switch_mode(ViewMode.CREATE)
            self._advance(_SELECT)
        else:
            logger.debug("Form changed while %s was in flight; keeping it", action)

        self._notifier.notify(
            Notification.success(
                "Product created!" if active is None else "Product updated!"
            )
        )
        await self._refresh()
        return record

    async def edit_request(self, product_id: ProductId) -> ProductRecord | None:
        """Load a product into the create tab for editing."""
        return await self._fetch_into_active(product_id, ViewMode.CREATE)

    async def search(self, product_id: ProductId | None) -> ProductRecord | None:
        """Look up a product by id and show it read-only on the search tab."""
        if self._store.mode is not ViewMode.SEARCH:
            self.select_tab(ViewMode.SEARCH)
        raw = "" if product_id is None else str(product_id).strip()
        self._store.search_input = raw
        if not raw:
            self._reject(ValidationError("missing id: enter a product ID to search"))
            return None
        self._validation_error = None
        return await self._fetch_into_active(raw, ViewMode.SEARCH)

    async def delete_request(self, product_id: ProductId) -> bool:
        """Delete a product and refresh the list. Returns True on success."""
        try:
            async with self._in_flight("delete"):
                await self._product_repo.delete(product_id)
        except DomainException as exc:
            self._fail(f"Failed to delete product: {exc}")
            return False

        if self._store.is_active(product_id):
            self._store.clear_active()
            self._advance(_SELECT)

        self._notifier.notify(Notification.success("Product deleted!"))
        await self._refresh()
        return True

    def close(self) -> None:
        """Tear the form down. Completions still in flight are discarded."""
        self._store.reset()
        for channel in self._tokens:
            self._advance(channel)
        self._validation_error = None

    # --- Internal helpers -----------------------------------------------------

    async def _fetch_into_active(
        self, product_id: ProductId, mode: ViewMode
    ) -> ProductRecord | None:
        token = self._advance(_SELECT)
        try:
            async with self._in_flight("fetch"):
                record = await self._product_repo.get_by_id(product_id)
        except EntityNotFoundError as exc:
            self._fail(str(exc))
            return None
        except DomainException as exc:
            self._fail(f"Failed to fetch product: {exc}")
            return None

        if not self._is_current(_SELECT, token):
            logger.debug("Discarding stale fetch of product %s", product_id)
            return None
        if record.is_draft:
            self._fail(f"Failed to fetch product: product {product_id} came back without an id")
            return None

        if self._store.mode is not mode:
            self._store.switch_mode(mode)
        self._store.select(record)
        return record

    async def _refresh(self) -> bool:
        token = self._advance(_REFRESH)
        try:
            async with self._in_flight(_REFRESH):
                records = await self._product_repo.list_all()
            if not self._is_current(_REFRESH, token):
                logger.debug("Discarding stale product list")
                return True
            self._store.replace_collection(records)
        except DomainException as exc:
            logger.warning("Could not refresh products: %s", exc)
            self._fail(f"Failed to load products: {exc}")
            return False
        return True

    def _advance(self, channel: str) -> int:
        self._tokens[channel] += 1
        return self._tokens[channel]

    def _is_current(self, channel: str, token: int) -> bool:
        return self._tokens[channel] == token

    @asynccontextmanager
    async def _in_flight(self, kind: str) -> AsyncIterator[None]:
        self._pending[kind] += 1
        try:
            yield
        finally:
            self._pending[kind] -= 1

    def _reject(self, exc: ValidationError) -> None:
        self._validation_error = str(exc)
        self._notifier.notify(Notification.error(str(exc)))

    def _fail(self, message: str) -> None:
        self._notifier.notify(Notification.error(message))
