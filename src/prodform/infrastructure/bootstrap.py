"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from prodform.application.form_controller import FormController
from prodform.application.notifications import NotificationSink
from prodform.infrastructure.cli.notifier import ClickNotificationSink
from prodform.infrastructure.config import Settings
from prodform.infrastructure.remote.http_product_repository import (
    HttpProductRepository,
)


def http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.base_url, timeout=settings.timeout)


@asynccontextmanager
async def form_controller(
    settings: Settings, notifier: NotificationSink | None = None
) -> AsyncIterator[FormController]:
    """Yield a controller bound to a live HTTP client; both are torn down on exit."""
    async with http_client(settings) as client:
        controller = FormController(
            product_repo=HttpProductRepository(client),
            notifier=notifier if notifier is not None else ClickNotificationSink(),
        )
        try:
            yield controller
        finally:
            controller.close()
