"""CLI commands for products.

Each command runs one user action through a FormController, so the
same validation, notifications and refresh rules apply as in the
interactive session.
"""

from __future__ import annotations

import asyncio
import dataclasses
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click

from prodform.application.form_controller import FormController
from prodform.domain.model.product import FormFields
from prodform.infrastructure.bootstrap import form_controller
from prodform.infrastructure.cli.notifier import ClickNotificationSink
from prodform.infrastructure.cli.view import display_collection, display_record
from prodform.infrastructure.config import Settings

T = TypeVar("T")


def _run(settings: Settings, action: Callable[[FormController], Awaitable[T]]) -> T:
    """Run ``action`` against a fresh controller.

    The command fails only when the action itself reports failure by
    returning None or False. Errors raised afterwards, such as a list
    refresh that fails once a mutation went through, are shown as warnings.
    """
    notifier = ClickNotificationSink(echo_errors=False)

    async def _go() -> T:
        async with form_controller(settings, notifier) as controller:
            return await action(controller)

    result = asyncio.run(_go())
    if result is None or result is False:
        raise click.ClickException(notifier.last_error or "Product service request failed")
    if notifier.last_error is not None:
        click.secho(f"Warning: {notifier.last_error}", fg="yellow", err=True)
    return result


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products."""

    async def action(controller: FormController):
        if not await controller.load():
            return None
        return controller.snapshot().collection

    display_collection(_run(settings, action))


@click.command("show")
@click.argument("product_id")
@click.pass_obj
def product_show(settings: Settings, product_id: str) -> None:
    """Find a product by ID."""
    record = _run(settings, lambda controller: controller.search(product_id))
    display_record(record)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 9.99).")
@click.option("--description", required=True, help="Product description.")
@click.pass_obj
def product_add(settings: Settings, name: str, price: str, description: str) -> None:
    """Register a new product."""
    fields = FormFields(name=name, price=price, description=description)
    record = _run(settings, lambda controller: controller.submit(fields))
    click.echo(f"Product #{record.id} '{record.name}' added at {record.price:.2f}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--description", default=None, help="New description.")
@click.pass_obj
def product_update(
    settings: Settings,
    product_id: str,
    name: str | None,
    price: str | None,
    description: str | None,
) -> None:
    """Update a product. Fields left out keep their current value."""
    changes = {
        key: value
        for key, value in (("name", name), ("price", price), ("description", description))
        if value is not None
    }
    if not changes:
        raise click.UsageError("Nothing to update: pass --name, --price or --description.")

    async def action(controller: FormController):
        if await controller.edit_request(product_id) is None:
            return None
        fields = dataclasses.replace(controller.snapshot().fields, **changes)
        return await controller.submit(fields)

    record = _run(settings, action)
    click.echo(f"Product #{record.id} updated: '{record.name}' at {record.price:.2f}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(settings: Settings, product_id: str) -> None:
    """Delete a product."""
    _run(settings, lambda controller: controller.delete_request(product_id))
    click.echo(f"Product #{product_id} deleted")
