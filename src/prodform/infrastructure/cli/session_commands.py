"""Interactive tabbed session over a single FormController."""

from __future__ import annotations

import asyncio

import click

from prodform.application.form_controller import FormController
from prodform.domain.model.product import FormFields
from prodform.domain.model.value_objects import ViewMode
from prodform.infrastructure.bootstrap import form_controller
from prodform.infrastructure.cli.view import display_snapshot
from prodform.infrastructure.config import Settings

_CHOICES = click.Choice(["create", "list", "search", "edit", "delete", "quit"])


async def _prompt_submit(controller: FormController) -> None:
    current = controller.snapshot().fields
    fields = FormFields(
        name=click.prompt("Name", default=current.name, show_default=bool(current.name)),
        price=click.prompt("Price", default=current.price, show_default=bool(current.price)),
        description=click.prompt(
            "Description",
            default=current.description,
            show_default=bool(current.description),
        ),
    )
    await controller.submit(fields)


async def _session(settings: Settings) -> None:
    async with form_controller(settings) as controller:
        await controller.load()
        while True:
            click.echo()
            display_snapshot(controller.snapshot())
            choice = click.prompt("Action", type=_CHOICES, default="list")

            if choice == "quit":
                return
            if choice == "create":
                # Stay on an edit that was just loaded; otherwise start fresh.
                if not controller.snapshot().editing:
                    controller.select_tab(ViewMode.CREATE)
                await _prompt_submit(controller)
            elif choice == "list":
                controller.select_tab(ViewMode.LIST)
                await controller.load()
            elif choice == "search":
                await controller.search(click.prompt("Product ID", default="", show_default=False))
            elif choice == "edit":
                product_id = click.prompt("Product ID")
                if await controller.edit_request(product_id) is not None:
                    display_snapshot(controller.snapshot())
                    await _prompt_submit(controller)
            elif choice == "delete":
                await controller.delete_request(click.prompt("Product ID"))


@click.command("session")
@click.pass_obj
def session(settings: Settings) -> None:
    """Work with products interactively, one tab at a time."""
    asyncio.run(_session(settings))
