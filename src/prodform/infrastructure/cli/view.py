"""Shared terminal formatting for products and form state."""

from __future__ import annotations

from collections.abc import Iterable

import click

from prodform.application.dto import ViewSnapshot
from prodform.domain.model.product import ProductRecord
from prodform.domain.model.value_objects import ViewMode

TAB_TITLES = {
    ViewMode.CREATE: "Register Product",
    ViewMode.LIST: "Registered Products",
    ViewMode.SEARCH: "Find Product by ID",
}


def display_collection(records: Iterable[ProductRecord]) -> None:
    records = list(records)
    if not records:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<8} {'Name':<20} {'Price':>10}  Description")
    click.echo("-" * 60)
    for p in records:
        click.echo(f"{str(p.id):<8} {p.name:<20} {p.price:>10.2f}  {p.description}")


def display_record(record: ProductRecord) -> None:
    click.echo(f"Product #{record.id}")
    click.echo(f"  Name:        {record.name}")
    click.echo(f"  Price:       {record.price:.2f}")
    click.echo(f"  Description: {record.description}")


def display_snapshot(snapshot: ViewSnapshot) -> None:
    """Render whichever tab the snapshot is on."""
    tabs = "  ".join(
        f"[{TAB_TITLES[mode]}]" if mode is snapshot.mode else TAB_TITLES[mode]
        for mode in ViewMode
    )
    click.echo(tabs)
    click.echo()

    if snapshot.mode is ViewMode.CREATE:
        if snapshot.editing:
            click.secho(f"Editing product #{snapshot.active.id}", bold=True)
            display_record(snapshot.active)
        else:
            click.secho("New product", bold=True)
    elif snapshot.mode is ViewMode.LIST:
        display_collection(snapshot.collection)
    elif snapshot.active is not None:
        click.secho("Product found", bold=True)
        display_record(snapshot.active)

    if snapshot.busy:
        click.echo(f"(waiting on: {', '.join(sorted(snapshot.pending))})")
