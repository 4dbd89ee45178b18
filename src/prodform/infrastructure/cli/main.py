import logging

import click

from prodform.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from prodform.infrastructure.cli.session_commands import session
from prodform.infrastructure.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings


@click.group()
@click.option(
    "--base-url",
    envvar="PRODFORM_API_URL",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="Base URL of the product service.",
)
@click.option(
    "--timeout",
    envvar="PRODFORM_TIMEOUT",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Request timeout in seconds.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP traffic.")
@click.pass_context
def cli(ctx: click.Context, base_url: str, timeout: float, verbose: bool) -> None:
    """prodform — manage products on a REST product service"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not verbose:
        # httpx logs every request at INFO.
        logging.getLogger("httpx").setLevel(logging.WARNING)
    try:
        ctx.obj = Settings(base_url=base_url, timeout=timeout)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
cli.add_command(session)
