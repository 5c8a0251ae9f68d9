"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    add_product_handler,
    list_products_handler,
    remove_product_handler,
    update_product_handler,
)
from storefront.infrastructure.cli.actor_options import actor_options


@click.command("add")
@actor_options
@click.option("--title", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--image", default="", help="Image URL.")
def product_add(actor, title: str, price: str, stock: int, image: str) -> None:
    """Add a new product to the catalog (seller only)."""
    try:
        product = add_product_handler().handle(actor, title, price, stock, image)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at ${product.price}")


@click.command("list")
@click.option("--seller", "seller_id", default=None, help="Only this seller's products.")
def product_list(seller_id: str | None) -> None:
    """List products in the catalog."""
    products = list_products_handler().handle(seller_id=seller_id)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7} {'Seller':<14}")
    click.echo("-" * 61)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {'$' + p.price:>10} {p.stock_quantity:>7} {p.seller_name:<14}"
        )


@click.command("update")
@actor_options
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(actor, product_id: str, price: str | None, stock: int | None) -> None:
    """Update a product's price or stock (owner only)."""
    if price is None and stock is None:
        raise click.UsageError("Nothing to update: pass --price and/or --stock.")

    try:
        product = update_product_handler().handle(
            actor, product_id, new_price=price, stock_quantity=stock
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} now ${product.price}, {product.stock_quantity} in stock"
    )


@click.command("remove")
@actor_options
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_remove(actor, product_id: str) -> None:
    """Withdraw a product from sale (owner only)."""
    try:
        remove_product_handler().handle(actor, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} removed from sale.")
