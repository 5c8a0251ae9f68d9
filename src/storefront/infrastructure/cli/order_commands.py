"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import AddressSpec, OrderDTO, OrderItemSpec
from storefront.application.update_order_status import build_status_command
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    list_orders_handler,
    place_order_handler,
    show_order_handler,
    update_order_status_handler,
)
from storefront.infrastructure.cli.actor_options import actor_options


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'P1:3,P2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Buyer:    {dto.buyer_name or dto.buyer_id}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M UTC}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number} ({dto.delivery_partner or 'n/a'})")
    if dto.cancellation_reason:
        click.echo(f"Reason:   {dto.cancellation_reason}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Seller':<14} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*62}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.seller_name:<14} {item.quantity:>5} "
            f"{'$' + item.unit_price:>10} {'$' + item.line_total:>10}"
        )
    click.echo(f"  {'-'*62}")
    click.echo(f"  {'Subtotal':<42} {'$' + dto.subtotal:>20}")
    click.echo(f"  {'Shipping':<42} {'$' + dto.shipping:>20}")
    click.echo(f"  {'Tax':<42} {'$' + dto.tax:>20}")
    click.echo(f"  {'Order Total':<42} {'$' + dto.total:>20}")


@click.command("place")
@actor_options
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--ship-name", required=True, help="Recipient name.")
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--zip", "zip_code", required=True)
@click.option("--country", default="")
@click.option(
    "--payment",
    "payment_method",
    type=click.Choice(["card", "paypal", "cod"]),
    default="card",
    show_default=True,
)
def order_place(actor, items, ship_name, street, city, state, zip_code, country, payment_method) -> None:
    """Place an order (reserves stock)."""
    specs = _parse_items(items)
    address = AddressSpec(
        name=ship_name,
        street=street,
        city=city,
        state=state,
        zip_code=zip_code,
        country=country,
    )

    try:
        dto = place_order_handler().handle(actor, specs, address, payment_method)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} placed.")
    click.echo()
    _display_order(dto)


@click.command("show")
@actor_options
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(actor, order_id: str) -> None:
    """Show details of an existing order."""
    try:
        dto = show_order_handler().handle(actor, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@actor_options
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=None, type=int, help="Orders per page.")
@click.option("--status", default=None, help="Only orders in this status.")
def order_list(actor, page: int, limit: int | None, status: str | None) -> None:
    """List the caller's orders, newest first."""
    try:
        result = list_orders_handler().handle(actor, page=page, limit=limit, status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<28} {'Status':<11} {'Items':>5} {'Total':>12}  Created")
    click.echo("-" * 78)
    for dto in result.orders:
        click.echo(
            f"{dto.order_number:<28} {dto.status:<11} {len(dto.items):>5} "
            f"{'$' + dto.total:>12}  {dto.created_at:%Y-%m-%d %H:%M}"
        )
    p = result.pagination
    click.echo(f"Page {p.page}/{max(p.pages, 1)} ({p.total} orders)")


@click.command("update")
@actor_options
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option(
    "--status",
    type=click.Choice(["confirmed", "processing", "shipped", "delivered", "cancelled"]),
    default=None,
)
@click.option("--tracking", "tracking_number", default=None)
@click.option("--partner", "delivery_partner", default=None)
@click.option("--eta", "estimated_delivery", type=click.DateTime(), default=None)
@click.option("--reason", "cancellation_reason", default=None, help="Cancellation reason.")
def order_update(
    actor,
    order_id: str,
    status,
    tracking_number,
    delivery_partner,
    estimated_delivery,
    cancellation_reason,
) -> None:
    """Move an order along its status (seller only)."""
    try:
        command = build_status_command(
            status=status,
            tracking_number=tracking_number,
            delivery_partner=delivery_partner,
            estimated_delivery=estimated_delivery,
            cancellation_reason=cancellation_reason,
        )
        dto = update_order_status_handler().handle(actor, order_id, command)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status}.")
