"""Click CLI commands for admin-console."""

from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from admin_console.catalog import CatalogManager, ProductDraft
from admin_console.config import AppConfig
from admin_console.orders import (
    InvalidFilterError,
    OrderAction,
    OrderLifecycleManager,
    TransitionResult,
    classify_status,
    find_status_conflicts,
)
from admin_console.service import (
    AuthSession,
    ExchangeStatus,
    Order,
    OrderStatus,
    Product,
    ServiceError,
)
from admin_console.service.http import (
    HttpAuthService,
    HttpCatalogService,
    HttpOrderService,
)
from admin_console.utils.logging import begin_action, setup_logging


def _order_service(config: AppConfig) -> Any:
    return HttpOrderService(config.api)


def _catalog_service(config: AppConfig) -> Any:
    return HttpCatalogService(config.api)


def _auth_service(config: AppConfig) -> Any:
    return HttpAuthService(config.api)


def _session(ctx: click.Context) -> AuthSession:
    """Session from --token or ADMIN_API__TOKEN.

    Tokens are only ever minted by ``login``, which refuses non-admins.
    """
    config: AppConfig = ctx.obj["config"]
    token = ctx.obj.get("token") or config.api.token
    if not token:
        raise click.ClickException(
            "Not logged in. Run 'admin-console login' and set ADMIN_API__TOKEN, "
            "or pass --token."
        )
    return AuthSession(token=token)


def _run(coro: Any, actor: str = "") -> Any:
    """Run one phase of a staff action, translating service errors.

    The first phase of a command opens its log context; later phases
    (after a confirmation prompt) share the same request ID.
    """
    ctx = click.get_current_context()
    if "request_id" not in ctx.meta:
        ctx.meta["request_id"] = begin_action(ctx.command_path, actor=actor)
    try:
        return asyncio.run(coro)
    except InvalidFilterError as e:
        raise click.ClickException(f"Invalid filters: {e}") from e
    except ServiceError as e:
        raise click.ClickException(str(e)) from e


def _fmt_date(dt: datetime | None) -> str:
    return dt.strftime("%Y-%m-%d") if dt is not None else "-"


@click.group()
@click.option("--token", default=None, help="Bearer token (default: ADMIN_API__TOKEN).")
@click.pass_context
def cli(ctx: click.Context, token: str | None) -> None:
    """Admin console: orders, exchange requests and catalog for the shop."""
    config = AppConfig()
    setup_logging(level=config.log_level, log_format=config.log_format)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["token"] = token


@cli.command()
@click.option("--email", prompt=True, help="Staff account email.")
@click.option("--password", prompt=True, hide_input=True, help="Account password.")
@click.pass_context
def login(ctx: click.Context, email: str, password: str) -> None:
    """Log in as an administrator and print the bearer token."""

    async def _login() -> AuthSession:
        async with _auth_service(ctx.obj["config"]) as auth:
            return await auth.login(email, password)

    session = _run(_login(), actor=email)
    click.echo(f"Logged in as {session.email}.")
    click.echo(f"export ADMIN_API__TOKEN={session.token}")


@cli.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    cfg: AppConfig = ctx.obj["config"]

    click.echo("=== Admin Console Configuration ===\n")

    click.echo(f"Log Level:    {cfg.log_level}")
    click.echo(f"Log Format:   {cfg.log_format}")
    click.echo(f"Page Size:    {cfg.page_size}")
    click.echo("")

    click.echo("[API]")
    click.echo(f"  Base URL:   {cfg.api.base_url}")
    click.echo(f"  Timeout:    {cfg.api.timeout_seconds}s")
    click.echo(f"  Token:      {'set' if cfg.api.token else 'not set'}")


# --- Orders ---


@cli.group()
def orders() -> None:
    """Inspect orders and mark them paid or delivered."""


@orders.command("list")
@click.option("--page", default=1, type=int, help="Page number (default: 1).")
@click.option(
    "--start-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Start of date range (YYYY-MM-DD).",
)
@click.option(
    "--end-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="End of date range (YYYY-MM-DD).",
)
@click.option(
    "--status",
    type=click.Choice([s.value for s in OrderStatus]),
    default=None,
    help="Only orders with this status.",
)
@click.option("--search", default=None, help="Search term (id, customer).")
@click.pass_context
def list_orders(
    ctx: click.Context,
    page: int,
    start_date: datetime | None,
    end_date: datetime | None,
    status: str | None,
    search: str | None,
) -> None:
    """List orders, one page at a time."""
    session = _session(ctx)
    config: AppConfig = ctx.obj["config"]

    async def _list() -> Any:
        async with _order_service(config) as service:
            manager = OrderLifecycleManager(service)
            return await manager.list_orders(
                session,
                page=page,
                start_date=start_date.date() if start_date else None,
                end_date=end_date.date() if end_date else None,
                status=status,
                search=search,
            )

    result = _run(_list())
    if not result.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'#':>4}  {'Order ID':<26} {'Date':<10}  {'Customer':<20} {'Status':<18} Amount")
    offset = (result.page - 1) * config.page_size
    for index, order in enumerate(result.orders, start=1):
        customer = order.user.name if order.user and order.user.name else "User not found"
        click.echo(
            f"{offset + index:>4}  {order.id:<26} {_fmt_date(order.created_at):<10}  "
            f"{customer[:20]:<20} {classify_status(order).value:<18} "
            f"{order.total_price:,.2f}"
        )
    click.echo(f"\nPage {result.page} of {result.pages}")


def _print_order(order: Order) -> None:
    click.echo(f"Order ID:   {order.id}")
    click.echo(f"Status:     {classify_status(order).value}")
    click.echo(f"Placed:     {_fmt_date(order.created_at)}")
    click.echo(f"Payment:    {'Paid' if order.is_paid else 'Awaiting Payment'}")
    if order.user is not None:
        click.echo(f"Customer:   {order.user.name} <{order.user.email}>")
    address = order.shipping_address
    if address is not None:
        click.echo(f"Deliver to: {address.full_name}, {address.address}, {address.city}")
        click.echo(f"            {address.state} - {address.postal_code}  ({address.phone})")
    if order.status is OrderStatus.CANCELLED:
        reason = order.cancellation_reason.reason if order.cancellation_reason else "-"
        click.echo(f"Cancelled:  {_fmt_date(order.cancelled_at)}  Reason: {reason}")

    click.echo("\nItems:")
    for item in order.order_items:
        click.echo(f"  {item.qty} x {item.name} {item.size}  @ {item.price:,.2f}")
    click.echo(f"  Subtotal: {order.subtotal:,.2f}")
    click.echo(f"  Shipping: {order.shipping_price:,.2f}")
    click.echo(f"  Tax:      {order.tax_price:,.2f}")
    click.echo(f"  Total:    {order.total_price:,.2f}")

    exchange = order.exchange_request
    if exchange is not None:
        status = exchange.status.value if exchange.status else "unknown"
        click.echo(f"\nExchange request {exchange.id}: {status}")
        click.echo(f"  Reason: {exchange.reason}")
        targets = OrderLifecycleManager.available_exchange_targets(exchange)
        if targets:
            click.echo(f"  Available: {', '.join(sorted(t.value for t in targets))}")

    actions = OrderLifecycleManager.available_actions(order)
    if actions:
        click.echo(f"\nActions: {', '.join(sorted(a.value for a in actions))}")
    for conflict in find_status_conflicts(order):
        click.echo(f"Warning: {conflict}")


def _fetch_order(ctx: click.Context, session: AuthSession, order_id: str) -> Order:
    async def _get() -> Order:
        async with _order_service(ctx.obj["config"]) as service:
            return await OrderLifecycleManager(service).get_order(session, order_id)

    return _run(_get())


@orders.command("show")
@click.argument("order_id")
@click.pass_context
def show_order(ctx: click.Context, order_id: str) -> None:
    """Show one order with its exchange request and available actions."""
    _print_order(_fetch_order(ctx, _session(ctx), order_id))


def _report(result: TransitionResult, refreshed: Order | None) -> None:
    if not result.ok:
        detail = result.reason or result.error
        raise click.ClickException(f"{result.outcome.value}: {detail}")
    click.echo("Done.")
    if refreshed is not None:
        click.echo(f"Status is now: {classify_status(refreshed).value}")


def _submit(
    ctx: click.Context,
    session: AuthSession,
    order_id: str,
    request: Callable[[OrderLifecycleManager], Awaitable[TransitionResult]],
) -> None:
    """Submit a transition on a fresh connection and refetch on success."""

    async def _apply() -> tuple[TransitionResult, Order | None]:
        async with _order_service(ctx.obj["config"]) as service:
            manager = OrderLifecycleManager(service)
            result = await request(manager)
            refreshed = await manager.get_order(session, order_id) if result.ok else None
            return result, refreshed

    _report(*_run(_apply()))


def _transition_order(ctx: click.Context, order_id: str, action: OrderAction, yes: bool) -> None:
    session = _session(ctx)
    order = _fetch_order(ctx, session, order_id)

    # Illegal actions are refused locally; only ask about ones that can apply
    if not yes and action in OrderLifecycleManager.available_actions(order):
        click.confirm(f"Perform {action.value} on order {order_id}?", abort=True)

    _submit(
        ctx,
        session,
        order_id,
        lambda manager: manager.request_order_transition(session, order, action),
    )


@orders.command("pay")
@click.argument("order_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def pay_order(ctx: click.Context, order_id: str, yes: bool) -> None:
    """Mark an order as paid."""
    _transition_order(ctx, order_id, OrderAction.MARK_PAID, yes)


@orders.command("deliver")
@click.argument("order_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def deliver_order(ctx: click.Context, order_id: str, yes: bool) -> None:
    """Mark an order as delivered."""
    _transition_order(ctx, order_id, OrderAction.MARK_DELIVERED, yes)


@orders.command("bill")
@click.argument("order_id")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the document (default: bill-<ORDER_ID>.pdf).",
)
@click.pass_context
def bill(ctx: click.Context, order_id: str, output: Path | None) -> None:
    """Download the bill document for an order."""
    session = _session(ctx)

    async def _fetch() -> bytes:
        async with _order_service(ctx.obj["config"]) as service:
            return await OrderLifecycleManager(service).fetch_bill(session, order_id)

    document = _run(_fetch())
    target = output or Path(f"bill-{order_id}.pdf")
    target.write_bytes(document)
    click.echo(f"Saved {len(document)} bytes to {target}")


# --- Exchange requests ---


@cli.group()
def exchanges() -> None:
    """Approve, reject or complete exchange requests."""


def _transition_exchange(
    ctx: click.Context,
    order_id: str,
    target: ExchangeStatus,
    yes: bool,
) -> None:
    session = _session(ctx)
    exchange = _fetch_order(ctx, session, order_id).exchange_request
    if exchange is None:
        raise click.ClickException(f"Order {order_id} has no exchange request.")

    if not yes and target in OrderLifecycleManager.available_exchange_targets(exchange):
        click.confirm(
            f"Set exchange request on order {order_id} to {target.value}?",
            abort=True,
        )

    _submit(
        ctx,
        session,
        order_id,
        lambda manager: manager.request_exchange_transition(session, exchange, target),
    )


@exchanges.command("approve")
@click.argument("order_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def approve_exchange(ctx: click.Context, order_id: str, yes: bool) -> None:
    """Approve the pending exchange request on an order."""
    _transition_exchange(ctx, order_id, ExchangeStatus.APPROVED, yes)


@exchanges.command("reject")
@click.argument("order_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def reject_exchange(ctx: click.Context, order_id: str, yes: bool) -> None:
    """Reject the pending exchange request on an order."""
    _transition_exchange(ctx, order_id, ExchangeStatus.REJECTED, yes)


@exchanges.command("complete")
@click.argument("order_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def complete_exchange(ctx: click.Context, order_id: str, yes: bool) -> None:
    """Complete an approved exchange request."""
    _transition_exchange(ctx, order_id, ExchangeStatus.COMPLETED, yes)


# --- Catalog ---


@cli.group()
def products() -> None:
    """Browse and edit the product catalog."""


@products.command("list")
@click.pass_context
def list_products(ctx: click.Context) -> None:
    """List catalog entries."""
    session = _session(ctx)

    async def _list() -> Any:
        async with _catalog_service(ctx.obj["config"]) as service:
            return await CatalogManager(service).list_products(session)

    items = _run(_list())
    if not items:
        click.echo("No products found.")
        return
    for product in items:
        click.echo(
            f"{product.id:<26} {product.name[:30]:<30} {product.category[:12]:<12} "
            f"{product.price:>10,.2f}  stock {product.total_stock}"
        )


def _fetch_product(ctx: click.Context, session: AuthSession, product_id: str) -> Product:
    async def _get() -> Product:
        async with _catalog_service(ctx.obj["config"]) as service:
            return await CatalogManager(service).get_product(session, product_id)

    return _run(_get())


@products.command("show")
@click.argument("product_id")
@click.pass_context
def show_product(ctx: click.Context, product_id: str) -> None:
    """Show one catalog entry."""
    product = _fetch_product(ctx, _session(ctx), product_id)
    click.echo(f"{product.name} ({product.id})")
    click.echo(f"Category: {product.category}")
    click.echo(f"Price:    {product.price:,.2f}")
    for variant in product.variants:
        click.echo(f"  {variant.size:<4} stock {variant.stock}")
    if product.description:
        click.echo(f"\n{product.description}")


def _load_draft(path: Path) -> ProductDraft:
    try:
        return ProductDraft.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (ValueError, ValidationError) as e:
        raise click.ClickException(f"Invalid product file {path}: {e}") from e


def _edit_draft(
    draft: ProductDraft,
    overrides: dict[str, Any],
    stock: tuple[str, ...],
) -> ProductDraft:
    """Apply field options and SIZE=QTY stock edits, then revalidate."""
    fields = draft.model_dump()
    fields.update(overrides)
    if stock:
        variants = {v["size"]: v for v in fields["variants"]}
        for item in stock:
            size, sep, qty = item.partition("=")
            if not sep:
                raise click.BadParameter(f"expected SIZE=QTY, got {item!r}", param_hint="--stock")
            variants[size.strip().upper()] = {"size": size, "stock": qty}
        fields["variants"] = list(variants.values())
    try:
        return ProductDraft.model_validate(fields)
    except ValidationError as e:
        raise click.ClickException(f"Invalid product update: {e}") from e


@products.command("create")
@click.argument("draft_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def create_product(ctx: click.Context, draft_file: Path) -> None:
    """Create a product from a JSON file."""
    session = _session(ctx)
    draft = _load_draft(draft_file)

    async def _create() -> Any:
        async with _catalog_service(ctx.obj["config"]) as service:
            return await CatalogManager(service).create_product(session, draft)

    product = _run(_create())
    click.echo(f"Created {product.id}: {product.name}")


@products.command("update")
@click.argument("product_id")
@click.argument(
    "draft_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--name", default=None, help="New product name.")
@click.option("--price", default=None, help="New regular price.")
@click.option("--category", default=None, help="New category.")
@click.option("--description", default=None, help="New description.")
@click.option(
    "--stock",
    multiple=True,
    metavar="SIZE=QTY",
    help="Set stock for one size; repeatable. Unknown sizes are added.",
)
@click.pass_context
def update_product(
    ctx: click.Context,
    product_id: str,
    draft_file: Path | None,
    name: str | None,
    price: str | None,
    category: str | None,
    description: str | None,
    stock: tuple[str, ...],
) -> None:
    """Update a product.

    With DRAFT_FILE the product is replaced by the file's contents.
    Without it the current product is fetched and only the given fields
    change. Field options apply on top of the file when both are given.
    """
    overrides = {
        key: value
        for key, value in (
            ("product_name", name),
            ("regular_price", price),
            ("category", category),
            ("description", description),
        )
        if value is not None
    }
    if draft_file is None and not overrides and not stock:
        raise click.UsageError("Nothing to update: give DRAFT_FILE or at least one field option.")

    session = _session(ctx)
    if draft_file is not None:
        draft = _load_draft(draft_file)
    else:
        draft = ProductDraft.from_product(_fetch_product(ctx, session, product_id))
    draft = _edit_draft(draft, overrides, stock)

    async def _update() -> Any:
        async with _catalog_service(ctx.obj["config"]) as service:
            return await CatalogManager(service).update_product(session, product_id, draft)

    product = _run(_update())
    click.echo(f"Updated {product.id}: {product.name}")


@products.command("delete")
@click.argument("product_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def delete_product(ctx: click.Context, product_id: str, yes: bool) -> None:
    """Delete a product."""
    session = _session(ctx)
    if not yes:
        click.confirm(f"Delete product {product_id}?", abort=True)

    async def _delete() -> None:
        async with _catalog_service(ctx.obj["config"]) as service:
            await CatalogManager(service).delete_product(session, product_id)

    _run(_delete())
    click.echo(f"Deleted {product_id}")


if __name__ == "__main__":
    sys.exit(cli())
