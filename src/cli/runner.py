# src/cli/runner.py

"""Headless CLI front end driving the screen controllers."""

import json
import logging

from rich.console import Console
from rich.table import Table

from src.api.store_client import StoreApiClient
from src.config.settings import Settings
from src.controllers.product_details_controller import (
    ProductDetailsController,
)
from src.controllers.products_controller import ProductsController
from src.models.product import Product
from src.models.screen_state import ProductsScreenState
from src.repository.product_repository import ProductRepository

logger = logging.getLogger("storefront.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def resolve_category(category: str | None) -> str:
    """Map a CLI category argument to a registry id.

    ``None`` and ``"all"`` select the whole catalog (empty id).
    Raises ``SystemExit`` on unknown categories.
    """
    if category is None or category.strip().lower() in ("", "all"):
        return ""
    wanted = category.strip().lower()
    available = [c["id"] for c in Settings.CATEGORIES if c["id"]]
    if wanted not in available:
        _err.print(f"[red]Unknown category: {category}[/red]")
        _err.print(f"[dim]Available: {', '.join(available)}, all[/dim]")
        raise SystemExit(1)
    return wanted


def _format_price(product: Product) -> str:
    """Price cell, showing the discounted price when there is one."""
    if product.discount:
        return (
            f"${product.discounted_price:,.2f} "
            f"[dim](-{product.discount}%)[/dim]"
        )
    return f"${product.price:,.2f}"


def _badges(product: Product) -> str:
    tags: list[str] = []
    if product.on_sale:
        tags.append("sale")
    if product.popular:
        tags.append("popular")
    return ", ".join(tags)


def _print_products_table(title: str, products: list[Product]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    table.add_column("ID", style="dim", width=5)
    table.add_column("Title", max_width=60)
    table.add_column("Brand", style="magenta")
    table.add_column("Category")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Tags", style="yellow")

    for p in products:
        table.add_row(
            str(p.id),
            p.title[:60],
            p.brand,
            p.category,
            _format_price(p),
            _badges(p),
        )

    Console().print(table)


def _print_product_detail(product: Product) -> None:
    """Render one product as a two-column Rich table."""
    table = Table(
        title=product.title,
        show_header=False,
        title_style="bold cyan",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")
    table.add_row("ID", str(product.id))
    table.add_row("Brand", product.brand)
    table.add_row("Model", product.model)
    table.add_row("Color", product.color)
    table.add_row("Category", product.category)
    table.add_row("Price", _format_price(product))
    table.add_row("Tags", _badges(product) or "—")
    table.add_row("Image", product.image)
    table.add_row("Description", product.description)
    Console().print(table)


def _report_loading(state: ProductsScreenState) -> None:
    if state.is_loading:
        _err.print("[dim]Loading products…[/dim]")


async def cli_list(
    category: str | None,
    query: str | None,
    output_format: str,
) -> int:
    """List (and optionally search) products; return an exit code."""
    category_id = resolve_category(category)

    with StoreApiClient.from_settings() as client:
        controller = ProductsController(ProductRepository(client))
        subscription = controller.subscribe(_report_loading)
        try:
            if category_id:
                controller.load_products_by_category(category_id)
            await controller.wait_until_idle()
            if query:
                controller.on_search_query_change(query)
        finally:
            subscription.cancel()
            controller.close()

    state = controller.state
    if state.error_message:
        _err.print(f"[red]{state.error_message}[/red]")
        return 1
    if state.fetch_failed:
        _err.print(
            "[yellow]Could not reach the store, "
            "try again later[/yellow]"
        )
        return 1

    products = list(state.products)
    if output_format == "json":
        print(
            json.dumps(
                [p.to_dict() for p in products],
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        label = next(
            c["label"]
            for c in Settings.CATEGORIES
            if c["id"] == category_id
        )
        if query:
            label = f"{label} matching '{query}'"
        _print_products_table(label, products)

    _err.print(f"[bold]{len(products)}[/bold] products")
    return 0 if products else 1


async def cli_detail(product_id: int, output_format: str) -> int:
    """Show a single product; return an exit code."""
    with StoreApiClient.from_settings() as client:
        controller = ProductDetailsController(ProductRepository(client))
        try:
            controller.load_product(product_id)
            await controller.wait_until_idle()
        finally:
            controller.close()

    state = controller.state
    if state.error_message or state.product is None:
        message = state.error_message or "Product not found"
        if state.fetch_failed:
            message = f"{message} (the store could not be reached)"
        _err.print(f"[red]{message}[/red]")
        return 1

    if output_format == "json":
        print(
            json.dumps(
                state.product.to_dict(), indent=2, ensure_ascii=False
            )
        )
    else:
        _print_product_detail(state.product)
    return 0


def print_categories() -> int:
    """Print the category registry."""
    table = Table(title="Categories", title_style="bold cyan")
    table.add_column("ID", style="magenta")
    table.add_column("Label")
    for cat in Settings.CATEGORIES:
        table.add_row(cat["id"] or "all", cat["label"])
    Console().print(table)
    return 0
