# src/models/screen_state.py

"""Immutable UI-observable state snapshots, one per screen."""

from dataclasses import dataclass

from src.models.product import Product


@dataclass(frozen=True)
class ProductsScreenState:
    """State of the products list screen."""

    products: tuple[Product, ...] = ()
    search_query: str = ""
    is_loading: bool = False
    error_message: str | None = None
    fetch_failed: bool = False  # last load failed below the repository


@dataclass(frozen=True)
class ProductDetailsState:
    """State of the product details screen."""

    product: Product | None = None
    is_loading: bool = False
    error_message: str | None = None
    fetch_failed: bool = False
