# src/repository/product_repository.py

"""Product data access on top of the store API client."""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, TypeVar

from src.api.errors import ApiError, HttpStatusError
from src.api.store_client import StoreApiClient
from src.filters.product_search import ProductSearch
from src.models.product import Product

logger = logging.getLogger("storefront.repository")

T = TypeVar("T")


class FetchStatus(Enum):
    """Outcome of a repository fetch."""

    OK = auto()
    EMPTY = auto()
    FAILED = auto()


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Tagged fetch outcome: data on OK, a reason on FAILED."""

    status: FetchStatus
    data: T | None = None
    reason: str = ""

    @classmethod
    def ok(cls, data: T) -> "FetchResult[T]":
        return cls(FetchStatus.OK, data)

    @classmethod
    def empty(cls) -> "FetchResult[T]":
        return cls(FetchStatus.EMPTY)

    @classmethod
    def failed(cls, reason: str) -> "FetchResult[T]":
        return cls(FetchStatus.FAILED, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.status is FetchStatus.OK

    @property
    def is_failed(self) -> bool:
        return self.status is FetchStatus.FAILED


def _list_result(products: list[Product]) -> FetchResult[list[Product]]:
    if not products:
        return FetchResult.empty()
    return FetchResult.ok(products)


class ProductRepository:
    """Runs client calls off the event loop and normalises failures.

    Two surfaces are offered: ``fetch_*`` returns a :class:`FetchResult`
    that keeps the failure reason, while ``get_*`` is fail-silent and
    collapses every failure into ``[]`` or ``None``. Only
    :class:`ApiError` is absorbed; anything else propagates.
    """

    def __init__(self, client: StoreApiClient) -> None:
        self.client = client

    # ── Tagged results ───────────────────────────────────

    async def fetch_all_products(self) -> FetchResult[list[Product]]:
        """Fetch the whole catalog."""
        try:
            response = await asyncio.to_thread(
                self.client.get_all_products
            )
        except ApiError as exc:
            logger.warning(
                "Fetching all products failed: %s", exc, exc_info=True
            )
            return FetchResult.failed(str(exc))
        logger.info("Fetched %d products", len(response.products))
        return _list_result(response.products)

    async def fetch_product(self, product_id: int) -> FetchResult[Product]:
        """Fetch one product; a 404 counts as a genuine miss."""
        try:
            response = await asyncio.to_thread(
                self.client.get_product_by_id, product_id
            )
        except HttpStatusError as exc:
            if exc.status_code == 404:
                logger.info("Product %d not found", product_id)
                return FetchResult.empty()
            logger.warning(
                "Fetching product %d failed: %s",
                product_id,
                exc,
                exc_info=True,
            )
            return FetchResult.failed(str(exc))
        except ApiError as exc:
            logger.warning(
                "Fetching product %d failed: %s",
                product_id,
                exc,
                exc_info=True,
            )
            return FetchResult.failed(str(exc))
        if response.product is None:
            logger.info("Product %d not found", product_id)
            return FetchResult.empty()
        return FetchResult.ok(response.product)

    async def fetch_products_by_category(
        self, category: str,
    ) -> FetchResult[list[Product]]:
        """Fetch every product tagged with *category*."""
        try:
            response = await asyncio.to_thread(
                self.client.get_products_by_category, category
            )
        except ApiError as exc:
            logger.warning(
                "Fetching category '%s' failed: %s",
                category,
                exc,
                exc_info=True,
            )
            return FetchResult.failed(str(exc))
        logger.info(
            "Fetched %d products in category '%s'",
            len(response.products),
            category,
        )
        return _list_result(response.products)

    # ── Fail-silent surface ──────────────────────────────

    async def get_all_products(self) -> list[Product]:
        """All products, or ``[]`` if the fetch failed."""
        result = await self.fetch_all_products()
        return result.data or []

    async def get_product_by_id(self, product_id: int) -> Product | None:
        """The product, or ``None`` if missing or the fetch failed."""
        result = await self.fetch_product(product_id)
        return result.data

    async def get_products_by_category(
        self, category: str,
    ) -> list[Product]:
        """Products in *category*, or ``[]`` if the fetch failed."""
        result = await self.fetch_products_by_category(category)
        return result.data or []

    @staticmethod
    def search_products(
        products: list[Product], query: str,
    ) -> list[Product]:
        """Client-side search; see :class:`ProductSearch`."""
        return ProductSearch.search_products(products, query)
