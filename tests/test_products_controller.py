# tests/test_products_controller.py

"""Tests for ProductsController state transitions."""

import asyncio
import unittest
from unittest.mock import MagicMock

from src.api.errors import NetworkError
from src.controllers.products_controller import ProductsController
from src.models.api_response import ApiResponse
from src.models.product import Product
from src.models.screen_state import ProductsScreenState
from src.repository.product_repository import (
    FetchResult,
    ProductRepository,
)


def _make_product(
    pid: int, category: str = "audio", brand: str = "Acme",
) -> Product:
    """Create a minimal Product with the given id and category."""
    return Product(
        id=pid,
        title=f"Item {pid}",
        image="",
        price=10.0,
        description="",
        brand=brand,
        model="",
        color="",
        category=category,
    )


CATALOG = [
    _make_product(i, "tv" if i % 2 else "audio", "Sony" if i < 5 else "LG")
    for i in range(1, 21)
]
TVS = [p for p in CATALOG if p.category == "tv"]


def _repository() -> tuple[ProductRepository, MagicMock]:
    client = MagicMock()
    client.get_all_products.return_value = ApiResponse(
        "SUCCESS", "", list(CATALOG)
    )
    client.get_products_by_category.return_value = ApiResponse(
        "SUCCESS", "", list(TVS)
    )
    return ProductRepository(client), client


class _GatedRepository(ProductRepository):
    """Repository whose category fetches wait for a per-category gate."""

    def __init__(self) -> None:
        super().__init__(MagicMock())
        self.gates: dict[str, asyncio.Event] = {}

    async def fetch_all_products(self) -> FetchResult[list[Product]]:
        return FetchResult.ok(list(CATALOG))

    async def fetch_products_by_category(
        self, category: str,
    ) -> FetchResult[list[Product]]:
        gate = self.gates.setdefault(category, asyncio.Event())
        await gate.wait()
        return FetchResult.ok(
            [p for p in CATALOG if p.category == category]
        )


class TestInitialLoad(unittest.IsolatedAsyncioTestCase):
    """The all-products load started on creation."""

    async def test_loads_all_products(self) -> None:
        """Creation fetches and publishes the whole catalog."""
        repo, client = _repository()
        controller = ProductsController(repo)
        await controller.wait_until_idle()

        state = controller.state
        self.assertEqual(state.products, tuple(CATALOG))
        self.assertFalse(state.is_loading)
        self.assertIsNone(state.error_message)
        self.assertFalse(state.fetch_failed)
        client.get_all_products.assert_called_once_with()
        controller.close()

    async def test_publishes_loading_then_success(self) -> None:
        """Subscribers see initial, loading and loaded snapshots."""
        repo, _ = _repository()
        controller = ProductsController(repo)
        seen: list[ProductsScreenState] = []
        controller.subscribe(seen.append)
        await controller.wait_until_idle()

        self.assertEqual(
            [s.is_loading for s in seen], [False, True, False]
        )
        self.assertEqual(len(seen[-1].products), 20)
        controller.close()

    async def test_failed_fetch_is_empty_without_error(self) -> None:
        """A dropped connection shows no products and no error message."""
        repo, client = _repository()
        client.get_all_products.side_effect = NetworkError("reset")
        controller = ProductsController(repo)
        await controller.wait_until_idle()

        state = controller.state
        self.assertEqual(state.products, ())
        self.assertIsNone(state.error_message)
        self.assertFalse(state.is_loading)
        self.assertTrue(state.fetch_failed)
        controller.close()

    async def test_retry_reloads_all_products(self) -> None:
        """retry() re-runs the all-products load."""
        repo, client = _repository()
        client.get_all_products.side_effect = [
            NetworkError("reset"),
            ApiResponse("SUCCESS", "", list(CATALOG)),
        ]
        controller = ProductsController(repo)
        await controller.wait_until_idle()
        self.assertEqual(controller.state.products, ())

        controller.retry()
        await controller.wait_until_idle()
        self.assertEqual(len(controller.state.products), 20)
        self.assertFalse(controller.state.fetch_failed)
        self.assertEqual(client.get_all_products.call_count, 2)
        controller.close()


class TestCategoryAndSearch(unittest.IsolatedAsyncioTestCase):
    """Category loading and client-side search."""

    async def test_category_replaces_base_set(self) -> None:
        """A category load becomes the new unfiltered base set."""
        repo, client = _repository()
        controller = ProductsController(repo)
        controller.load_products_by_category("tv")
        await controller.wait_until_idle()

        self.assertEqual(controller.state.products, tuple(TVS))
        self.assertEqual(controller.all_products, TVS)
        client.get_products_by_category.assert_called_once_with("tv")
        controller.close()

    async def test_blank_category_loads_all(self) -> None:
        """The all-products entry has a blank category id."""
        repo, client = _repository()
        controller = ProductsController(repo)
        controller.load_products_by_category("")
        await controller.wait_until_idle()

        self.assertEqual(len(controller.state.products), 20)
        client.get_products_by_category.assert_not_called()
        controller.close()

    async def test_search_does_not_refetch(self) -> None:
        """Changing the query filters locally."""
        repo, client = _repository()
        controller = ProductsController(repo)
        await controller.wait_until_idle()

        controller.on_search_query_change("SONY")
        self.assertEqual(controller.state.search_query, "SONY")
        self.assertEqual(
            [p.id for p in controller.state.products], [1, 2, 3, 4]
        )

        controller.on_search_query_change("")
        self.assertEqual(len(controller.state.products), 20)
        client.get_all_products.assert_called_once_with()
        controller.close()

    async def test_query_reapplied_after_category_load(self) -> None:
        """Filter-after-fetch equals the stored query re-applied."""
        repo, _ = _repository()
        controller = ProductsController(repo)
        await controller.wait_until_idle()
        controller.on_search_query_change("lg")

        controller.load_products_by_category("tv")
        await controller.wait_until_idle()

        expected = repo.search_products(TVS, "lg")
        self.assertEqual(controller.state.products, tuple(expected))
        self.assertTrue(expected)
        controller.close()

    async def test_exception_escaping_repository(self) -> None:
        """A non-API error becomes a generic error message."""
        repo, client = _repository()
        controller = ProductsController(repo)
        await controller.wait_until_idle()

        client.get_products_by_category.side_effect = RuntimeError("boom")
        with self.assertLogs("storefront.controllers.products", "ERROR"):
            controller.load_products_by_category("tv")
            await controller.wait_until_idle()

        state = controller.state
        self.assertFalse(state.is_loading)
        self.assertEqual(state.error_message, "Failed to load products: boom")
        controller.close()


class TestConcurrency(unittest.IsolatedAsyncioTestCase):
    """Stale completions and cancellation."""

    async def test_stale_completion_discarded(self) -> None:
        """An older category load finishing last does not win."""
        repo = _GatedRepository()
        controller = ProductsController(repo)
        await controller.wait_until_idle()

        controller.load_products_by_category("tv")
        controller.load_products_by_category("audio")
        await asyncio.sleep(0)
        repo.gates["audio"].set()
        await asyncio.sleep(0.01)
        repo.gates["tv"].set()
        await controller.wait_until_idle()

        categories = {p.category for p in controller.state.products}
        self.assertEqual(categories, {"audio"})
        controller.close()

    async def test_close_cancels_and_stops_publishing(self) -> None:
        """After close() no further snapshot is published."""
        repo = _GatedRepository()
        controller = ProductsController(repo)
        await controller.wait_until_idle()

        controller.load_products_by_category("tv")
        await asyncio.sleep(0)
        seen: list[ProductsScreenState] = []
        controller.subscribe(seen.append)
        controller.close()
        repo.gates["tv"].set()
        await controller.wait_until_idle()

        self.assertEqual(len(seen), 1)
        self.assertTrue(controller.state.is_loading)

    async def test_load_after_close_is_ignored(self) -> None:
        """A closed controller starts no new loads."""
        repo, client = _repository()
        controller = ProductsController(repo)
        await controller.wait_until_idle()
        controller.close()

        controller.retry()
        await controller.wait_until_idle()
        client.get_all_products.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
