# src/controllers/products_controller.py

"""Controller for the products list screen."""

from collections.abc import Awaitable, Callable
from dataclasses import replace

from src.controllers.base_controller import BaseController
from src.models.product import Product
from src.models.screen_state import ProductsScreenState
from src.repository.product_repository import FetchResult, ProductRepository

ListFetch = Callable[[], Awaitable[FetchResult[list[Product]]]]


class ProductsController(BaseController[ProductsScreenState]):
    """Loads, filters and publishes the product list.

    The unfiltered result of the last load is kept in ``all_products``
    so a search query change re-filters locally instead of re-fetching.
    Must be created inside a running event loop: the initial
    all-products load starts immediately.
    """

    def __init__(self, repository: ProductRepository) -> None:
        super().__init__(repository, ProductsScreenState(), "products")
        self.all_products: list[Product] = []
        self._load_all()

    # ── Entry points ─────────────────────────────────────

    def load_products_by_category(self, category: str) -> None:
        """Replace the base set with *category* (blank = all products)."""
        if not category.strip():
            self._load_all()
            return

        def fetch() -> Awaitable[FetchResult[list[Product]]]:
            return self.repository.fetch_products_by_category(category)

        self._launch(
            lambda request_id: self._load(
                request_id, f"category '{category}'", fetch
            )
        )

    def on_search_query_change(self, query: str) -> None:
        """Update the query and re-filter the retained base set."""
        filtered = self.repository.search_products(
            self.all_products, query
        )
        self._update(
            lambda s: replace(
                s, search_query=query, products=tuple(filtered)
            )
        )

    def retry(self) -> None:
        """Re-run the all-products load."""
        self._load_all()

    # ── Internals ────────────────────────────────────────

    def _load_all(self) -> None:
        self._launch(
            lambda request_id: self._load(
                request_id,
                "all products",
                self.repository.fetch_all_products,
            )
        )

    async def _load(
        self,
        request_id: int,
        label: str,
        fetch: ListFetch,
    ) -> None:
        """Fetch a new base set, then publish it filtered by the query."""
        self._update(
            lambda s: replace(s, is_loading=True, error_message=None)
        )
        try:
            result = await fetch()
        except Exception as exc:
            if not self._is_current(request_id):
                return
            self.logger.error(
                "Loading %s failed: %s", label, exc, exc_info=True
            )
            message = f"Failed to load products: {exc}"
            self._update(
                lambda s: replace(
                    s, is_loading=False, error_message=message
                )
            )
            return

        if not self._is_current(request_id):
            return
        self.all_products = result.data or []
        self.logger.info(
            "Loaded %d products for %s (%s)",
            len(self.all_products),
            label,
            result.status.name,
        )
        filtered = self.repository.search_products(
            self.all_products, self.state.search_query
        )
        self._update(
            lambda s: replace(
                s,
                products=tuple(filtered),
                is_loading=False,
                fetch_failed=result.is_failed,
            )
        )
