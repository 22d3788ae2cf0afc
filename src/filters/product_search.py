# src/filters/product_search.py

"""Client-side free-text search over an already fetched product list."""

import logging

from src.models.product import Product

logger = logging.getLogger("storefront.filters")


class ProductSearch:
    """Case-insensitive substring search on title, brand and category."""

    @staticmethod
    def matches(product: Product, needle: str) -> bool:
        """Return True when *needle* (already lower-cased) hits a field."""
        return (
            needle in product.title.lower()
            or needle in product.brand.lower()
            or needle in product.category.lower()
        )

    @staticmethod
    def search_products(
        products: list[Product],
        query: str,
    ) -> list[Product]:
        """Keep the products matching *query*, preserving their order.

        A blank or whitespace-only query returns *products* unchanged.
        """
        if not query.strip():
            return products

        needle = query.lower()
        kept = [
            p for p in products if ProductSearch.matches(p, needle)
        ]
        logger.debug(
            "Search '%s' kept %d of %d products",
            query,
            len(kept),
            len(products),
        )
        return kept
