# src/controllers/product_details_controller.py

"""Controller for the product details screen."""

from dataclasses import replace

from src.controllers.base_controller import BaseController
from src.models.screen_state import ProductDetailsState
from src.repository.product_repository import ProductRepository

INVALID_ID_MESSAGE = "Invalid product ID"
NOT_FOUND_MESSAGE = "Product not found"


class ProductDetailsController(BaseController[ProductDetailsState]):
    """Loads a single product by id and publishes it."""

    def __init__(self, repository: ProductRepository) -> None:
        super().__init__(repository, ProductDetailsState(), "details")

    def load_product(self, product_id: int) -> None:
        """Start loading *product_id*; non-positive ids fail immediately."""
        self._launch(
            lambda request_id: self._load(request_id, product_id)
        )

    def retry(self, product_id: int) -> None:
        """Load *product_id* again."""
        self.load_product(product_id)

    async def _load(self, request_id: int, product_id: int) -> None:
        self._update(
            lambda s: replace(s, is_loading=True, error_message=None)
        )

        # Guards against a malformed navigation argument
        if product_id <= 0:
            self.logger.warning("Rejected product id %d", product_id)
            self._update(
                lambda s: replace(
                    s,
                    is_loading=False,
                    error_message=INVALID_ID_MESSAGE,
                    fetch_failed=False,
                )
            )
            return

        try:
            result = await self.repository.fetch_product(product_id)
        except Exception as exc:
            if not self._is_current(request_id):
                return
            self.logger.error(
                "Loading product %d failed: %s",
                product_id,
                exc,
                exc_info=True,
            )
            message = f"Failed to load product: {exc}"
            self._update(
                lambda s: replace(
                    s, is_loading=False, error_message=message
                )
            )
            return

        if not self._is_current(request_id):
            return
        if result.is_ok:
            self.logger.info("Loaded product %d", product_id)
            self._update(
                lambda s: replace(
                    s,
                    product=result.data,
                    is_loading=False,
                    fetch_failed=False,
                )
            )
        else:
            self.logger.info(
                "Product %d unavailable (%s)",
                product_id,
                result.status.name,
            )
            self._update(
                lambda s: replace(
                    s,
                    is_loading=False,
                    error_message=NOT_FOUND_MESSAGE,
                    fetch_failed=result.is_failed,
                )
            )
