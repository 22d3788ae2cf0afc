# src/api/store_client.py

"""Blocking HTTP client for the store REST API."""

import logging
from typing import Any

from curl_cffi import requests as curl_requests
from curl_cffi.requests.exceptions import RequestException

from src.api.errors import (
    DeserializationError,
    HttpStatusError,
    NetworkError,
)
from src.config.settings import Settings
from src.models.api_response import ApiResponse, ProductResponse


class StoreApiClient:
    """Issues the three catalog GET requests against one base URL.

    One instance is built at start-up and handed to the repository;
    it keeps a single ``curl_cffi`` session for connection reuse.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.logger = logging.getLogger("storefront.api")
        self.session = curl_requests.Session()
        self._request_timeout = timeout
        self._headers: dict[str, str] = dict(headers or {})

    @classmethod
    def from_settings(cls) -> "StoreApiClient":
        """Build a client from the central Settings."""
        return cls(
            base_url=Settings.BASE_URL,
            timeout=Settings.REQUEST_TIMEOUT,
            headers=Settings.DEFAULT_HEADERS,
        )

    def _get_json(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        """GET ``{base_url}/{path}`` and return the decoded JSON body."""
        url = f"{self.base_url}/{path}"
        self.logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(
                url,
                params=params,
                headers=self._headers,
                timeout=self._request_timeout,
            )
        except RequestException as exc:
            self.logger.warning(
                "Request to %s failed: %s", url, exc
            )
            raise NetworkError(
                f"Request to {url} failed: {exc}"
            ) from exc

        if not 200 <= resp.status_code < 300:
            self.logger.warning(
                "HTTP %d from %s", resp.status_code, url
            )
            raise HttpStatusError(resp.status_code, url)

        try:
            return resp.json()
        except ValueError as exc:
            self.logger.warning(
                "Malformed JSON from %s: %s", url, exc
            )
            raise DeserializationError(
                f"Malformed JSON from {url}"
            ) from exc

    def get_all_products(self) -> ApiResponse:
        """GET /products."""
        return ApiResponse.from_dict(self._get_json("products"))

    def get_product_by_id(self, product_id: int) -> ProductResponse:
        """GET /products/{id}."""
        return ProductResponse.from_dict(
            self._get_json(f"products/{product_id}")
        )

    def get_products_by_category(self, category: str) -> ApiResponse:
        """GET /products/category?type={category}."""
        return ApiResponse.from_dict(
            self._get_json(
                "products/category", params={"type": category}
            )
        )

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "StoreApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
