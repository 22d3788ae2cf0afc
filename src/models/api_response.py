# src/models/api_response.py

"""Response envelopes returned by the store API."""

from dataclasses import dataclass, field
from typing import Any

from src.api.errors import DeserializationError
from src.models.product import Product


def _envelope_text(data: dict[str, Any], key: str) -> str:
    """Read an optional string field of the envelope."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DeserializationError(
            f"Envelope field '{key}' must be a string"
        )
    return value


def _require_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DeserializationError(
            f"Response body must be an object, "
            f"got {type(data).__name__}"
        )
    return data


@dataclass
class ApiResponse:
    """Envelope for the list endpoints."""

    status: str
    message: str
    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )

    @classmethod
    def from_dict(cls, data: Any) -> "ApiResponse":
        """Decode a ``{status, message, products}`` body."""
        body = _require_object(data)
        raw_products = body.get("products")
        if not isinstance(raw_products, list):
            raise DeserializationError(
                "Field 'products' must be a list"
            )
        return cls(
            status=_envelope_text(body, "status"),
            message=_envelope_text(body, "message"),
            products=[Product.from_dict(p) for p in raw_products],
        )


@dataclass
class ProductResponse:
    """Envelope for the single-product endpoint."""

    status: str
    message: str
    product: Product | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ProductResponse":
        """Decode a ``{status, message, product}`` body."""
        body = _require_object(data)
        raw_product = body.get("product")
        return cls(
            status=_envelope_text(body, "status"),
            message=_envelope_text(body, "message"),
            product=(
                Product.from_dict(raw_product)
                if raw_product is not None
                else None
            ),
        )
