# src/models/product.py

"""Product data model and its JSON wire mapping."""

from dataclasses import dataclass
from typing import Any

from src.api.errors import DeserializationError

# (attribute, wire key, accepted JSON types)
_REQUIRED_FIELDS: list[tuple[str, str, tuple[type, ...]]] = [
    ("id", "id", (int,)),
    ("title", "title", (str,)),
    ("image", "image", (str,)),
    ("price", "price", (int, float)),
    ("description", "description", (str,)),
    ("brand", "brand", (str,)),
    ("model", "model", (str,)),
    ("color", "color", (str,)),
    ("category", "category", (str,)),
]

_OPTIONAL_FIELDS: list[tuple[str, str, tuple[type, ...]]] = [
    ("discount", "discount", (int,)),
    ("popular", "popular", (bool,)),
    ("on_sale", "onSale", (bool,)),
]


def _check_type(
    key: str, value: Any, expected: tuple[type, ...],
) -> None:
    """Raise DeserializationError unless *value* is one of *expected*.

    ``bool`` is a subclass of ``int`` in Python but never a valid
    number on the wire, so it is only accepted where ``bool`` is asked for.
    """
    if isinstance(value, bool) and bool not in expected:
        raise DeserializationError(
            f"Field '{key}' has type bool"
        )
    if not isinstance(value, expected):
        names = "/".join(t.__name__ for t in expected)
        raise DeserializationError(
            f"Field '{key}' expected {names}, "
            f"got {type(value).__name__}"
        )


def _check_ranges(fields: dict[str, Any]) -> None:
    """Reject ids <= 0, negative prices and discounts outside 0-100."""
    if fields["id"] <= 0:
        raise DeserializationError(
            f"Field 'id' must be positive, got {fields['id']}"
        )
    if fields["price"] < 0:
        raise DeserializationError(
            f"Field 'price' must be >= 0, got {fields['price']}"
        )
    discount = fields.get("discount")
    if discount is not None and not 0 <= discount <= 100:
        raise DeserializationError(
            f"Field 'discount' must be within 0-100, got {discount}"
        )


@dataclass(frozen=True)
class Product:
    """A single catalog item served by the store API."""

    id: int
    title: str
    image: str
    price: float
    description: str
    brand: str
    model: str
    color: str
    category: str
    discount: int | None = None
    popular: bool | None = None
    on_sale: bool | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Product":
        """Build a Product from a decoded JSON object."""
        if not isinstance(data, dict):
            raise DeserializationError(
                f"Product payload must be an object, "
                f"got {type(data).__name__}"
            )

        kwargs: dict[str, Any] = {}
        for attr, key, expected in _REQUIRED_FIELDS:
            if key not in data or data[key] is None:
                raise DeserializationError(
                    f"Missing required field '{key}'"
                )
            _check_type(key, data[key], expected)
            kwargs[attr] = data[key]

        for attr, key, expected in _OPTIONAL_FIELDS:
            value = data.get(key)
            if value is None:
                continue
            _check_type(key, value, expected)
            kwargs[attr] = value

        kwargs["price"] = float(kwargs["price"])
        _check_ranges(kwargs)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the wire format, omitting absent optional fields."""
        data: dict[str, Any] = {
            key: getattr(self, attr)
            for attr, key, _ in _REQUIRED_FIELDS
        }
        for attr, key, _ in _OPTIONAL_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data

    @property
    def discounted_price(self) -> float:
        """Price after the discount percentage, if any."""
        if not self.discount:
            return self.price
        percent = min(max(self.discount, 0), 100)
        return round(self.price * (100 - percent) / 100, 2)
