"""Cart models: line items and the ordered cart sequence."""
import math
from dataclasses import dataclass, field, replace
from typing import Optional, List, Union

from fishcart.errors import (
    CartDecodeError,
    InvalidLineItem,
    InvalidQuantity,
    ERROR_EMPTY_PRODUCT_ID,
    ERROR_NEGATIVE_PRICE,
    ERROR_NEGATIVE_AVAILABLE,
    ERROR_NON_POSITIVE_QUANTITY,
    ERROR_NON_FINITE_QUANTITY,
    ERROR_SNAPSHOT_NOT_LIST,
    ERROR_RECORD_NOT_OBJECT,
    ERROR_DUPLICATE_PRODUCT,
)

Number = Union[int, float]

# Persisted record key -> attribute name
_FIELD_KEYS = {
    "productId": "product_id",
    "species": "species",
    "form": "form",
    "pricePerKg": "price_per_kg",
    "quantity": "quantity",
    "fishermanName": "fisherman_name",
    "availableQuantity": "available_quantity",
}
_STRING_KEYS = ("productId", "species", "form", "fishermanName")
_NUMBER_KEYS = ("pricePerKg", "quantity", "availableQuantity")


def _is_number(value) -> bool:
    # bool is an int subclass but never a valid price or quantity
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class LineItem:
    """Single offer in the cart."""
    product_id: str
    species: str
    form: str  # whole, filleted, ...
    price_per_kg: Number
    quantity: Number  # kilograms or units
    fisherman_name: str
    available_quantity: Number = 0  # informational, not enforced

    @property
    def total_price(self) -> float:
        """Price for the whole quantity."""
        return self.price_per_kg * self.quantity

    @property
    def label(self) -> str:
        """Display label, e.g. "Ahven (fileoitu)"."""
        return f"{self.species} ({self.form})"

    def with_quantity(self, quantity: Number) -> "LineItem":
        """Copy with a new quantity, every other field kept."""
        return replace(self, quantity=quantity)

    def validate(self) -> None:
        """
        Check the item before it enters a cart.

        Raises:
            InvalidLineItem: empty id, negative price or availability
            InvalidQuantity: quantity not a finite positive number
        """
        if not isinstance(self.product_id, str) or not self.product_id.strip():
            raise InvalidLineItem(ERROR_EMPTY_PRODUCT_ID, product_id=self.product_id)
        if not _is_number(self.price_per_kg) or not math.isfinite(self.price_per_kg) or self.price_per_kg < 0:
            raise InvalidLineItem(ERROR_NEGATIVE_PRICE, product_id=self.product_id)
        if not _is_number(self.available_quantity) or not math.isfinite(self.available_quantity) or self.available_quantity < 0:
            raise InvalidLineItem(ERROR_NEGATIVE_AVAILABLE, product_id=self.product_id)
        check_quantity(self.quantity, product_id=self.product_id)

    def to_dict(self) -> dict:
        """Convert to the persisted record shape."""
        return {key: getattr(self, attr) for key, attr in _FIELD_KEYS.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """
        Create from a persisted record.

        Raises:
            CartDecodeError: if a key is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise CartDecodeError(ERROR_RECORD_NOT_OBJECT)

        missing = [key for key in _FIELD_KEYS if key not in data]
        if missing:
            raise CartDecodeError(f"line item record missing keys: {', '.join(missing)}")

        for key in _STRING_KEYS:
            if not isinstance(data[key], str):
                raise CartDecodeError(f"line item field {key} must be a string")
        for key in _NUMBER_KEYS:
            if not _is_number(data[key]):
                raise CartDecodeError(f"line item field {key} must be a number")

        return cls(**{attr: data[key] for key, attr in _FIELD_KEYS.items()})


def check_quantity(quantity, product_id: Optional[str] = None) -> None:
    """Raise InvalidQuantity unless quantity is a finite number > 0."""
    if not _is_number(quantity) or not math.isfinite(quantity):
        raise InvalidQuantity(ERROR_NON_FINITE_QUANTITY, quantity=quantity, product_id=product_id)
    if quantity <= 0:
        raise InvalidQuantity(ERROR_NON_POSITIVE_QUANTITY, quantity=quantity, product_id=product_id)


@dataclass
class Cart:
    """Ordered sequence of line items, unique by product id."""
    items: List[LineItem] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of distinct line items (not the sum of quantities)."""
        return len(self.items)

    @property
    def total_price(self) -> float:
        """Sum of price_per_kg * quantity; no rounding."""
        return sum((item.total_price for item in self.items), 0)

    def index_of(self, product_id: str) -> int:
        """Position of the item with this id, or -1."""
        return next(
            (i for i, item in enumerate(self.items) if item.product_id == product_id),
            -1
        )

    def find(self, product_id: str) -> Optional[LineItem]:
        index = self.index_of(product_id)
        return self.items[index] if index >= 0 else None

    def to_list(self) -> list:
        """Convert to the persisted snapshot (list of records)."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """
        Create from a persisted snapshot.

        Raises:
            CartDecodeError: if data is not a list of well-formed records,
                holds an item that would be rejected by add, or repeats
                a product id
        """
        if not isinstance(data, list):
            raise CartDecodeError(ERROR_SNAPSHOT_NOT_LIST)

        items = [LineItem.from_dict(record) for record in data]

        seen = set()
        for item in items:
            try:
                item.validate()
            except InvalidLineItem as e:
                raise CartDecodeError(f"invalid line item {item.product_id!r}: {e}") from e
            if item.product_id in seen:
                raise CartDecodeError(f"{ERROR_DUPLICATE_PRODUCT}: {item.product_id}")
            seen.add(item.product_id)

        return cls(items=items)
