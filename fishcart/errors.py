"""
Cart Errors

Centralized error messages and the exception hierarchy used by the cart.
"""

# Line item errors
ERROR_EMPTY_PRODUCT_ID = "product_id must be a non-empty string"
ERROR_NEGATIVE_PRICE = "price_per_kg must be a non-negative number"
ERROR_NEGATIVE_AVAILABLE = "available_quantity must be a non-negative number"
ERROR_NON_POSITIVE_QUANTITY = "quantity must be a positive number"
ERROR_NON_FINITE_QUANTITY = "quantity must be a finite number"
ERROR_UNPARSEABLE_QUANTITY = "quantity is not a number"

# Snapshot errors
ERROR_SNAPSHOT_NOT_LIST = "cart snapshot must be a list"
ERROR_RECORD_NOT_OBJECT = "line item record must be an object"
ERROR_DUPLICATE_PRODUCT = "duplicate product id in snapshot"

# Storage errors
ERROR_STORAGE_UNAVAILABLE = "Cart storage unavailable"


class CartError(Exception):
    """Base exception for cart operations."""
    pass


class InvalidLineItem(CartError, ValueError):
    """Raised when a line item is rejected at the add boundary."""

    def __init__(self, message: str, product_id: str | None = None):
        self.message = message
        self.product_id = product_id
        super().__init__(message)


class InvalidQuantity(InvalidLineItem):
    """Raised for a non-positive or non-finite quantity."""

    def __init__(self, message: str, quantity=None, product_id: str | None = None):
        self.quantity = quantity
        super().__init__(message, product_id=product_id)


class CartDecodeError(CartError):
    """Raised when a persisted snapshot does not have the cart shape."""
    pass


class StorageError(CartError):
    """Raised by storage backends when the medium cannot be read or written."""
    pass
