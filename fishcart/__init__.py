"""
fishcart - storefront shopping cart

This package contains:
- cart: line item models, persistence adapter and the cart store
- db: key-value storage backends (file, memory, Upstash Redis)
- catalog: inbound product records
- orders: payloads for the checkout collaborator

Note: Imports are lazy so that importing the package does not touch
storage configuration.
"""

__all__ = [
    "get_cart_store",
    "get_storage_backend",
    "CartStore",
    "LineItem",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "get_cart_store":
        from fishcart.cart import get_cart_store
        return get_cart_store
    elif name == "CartStore":
        from fishcart.cart import CartStore
        return CartStore
    elif name == "LineItem":
        from fishcart.cart import LineItem
        return LineItem
    elif name == "get_storage_backend":
        from fishcart.db import get_storage_backend
        return get_storage_backend
    raise AttributeError(f"module 'fishcart' has no attribute '{name}'")
