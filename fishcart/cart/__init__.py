"""Cart package: models, persistence adapter, and store."""
from .models import LineItem, Cart
from .storage import CartStorage
from .service import CartStore, get_cart_store

__all__ = [
    "LineItem",
    "Cart",
    "CartStorage",
    "CartStore",
    "get_cart_store",
]
