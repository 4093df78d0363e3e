"""Catalog records consumed by the cart."""
from .models import Product, parse_quantity, UNKNOWN_FISHERMAN

__all__ = ["Product", "parse_quantity", "UNKNOWN_FISHERMAN"]
