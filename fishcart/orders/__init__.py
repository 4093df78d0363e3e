from .serializer import build_cart_items_payload, build_order_summary

__all__ = ["build_cart_items_payload", "build_order_summary"]
