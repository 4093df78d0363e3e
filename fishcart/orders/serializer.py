"""Order payload builders for the checkout collaborator."""
from typing import Dict, Any, List

from fishcart.cart.models import Cart
from fishcart.logging import get_logger

logger = get_logger(__name__)


def build_cart_items_payload(cart: Cart) -> List[Dict[str, Any]]:
    """
    Build the cartItems list sent to order creation.

    Args:
        cart: Cart to submit, usually CartStore.snapshot()

    Returns:
        [{"productId": ..., "quantity": ...}, ...] in cart order
    """
    return [
        {"productId": item.product_id, "quantity": item.quantity}
        for item in cart.items
    ]


def build_order_summary(cart: Cart) -> Dict[str, Any]:
    """Full line records plus derived count and total for the checkout page."""
    summary = {
        "items": cart.to_list(),
        "itemCount": cart.count,
        "totalPrice": cart.total_price,
    }
    logger.debug(f"Built order summary with {summary['itemCount']} items")
    return summary
