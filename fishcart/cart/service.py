"""Cart store: the single owner of the in-memory cart."""
from typing import Iterable, List, Optional

from fishcart.logging import get_logger, sanitize_id_for_logging
from .models import Cart, LineItem, Number, check_quantity
from .storage import CartStorage

logger = get_logger(__name__)


class CartStore:
    """
    Owns the authoritative Cart and mirrors it to storage.

    Features:
    - Hydrates once from the persisted snapshot on first use
    - Merges repeated additions of the same product
    - Drops items whose quantity is set to zero or below
    - Saves the full cart at the end of every mutation, in call order

    Usage:
        store = get_cart_store()
        store.add(product.to_line_item(quantity=1.5))
        store.update_quantity(product.id, 2)
        total = store.total_price()
    """

    def __init__(self, storage: Optional[CartStorage] = None):
        self.storage = storage or CartStorage()
        self._cart: Optional[Cart] = None  # Lazy initialization
        self._removed_items: List[str] = []
        self.last_save_failed = False

    def _get_cart(self) -> Cart:
        """Get the owned cart, loading the persisted snapshot on first access."""
        if self._cart is None:
            loaded = self.storage.load()
            if loaded is None:
                logger.info("No usable cart snapshot, starting with an empty cart")
                loaded = Cart()
            else:
                logger.info(f"Restored cart with {loaded.count} items")
            self._cart = loaded
        return self._cart

    def _persist(self) -> None:
        # The in-memory cart stays authoritative when the write fails
        self.last_save_failed = not self.storage.save(self._get_cart())
        if self.last_save_failed:
            logger.warning("Cart changes are not persisted for this session")

    # =====================================================
    # QUERIES
    # =====================================================
    @property
    def items(self) -> List[LineItem]:
        """Snapshot of the line items in cart order."""
        return [item.with_quantity(item.quantity) for item in self._get_cart().items]

    def snapshot(self) -> Cart:
        """Detached copy of the cart for checkout and other readers."""
        return Cart(items=self.items)

    @property
    def removed_items(self) -> List[str]:
        """Labels of the items dropped by the last remove_many call."""
        return list(self._removed_items)

    def get(self, product_id: str) -> Optional[LineItem]:
        item = self._get_cart().find(product_id)
        return item.with_quantity(item.quantity) if item else None

    def contains(self, product_id: str) -> bool:
        """Check if a product is already in the cart."""
        return self._get_cart().index_of(product_id) >= 0

    def count(self) -> int:
        """Number of distinct line items."""
        return self._get_cart().count

    def total_price(self) -> float:
        """Sum of unit price * quantity over all items, unrounded."""
        return self._get_cart().total_price

    # =====================================================
    # COMMANDS
    # =====================================================
    def add(self, item: LineItem) -> None:
        """
        Add an item, or merge it into an existing entry with the same id.

        On merge only the quantity changes; price, seller and the other
        fields of the existing entry are kept.

        Raises:
            InvalidLineItem: empty id or negative price/availability
            InvalidQuantity: quantity not a finite positive number
        """
        item.validate()

        cart = self._get_cart()
        index = cart.index_of(item.product_id)

        if index >= 0:
            existing = cart.items[index]
            new_quantity = existing.quantity + item.quantity
            logger.info(
                f"Product {sanitize_id_for_logging(item.product_id)} already in cart, "
                f"quantity {existing.quantity} -> {new_quantity}"
            )
            cart.items[index] = existing.with_quantity(new_quantity)
        else:
            logger.info(f"Adding product {sanitize_id_for_logging(item.product_id)} to cart")
            cart.items.append(item.with_quantity(item.quantity))

        self._persist()

    def update_quantity(self, product_id: str, quantity: Number) -> None:
        """
        Set the quantity of an item in place.

        A quantity of zero or below removes the item. Unknown ids are ignored.

        Raises:
            InvalidQuantity: quantity is not a finite number
        """
        if isinstance(quantity, (int, float)) and not isinstance(quantity, bool) and quantity <= 0:
            self.remove(product_id)
            return

        check_quantity(quantity, product_id=product_id)

        cart = self._get_cart()
        index = cart.index_of(product_id)
        if index < 0:
            return

        cart.items[index] = cart.items[index].with_quantity(quantity)
        self._persist()

    def remove(self, product_id: str) -> None:
        """Remove a single item; unknown ids are ignored."""
        cart = self._get_cart()
        index = cart.index_of(product_id)
        if index < 0:
            return

        logger.info(f"Removing product {sanitize_id_for_logging(product_id)} from cart")
        del cart.items[index]
        self._persist()

    def remove_many(self, product_ids: Iterable[str]) -> List[str]:
        """
        Remove every item whose id is listed and remember their labels.

        Used when products sell out between browsing and checkout.

        Returns:
            Labels of the removed items, also exposed as removed_items
        """
        ids = set(product_ids)
        cart = self._get_cart()

        removed = [item for item in cart.items if item.product_id in ids]
        self._removed_items = [item.label for item in removed]

        if removed:
            cart.items = [item for item in cart.items if item.product_id not in ids]
            logger.info(f"Removed {len(removed)} sold out items from cart")
            self._persist()

        return list(self._removed_items)

    def clear_removed_items(self) -> None:
        """Forget the labels recorded by remove_many."""
        self._removed_items = []

    def clear(self) -> None:
        """Empty the cart and persist the empty snapshot."""
        self._get_cart().items = []
        self._persist()

    def reload(self) -> None:
        """Drop in-memory state and hydrate again from storage."""
        self._cart = None
        self._get_cart()


# Singleton instance
_cart_store: Optional[CartStore] = None


def get_cart_store() -> CartStore:
    """Get CartStore singleton."""
    global _cart_store
    if _cart_store is None:
        _cart_store = CartStore()
    return _cart_store
