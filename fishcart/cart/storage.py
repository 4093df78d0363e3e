"""Cart persistence adapter: the only code that reads or writes the snapshot."""
import json
from typing import Optional

from fishcart.db import StorageBackend, StorageKeys, get_storage_backend
from fishcart.errors import CartDecodeError, StorageError
from fishcart.logging import get_logger
from .models import Cart

logger = get_logger(__name__)


class CartStorage:
    """
    Mirrors a Cart to a single key of a key-value backend.

    The snapshot is a JSON array of line item records and is always
    overwritten whole. Nothing here raises: read problems come back as
    None, write problems as False, and both are logged.
    """

    def __init__(self, backend: Optional[StorageBackend] = None, key: str = StorageKeys.CART):
        self._backend = backend
        self.key = key

    @property
    def backend(self) -> StorageBackend:
        """Get backend (lazy initialization)."""
        if self._backend is None:
            self._backend = get_storage_backend()
        return self._backend

    def load(self) -> Optional[Cart]:
        """Read the persisted cart; None if missing or undecodable."""
        try:
            data = self.backend.get(self.key)
        except (StorageError, ValueError) as e:
            logger.warning(f"Failed to read cart snapshot: {e}")
            return None

        if data is None:
            return None

        try:
            return Cart.from_list(json.loads(data))
        except (ValueError, OverflowError, RecursionError, TypeError, CartDecodeError) as e:
            logger.warning(f"Corrupted cart snapshot under {self.key}: {e}")
            return None

    def save(self, cart: Cart) -> bool:
        """Overwrite the snapshot with the full cart."""
        try:
            self.backend.set(self.key, json.dumps(cart.to_list()))
            return True
        except (StorageError, ValueError) as e:
            logger.error(f"Failed to save cart snapshot: {e}")
            return False

    def clear(self) -> bool:
        """
        Delete the snapshot key.

        Reset hook for maintenance and sign-out flows; CartStore.clear keeps
        the key and writes an empty snapshot instead.
        """
        try:
            self.backend.delete(self.key)
            return True
        except (StorageError, ValueError) as e:
            logger.error(f"Failed to clear cart snapshot: {e}")
            return False
