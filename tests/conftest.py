"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Set test environment variables before fishcart.db reads them
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from fishcart.cart import LineItem, CartStorage, CartStore  # noqa: E402
from fishcart.db import MemoryStorage  # noqa: E402


@pytest.fixture
def memory_backend():
    """Empty in-memory key-value backend"""
    return MemoryStorage()


@pytest.fixture
def cart_storage(memory_backend):
    """Persistence adapter over the memory backend"""
    return CartStorage(memory_backend, key="test_cart")


@pytest.fixture
def store(cart_storage):
    """Cart store with a fresh, empty snapshot"""
    return CartStore(cart_storage)


@pytest.fixture
def failing_backend():
    """Backend whose every call fails like an unavailable medium"""
    from fishcart.errors import StorageError

    backend = Mock()
    backend.get.side_effect = StorageError("quota exceeded")
    backend.set.side_effect = StorageError("quota exceeded")
    backend.delete.side_effect = StorageError("quota exceeded")
    return backend


@pytest.fixture
def make_item():
    """Factory for line items with sensible defaults"""
    def _make(product_id="p1", quantity=1, price_per_kg=12.0, **overrides):
        data = {
            "product_id": product_id,
            "species": "Ahven",
            "form": "Fileoitu",
            "price_per_kg": price_per_kg,
            "quantity": quantity,
            "fisherman_name": "Matti Meikäläinen",
            "available_quantity": 10,
        }
        data.update(overrides)
        return LineItem(**data)
    return _make


@pytest.fixture
def sample_record():
    """Persisted line item record"""
    return {
        "productId": "p1",
        "species": "Kuha",
        "form": "Kokonainen",
        "pricePerKg": 18.5,
        "quantity": 2,
        "fishermanName": "Liisa Virtanen",
        "availableQuantity": 7.5,
    }


@pytest.fixture
def sample_product():
    """Catalog row as returned by the backend"""
    return {
        "id": "prod-123",
        "species": "Siika",
        "form": "Perattu",
        "price_per_kg": 22.0,
        "available_quantity": 4.5,
        "catch": {"catch_date": "2025-09-04"},
        "fisherman_profile": {"user": {"full_name": "Pekka Kalastaja"}},
        "created_at": "2025-09-04T10:00:00Z",
    }
