"""Pytest configuration and fixtures"""
import json
import os

import pytest
from unittest.mock import Mock

# Set test environment variables
os.environ.setdefault("CART_STORAGE", "memory")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from storefront.cart import CartPersistence, CartStore, MemoryStorage


@pytest.fixture
def memory_storage():
    """Empty in-memory storage"""
    return MemoryStorage()


@pytest.fixture
def persistence(memory_storage):
    """Persistence adapter over in-memory storage"""
    return CartPersistence(memory_storage, key="cart")


@pytest.fixture
def store(persistence):
    """Fresh cart store with an empty ledger"""
    return CartStore(persistence)


@pytest.fixture
def jollof():
    """Sample menu item"""
    return {
        "id": "jollof-rice",
        "name": "Jollof Rice",
        "price": 3000,
        "image": "/images/jollof.jpg",
    }


@pytest.fixture
def suya():
    """Sample menu item without an image"""
    return {
        "id": "suya",
        "name": "Beef Suya",
        "price": 1000,
    }


@pytest.fixture
def seeded_storage():
    """Storage holding a legacy payload with string-typed numbers"""
    payload = [
        {"id": "jollof-rice", "name": "Jollof Rice", "price": "3000", "quantity": "2"},
        {"id": "suya", "name": "Beef Suya", "price": 1000, "quantity": 1, "notes": "extra pepper"},
    ]
    return MemoryStorage({"cart": json.dumps(payload)})


@pytest.fixture
def mock_redis():
    """Mock Upstash Redis client"""
    client = Mock()
    client.get.return_value = None
    return client
