"""Cart package: ledger, persistence, pricing, store and views."""
from .models import CartItem, CartItemInput
from .ledger import Ledger, EMPTY_LEDGER
from .persistence import CartPersistence
from .pricing import Fulfillment, PricingSnapshot, price_ledger
from .storage import CartStorage, FileStorage, MemoryStorage, RedisStorage, get_storage
from .store import CartSnapshot, CartStore, get_cart_store, reset_cart_store

__all__ = [
    "CartItem",
    "CartItemInput",
    "Ledger",
    "EMPTY_LEDGER",
    "CartPersistence",
    "Fulfillment",
    "PricingSnapshot",
    "price_ledger",
    "CartStorage",
    "FileStorage",
    "MemoryStorage",
    "RedisStorage",
    "get_storage",
    "CartSnapshot",
    "CartStore",
    "get_cart_store",
    "reset_cart_store",
]
