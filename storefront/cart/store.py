"""Cart store: the single writable owner of one shopper's cart state."""
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from storefront.logging import get_logger, sanitize_id_for_logging
from .ledger import Ledger, EMPTY_LEDGER
from .models import CartItem, CartItemInput
from .persistence import CartPersistence
from .pricing import Fulfillment, PricingSnapshot, price_ledger, subtotal
from .storage import CART_STORAGE_KEY, CartStorage, get_storage

logger = get_logger(__name__)


@dataclass(frozen=True)
class CartSnapshot:
    """Read-only view of the store handed to subscribers."""
    ledger: Ledger
    is_panel_open: bool

    @property
    def items(self) -> Tuple[CartItem, ...]:
        return self.ledger.items

    @property
    def item_count(self) -> int:
        """Total units, not distinct lines."""
        return sum(item.quantity for item in self.ledger)

    @property
    def total(self) -> Decimal:
        return subtotal(self.ledger)

    @property
    def is_empty(self) -> bool:
        return len(self.ledger) == 0

    def pricing(self, fulfillment: Fulfillment = Fulfillment.DELIVERY) -> PricingSnapshot:
        return price_ledger(self.ledger, fulfillment)


Listener = Callable[[CartSnapshot], None]


class CartStore:
    """
    Owns the ledger and the panel-open flag.

    Features:
    - Write-through persistence: each ledger mutation saves exactly once
    - Panel visibility is ephemeral and never persisted
    - Subscribers get a fresh snapshot after every change
    """

    def __init__(self, persistence: CartPersistence):
        self.persistence = persistence
        self._ledger: Ledger = persistence.load()
        self._is_panel_open = False
        self._listeners: List[Listener] = []
        if len(self._ledger):
            logger.info(f"Cart rehydrated with {len(self._ledger)} lines")

    # ==================== READS ====================

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def items(self) -> Tuple[CartItem, ...]:
        return self._ledger.items

    @property
    def is_panel_open(self) -> bool:
        return self._is_panel_open

    @property
    def item_count(self) -> int:
        return self.snapshot().item_count

    @property
    def total(self) -> Decimal:
        return subtotal(self._ledger)

    def pricing(self, fulfillment: Fulfillment = Fulfillment.DELIVERY) -> PricingSnapshot:
        return price_ledger(self._ledger, fulfillment)

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(ledger=self._ledger, is_panel_open=self._is_panel_open)

    # ==================== SUBSCRIPTIONS ====================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Cart listener failed")

    # ==================== LEDGER MUTATIONS ====================

    def add(self, item: Union[CartItemInput, Mapping[str, Any]]) -> None:
        """Add one unit. Does not open the panel."""
        updated = self._ledger.upsert_increment(item)
        if updated is self._ledger:
            logger.warning("Ignored add-to-cart without an item id")
        self._commit(updated)

    def remove(self, item_id: str) -> None:
        self._commit(self._ledger.remove(item_id))

    def set_quantity(self, item_id: str, quantity: Any) -> None:
        """Set a line's quantity; below 1 removes the line."""
        updated = self._ledger.set_quantity(item_id, quantity)
        if item_id not in updated and item_id in self._ledger:
            logger.debug(f"Quantity {quantity!r} removed line {sanitize_id_for_logging(item_id)}")
        self._commit(updated)

    def clear(self) -> None:
        self._commit(EMPTY_LEDGER)

    def _commit(self, ledger: Ledger) -> None:
        self._ledger = ledger
        self.persistence.save(ledger)
        self._notify()

    # ==================== PANEL ====================

    def open_panel(self) -> None:
        self.set_panel_open(True)

    def close_panel(self) -> None:
        self.set_panel_open(False)

    def set_panel_open(self, is_open: bool) -> None:
        self._is_panel_open = bool(is_open)
        self._notify()


# Cart id of the single in-process shopper (views, start-up rehydration)
DEFAULT_CART_ID = "default"

# Least recently used stores are dropped past this; they rehydrate on next use
MAX_CACHED_STORES = 1024

_storage: Optional[CartStorage] = None
_cart_stores: "OrderedDict[str, CartStore]" = OrderedDict()


def storage_key_for(cart_id: str) -> str:
    """Storage key holding `cart_id`'s ledger."""
    if cart_id == DEFAULT_CART_ID:
        return CART_STORAGE_KEY
    return f"{CART_STORAGE_KEY}-{cart_id}"


def get_cart_store(cart_id: str = DEFAULT_CART_ID) -> CartStore:
    """Get the CartStore for `cart_id`, rehydrated from the configured storage."""
    global _storage
    store = _cart_stores.get(cart_id)
    if store is not None:
        _cart_stores.move_to_end(cart_id)
        return store

    if _storage is None:
        _storage = get_storage()
    store = CartStore(CartPersistence(_storage, key=storage_key_for(cart_id)))
    _cart_stores[cart_id] = store
    if len(_cart_stores) > MAX_CACHED_STORES:
        _cart_stores.popitem(last=False)
    return store


def reset_cart_store() -> None:
    """Drop cached stores and storage so the next call rehydrates from scratch."""
    global _storage
    _storage = None
    _cart_stores.clear()
