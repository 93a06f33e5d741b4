"""
Persistence Adapter

Durable round-trip of the ledger under a single key. This is the only place
that deals with untrusted stored payloads: everything it returns is a
well-typed Ledger.
"""
import json
from typing import Any, List

from storefront.errors import ERROR_STORAGE_CORRUPT, ERROR_STORAGE_READ, ERROR_STORAGE_WRITE
from storefront.logging import get_logger
from .ledger import Ledger, EMPTY_LEDGER
from .models import CartItem
from .storage import CartStorage, CART_STORAGE_KEY

logger = get_logger(__name__)


class CartPersistence:
    """Write-through JSON persistence for a Ledger."""

    def __init__(self, storage: CartStorage, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> Ledger:
        """Rehydrate the ledger. Never raises."""
        try:
            raw = self.storage.get(self.key)
        except UnicodeDecodeError as e:
            logger.warning(f"{ERROR_STORAGE_CORRUPT} ({self.key}): {e}")
            self._discard()
            return EMPTY_LEDGER
        except Exception as e:
            logger.error(f"{ERROR_STORAGE_READ}: {e}")
            return EMPTY_LEDGER

        if raw is None or raw == "":
            return EMPTY_LEDGER

        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.warning(f"{ERROR_STORAGE_CORRUPT} ({self.key}): {e}")
            self._discard()
            return EMPTY_LEDGER

        if not isinstance(payload, list):
            logger.warning(f"{ERROR_STORAGE_CORRUPT} ({self.key}): expected a list, got {type(payload).__name__}")
            self._discard()
            return EMPTY_LEDGER

        ledger = Ledger(normalize_entries(payload))
        if len(ledger) != len(payload):
            logger.info(f"Dropped {len(payload) - len(ledger)} unreadable cart entries")
        return ledger

    def save(self, ledger: Ledger) -> bool:
        """Serialize and write the ledger. Failures are logged, never raised."""
        try:
            self.storage.set(self.key, dump_ledger(ledger))
            return True
        except Exception as e:
            logger.error(f"{ERROR_STORAGE_WRITE}: {e}")
            return False

    def _discard(self) -> None:
        try:
            self.storage.delete(self.key)
        except Exception as e:
            logger.error(f"Failed to clear corrupted cart: {e}")


def normalize_entries(payload: List[Any]) -> List[CartItem]:
    """Turn raw stored entries into CartItems, skipping records without an id."""
    items = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        try:
            items.append(CartItem.from_dict(entry))
        except KeyError:
            continue
    return items


def dump_ledger(ledger: Ledger) -> str:
    return json.dumps([item.to_dict() for item in ledger], ensure_ascii=False)
