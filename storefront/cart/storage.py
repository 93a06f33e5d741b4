"""
Key/value storage backends for the cart.

All backends are synchronous so a mutation is persisted before the next
event is handled.
"""
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from storefront.db import get_redis_sync, RedisKeys, TTL
from storefront.errors import ERROR_UNKNOWN_STORAGE

CART_STORAGE = os.environ.get("CART_STORAGE", "file")
CART_STORAGE_PATH = os.environ.get("CART_STORAGE_PATH", ".storefront")
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")


class CartStorage:
    """Minimal string key/value contract, shaped like browser local storage."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(CartStorage):
    """In-process storage; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FileStorage(CartStorage):
    """One JSON document per key inside `directory`."""

    def __init__(self, directory: str = CART_STORAGE_PATH):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        safe_key = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in key)
        return self.directory / f"{safe_key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        # Write to a sibling temp file, then swap it in atomically
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class RedisStorage(CartStorage):
    """Upstash Redis storage with a sliding TTL for abandoned carts."""

    def __init__(self, redis=None, ttl: int = TTL.CART):
        self._redis = redis  # Lazy initialization
        self.ttl = ttl

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    def get(self, key: str) -> Optional[str]:
        data = self.redis.get(RedisKeys.cart_key(key))
        if data is None:
            return None
        return data if isinstance(data, str) else str(data)

    def set(self, key: str, value: str) -> None:
        self.redis.set(RedisKeys.cart_key(key), value, ex=self.ttl)

    def delete(self, key: str) -> None:
        self.redis.delete(RedisKeys.cart_key(key))


def get_storage(backend: Optional[str] = None) -> CartStorage:
    """Build the storage backend named by `backend` or CART_STORAGE."""
    name = (backend or CART_STORAGE).lower()
    if name == "file":
        return FileStorage(CART_STORAGE_PATH)
    if name == "redis":
        return RedisStorage()
    if name == "memory":
        return MemoryStorage()
    raise ValueError(f"{ERROR_UNKNOWN_STORAGE}: {name}")
