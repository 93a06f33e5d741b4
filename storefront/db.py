"""
Storage Clients

Provides the singleton Upstash Redis client used by the Redis cart backend,
plus key prefixes and TTLs for cart storage.
"""

import os
from typing import Optional

from upstash_redis import Redis

from storefront.errors import ERROR_REDIS_NOT_CONFIGURED


# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    The cart writes through on the same turn as the mutation, so only the
    synchronous client is used.
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError(ERROR_REDIS_NOT_CONFIGURED)
        _redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    CART = "cart:"  # cart:{storage_key}

    @staticmethod
    def cart_key(storage_key: str) -> str:
        return f"{RedisKeys.CART}{storage_key}"


class TTL:
    """Time-to-live constants for Redis keys (seconds)."""

    CART = 604800  # 7 days
