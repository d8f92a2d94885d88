"""
Storage clients.

Provides a singleton sync Upstash Redis client used as the durable cart
store. The cart commit path is synchronous, so the async client is not
needed here.
"""

import os
from typing import Optional

from upstash_redis import Redis

_sync_redis_client: Optional[Redis] = None


def get_redis_sync(url: Optional[str] = None, token: Optional[str] = None) -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Falls back to the standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        url = url or os.environ.get("UPSTASH_REDIS_REST_URL", "")
        token = token or os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")
        if not url or not token:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(url=url, token=token)

    return _sync_redis_client


def reset_redis_client() -> None:
    """Drop the cached client (tests, credential rotation)."""
    global _sync_redis_client
    _sync_redis_client = None

