"""Redis pub/sub cache invalidator adapter."""

from __future__ import annotations

import json
import logging

import redis
from redis.exceptions import RedisError

from car_marketplace.ports.cache_invalidator import CacheInvalidator

logger = logging.getLogger(__name__)


class RedisCacheInvalidator(CacheInvalidator):
    """
    Publishes invalidated paths on a Redis channel.

    Page caches subscribed to the channel drop their entries for the path.
    A failed publish is logged and never fails the request that triggered it.
    """

    def __init__(self, redis_url: str, channel: str) -> None:
        """
        Initialize Redis cache invalidator.

        Args:
            redis_url: Redis connection URL
            channel: Pub/sub channel receiving invalidation messages
        """
        self._redis_url = redis_url
        self._channel = channel
        self._client: redis.Redis | None = None

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def invalidate(self, path: str) -> None:
        message = json.dumps({"path": path})
        try:
            self._get_client().publish(self._channel, message)
        except RedisError as exc:
            logger.warning(
                "Cache invalidation publish failed",
                extra={"path": path, "channel": self._channel, "error": str(exc)},
            )

    def close(self) -> None:
        """Close Redis connection."""
        if self._client is not None:
            self._client.close()
            self._client = None
