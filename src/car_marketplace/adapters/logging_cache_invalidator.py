"""Cache invalidator that only records the signal in the service log."""

from __future__ import annotations

import logging

from car_marketplace.ports.cache_invalidator import CacheInvalidator

logger = logging.getLogger(__name__)


class LoggingCacheInvalidator(CacheInvalidator):
    """Default adapter when no shared cache is deployed."""

    def invalidate(self, path: str) -> None:
        logger.info("Cache invalidated", extra={"path": path})
