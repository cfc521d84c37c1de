"""Cache invalidator that defers signals until the request transaction commits."""

from __future__ import annotations

import logging

from sqlalchemy import event
from sqlalchemy.orm import Session

from car_marketplace.ports.cache_invalidator import CacheInvalidator

logger = logging.getLogger(__name__)


class AfterCommitCacheInvalidator(CacheInvalidator):
    """
    Queues invalidated paths on a session and forwards them once it commits.

    A subscriber that refetches on the signal must never read the
    pre-commit state, so nothing reaches ``target`` while the write is
    still in flight. A rollback drops the queue.
    """

    def __init__(self, session: Session, target: CacheInvalidator) -> None:
        """
        Args:
            session: Per-request session whose commit releases the signals
            target: Invalidator that actually publishes (shared across requests)
        """
        self._target = target
        self._pending: list[str] = []
        event.listen(session, "after_commit", self._publish)
        event.listen(session, "after_rollback", self._discard)

    def invalidate(self, path: str) -> None:
        if path not in self._pending:
            self._pending.append(path)

    def _publish(self, session: Session) -> None:
        pending, self._pending = self._pending, []
        for path in pending:
            self._target.invalidate(path)

    def _discard(self, session: Session) -> None:
        if self._pending:
            logger.info("Cache invalidation dropped on rollback", extra={"paths": self._pending})
        self._pending = []
