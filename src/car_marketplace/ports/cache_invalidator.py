from __future__ import annotations

from abc import ABC, abstractmethod


SAVED_CARS_PATH = "/saved-cars"


class CacheInvalidator(ABC):
    """Port for signalling that cached views of a path are stale."""

    @abstractmethod
    def invalidate(self, path: str) -> None: ...
