"""In-memory TTL cache for the catalog listing."""

from __future__ import annotations

import time
from typing import Callable

from motocenter.catalog.models import CatalogItem

DEFAULT_TTL = 1.0


class CatalogCache:
    """Holds the last successful listing and when it was stored.

    The clock is injectable so expiry can be driven from tests.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._items: list[CatalogItem] | None = None
        self._timestamp: float | None = None

    def is_valid(self) -> bool:
        if self._items is None or self._timestamp is None:
            return False
        return (self._clock() - self._timestamp) < self.ttl

    def get(self) -> list[CatalogItem] | None:
        if not self.is_valid():
            return None
        return list(self._items)

    def set(self, items: list[CatalogItem]) -> None:
        self._items = list(items)
        self._timestamp = self._clock()

    def find(self, record_id: str) -> CatalogItem | None:
        for item in self.get() or ():
            if item.id == record_id:
                return item
        return None

    def clear(self) -> None:
        self._items = None
        self._timestamp = None
