"""
Crawl-scoped set of already seen URLs.
"""
from __future__ import annotations

import threading
from typing import Set

__all__ = ("VisitedSet",)


class VisitedSet:
    """Concurrency-safe set exposed only through an atomic test-and-set."""

    def __init__(self) -> None:
        self._seen: Set[str] = set()
        self._lock = threading.Lock()

    def check_and_mark(self, url: str) -> bool:
        """Mark *url* as seen; True only for the first caller that sees it."""
        with self._lock:
            if url in self._seen:
                return False
            self._seen.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
