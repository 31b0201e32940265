"""Per-run registry of URLs reached through marked anchors."""

from __future__ import annotations

import threading


class ScopeRegistry:
    """Set of normalized URLs in derived scope, one level deep.

    One instance lives for exactly one crawl run.  Reads and writes are
    serialized with a lock because anchor processing and admission run on
    different worker threads.
    """

    def __init__(self) -> None:
        self._urls: set[str] = set()
        self._lock = threading.Lock()

    def register(self, url: str) -> bool:
        """Add *url*; return ``True`` if it was not registered before."""
        with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def is_registered(self, url: str) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)
