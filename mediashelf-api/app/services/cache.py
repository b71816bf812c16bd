# app/services/cache.py
# Folder payload cache: bounded LRU keyed by normalized relative path.
from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

from app.schemas.media import FolderPayload


@dataclass(frozen=True)
class CacheEntry:
    mtime_ns: int           # directory st_mtime_ns at scan time
    data: FolderPayload


class FolderCache:
    """
    Thread-safe LRU. Every operation holds one lock, so a put() is atomic;
    two scans of the same folder racing to store are last-writer-wins.
    """

    def __init__(self, capacity: int = 512) -> None:
        if capacity < 1:
            raise ValueError("cache capacity must be >= 1")
        self.capacity = capacity
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
            return entry

    def lookup(self, key: str, mtime_ns: int) -> Optional[FolderPayload]:
        """Payload for key if it was stored for this exact directory mtime."""
        entry = self.get(key)
        if entry is None or entry.mtime_ns != mtime_ns:
            return None
        return entry.data

    def put(self, key: str, mtime_ns: int, data: FolderPayload) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(mtime_ns=mtime_ns, data=data)
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
