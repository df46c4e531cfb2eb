# templink/core/cache.py
"""
Root-name keyed cache of composed template sets.

Entries are keyed by the root template name only. Helpers supplied on the
call that populated an entry are baked into it; later calls with different
call-scoped helpers still get the stored set.
"""
import threading
from typing import Dict, Optional

import structlog

from .composed import ComposedSet

log = structlog.get_logger(__name__)

class TemplateCache:
    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, ComposedSet] = {}

    def get(self, name: str) -> Optional[ComposedSet]:
        with self._lock:
            return self._entries.get(name)

    def store(self, name: str, composed: ComposedSet) -> ComposedSet:
        """Stores `composed` unless another caller got there first; returns the entry kept."""
        with self._lock:
            kept = self._entries.setdefault(name, composed)
        if kept is not composed:
            log.debug("template_cache_store_lost_race", name=name)
        return kept

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries = {}
        log.debug("template_cache_cleared", entries_dropped=dropped)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
