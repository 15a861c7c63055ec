"""
Memoization table for resolution results.

Answers are computed on demand and never invalidated: the metamodel is
immutable for the lifetime of a resolver, so a stored answer stays correct.
"""

import threading
from typing import Any, Callable, Dict, Hashable

from metaresolver.logging_config import logger

# Marks "not yet computed". None is a legitimate cached answer (not found).
_MISSING = object()


class MemoCache:
    """
    Lazily populated key -> answer table.

    Reads are lock-free. On a miss the loader runs outside the lock, so it may
    recursively read this same cache for other keys. The result is stored
    first-write-wins and the stored value is returned; concurrent misses on the
    same key may compute twice but every caller sees the single stored answer.
    If the loader raises, nothing is stored for that key.
    """

    def __init__(
        self,
        name: str,
        loader: Callable[[Hashable], Any],
        collect_stats: bool = True,
        trace: bool = False,
    ):
        self.name = name
        self._loader = loader
        self._collect_stats = collect_stats
        self._trace = trace
        self._entries: Dict[Hashable, Any] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Any:
        value = self._entries.get(key, _MISSING)
        if value is not _MISSING:
            if self._collect_stats:
                self.hits += 1
            return value

        value = self._loader(key)
        if self._trace:
            logger.debug(f"[{self.name}] resolved {key} -> {value}")

        with self._lock:
            if self._collect_stats:
                self.misses += 1
            return self._entries.setdefault(key, value)

    def is_cached(self, key: Hashable) -> bool:
        """True once an answer (found or not found) is stored for key."""
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> Dict[str, int]:
        """Hit/miss counters; hits are approximate under concurrent access."""
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
        }
