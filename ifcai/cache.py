"""In-memory result caches with a bounded FIFO eviction policy.

Two caches share one implementation:

* :class:`ResultCache` — ``ParameterRecord -> GeneratedDocument``, keyed
  by the record's canonical serialisation so value-equal records collide.
* :class:`ExtractionCache` — ``description text -> ParameterRecord``,
  keyed by the normalised text so repeated descriptions skip the model.

Eviction drops the oldest-inserted entries first.  Replacing an existing
key keeps its original insertion position.  All operations take a lock;
a get-then-put race may regenerate a value twice, and the last writer
wins.
"""

from __future__ import annotations

import logging
import re
import threading
from collections import OrderedDict
from typing import TYPE_CHECKING, Generic, Hashable, TypeVar

from ifcai import config

if TYPE_CHECKING:
    from ifcai.extraction.schema import ParameterRecord
    from ifcai.models import GeneratedDocument

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

_WS_RE = re.compile(r"\s+")


class FifoCache(Generic[K, V]):
    """Bounded insertion-ordered cache.

    Parameters
    ----------
    max_entries:
        Default bound applied by :meth:`evict_if_over`.
    """

    def __init__(self, max_entries: int = config.DEFAULT_CACHE_SIZE) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: OrderedDict[Hashable, V] = OrderedDict()
        self._lock = threading.Lock()

    def key_for(self, item: K) -> Hashable:
        """Derive the storage key for *item*.  Subclasses override."""
        return item  # type: ignore[return-value]

    def get(self, item: K) -> V | None:
        key = self.key_for(item)
        with self._lock:
            value = self._entries.get(key)
        if value is None:
            logger.debug("%s miss", type(self).__name__)
        else:
            logger.debug("%s hit", type(self).__name__)
        return value

    def put(self, item: K, value: V) -> None:
        key = self.key_for(item)
        with self._lock:
            self._entries[key] = value

    def evict_if_over(self, max_entries: int | None = None) -> int:
        """Evict oldest entries until at most *max_entries* remain.

        Returns the number of evicted entries.
        """
        limit = self.max_entries if max_entries is None else max_entries
        evicted = 0
        with self._lock:
            while len(self._entries) > limit:
                self._entries.popitem(last=False)
                evicted += 1
        if evicted:
            logger.info("Evicted %d entries from %s", evicted, type(self).__name__)
        return evicted

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, item: K) -> bool:
        key = self.key_for(item)
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class ResultCache(FifoCache["ParameterRecord", "GeneratedDocument"]):
    """Generated documents keyed by parameter record."""

    def key_for(self, item: ParameterRecord) -> str:
        return item.cache_key()


class ExtractionCache(FifoCache[str, "ParameterRecord"]):
    """Extracted parameters keyed by the normalised description."""

    def key_for(self, item: str) -> str:
        return normalize_text(item)


def normalize_text(text: str) -> str:
    """Trim, lower-case, and collapse whitespace runs."""
    return _WS_RE.sub(" ", text.strip().lower())
