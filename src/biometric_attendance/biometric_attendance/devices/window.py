from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Hashable

from ..core.constants import DEFAULT_DEDUP_WINDOW_SIZE


class RecentEventWindow:
    """Bounded set of recently handled event keys, oldest evicted first.

    Advisory only: it is process-local and forgets everything on restart. The
    attendance store is what guarantees an event is recorded at most once.
    """

    def __init__(self, capacity: int = DEFAULT_DEDUP_WINDOW_SIZE):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = int(capacity)
        self._keys: "OrderedDict[Hashable, None]" = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def remember(self, key: Hashable) -> bool:
        """Add a key. Returns False when it was already present."""
        with self._lock:
            if key in self._keys:
                return False
            self._keys[key] = None
            while len(self._keys) > self._capacity:
                self._keys.popitem(last=False)
            return True

    def reset(self) -> None:
        with self._lock:
            self._keys.clear()
