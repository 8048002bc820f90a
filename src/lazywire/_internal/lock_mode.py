from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for first-time construction of cached values.

    Pass one of these values as ``Container(lock_mode=...)``. The override
    table is immutable after construction and never needs locking; only the
    instance cache is guarded.
    """

    THREAD = "thread"
    """Guard construction with one ``threading.Lock`` per key.

    Concurrent callers resolving the same uncached key block until the first
    caller finishes, then observe the value it stored. Factories run at most
    once per container and key.
    """

    NONE = "none"
    """Disable locking for containers used from a single thread.

    The cache still keeps the first stored value, so every caller observes the
    same instance, but racing threads may run a factory more than once.
    """
