import itertools
import threading
import uuid
from collections import defaultdict


class UuidIdGenerator:
    """Type-prefixed random ids, e.g. `order_3f2a9c1b7d4e8f60`."""

    def __call__(self, prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex[:16]}"


class SequentialIdGenerator:
    """Type-prefixed monotonic ids, e.g. `order_001`, `order_002`."""

    def __init__(self):
        self._counters = defaultdict(lambda: itertools.count(1))
        self._lock = threading.Lock()

    def __call__(self, prefix: str) -> str:
        with self._lock:
            return f"{prefix}_{next(self._counters[prefix]):03d}"
