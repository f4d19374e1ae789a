from __future__ import annotations

import threading
from collections import Counter
from typing import Dict, Protocol

ORDERS_RECEIVED = "orders.received"
ORDERS_PROCESSED = "orders.processed"
ORDERS_FAILED = "orders.failed"


class MetricsSink(Protocol):
    """Fire-and-forget counters. Implementations must never raise from `increment`."""

    def increment(self, name: str, amount: int = 1) -> None:
        ...


class InMemoryMetrics(MetricsSink):
    """Thread-safe named counters kept in process memory."""

    def __init__(self) -> None:
        self._counts: Counter = Counter()
        self._lock = threading.Lock()

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self._counts[name] += amount

    def value(self, name: str) -> int:
        with self._lock:
            return self._counts[name]

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)
