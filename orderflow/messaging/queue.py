from __future__ import annotations

import queue
import threading
from typing import Optional, Protocol

from ..exceptions import PublishError
from ..logging import get_logger


class OrderPublisher(Protocol):
    """Hands an order identifier, encoded as a string, to the fulfillment queue."""

    def publish(self, payload: str) -> None:
        ...


class InProcessOrderQueue(OrderPublisher):
    """
    In-process fulfillment queue.
    - FIFO, one string payload per message, at-most-once delivery.
    - `publish` raises PublishError once the queue has been closed.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: queue.Queue = queue.Queue(maxsize)
        self._closed = threading.Event()
        self.logger = get_logger(__name__)

    def publish(self, payload: str) -> None:
        if self._closed.is_set():
            raise PublishError(f"Order queue is closed, cannot publish {payload!r}")
        self._queue.put(payload)
        self.logger.debug(f"Published {payload!r} to the order queue")

    def get(self, timeout: Optional[float] = None) -> Optional[str]:
        """Take the next payload, or None if nothing arrives within `timeout` seconds."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def task_done(self) -> None:
        self._queue.task_done()

    def join(self) -> None:
        """Block until every published payload has been taken and marked done."""
        self._queue.join()

    def close(self) -> None:
        self._closed.set()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def qsize(self) -> int:
        return self._queue.qsize()
