from __future__ import annotations

import threading
from typing import Callable, List

from ..logging import get_logger
from .queue import InProcessOrderQueue


class DeliveryLoop:
    """Pool of worker threads feeding queued payloads to a handler.

    Each worker takes one payload at a time, so different orders are handled in
    parallel. An exception escaping the handler is logged and the message is
    dropped; there is no redelivery.
    """

    def __init__(
        self,
        source: InProcessOrderQueue,
        handler: Callable[[str], None],
        workers: int = 4,
        poll_interval: float = 0.1,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self._source = source
        self._handler = handler
        self._workers = workers
        self._poll_interval = poll_interval
        self._stopping = threading.Event()
        self._threads: List[threading.Thread] = []
        self.logger = get_logger(__name__)

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._threads)

    def start(self) -> None:
        if self.running:
            return
        self._stopping.clear()
        self._threads = [
            threading.Thread(target=self._run, name=f"delivery-{i + 1}", daemon=True)
            for i in range(self._workers)
        ]
        for t in self._threads:
            t.start()
        self.logger.info(f"Delivery loop started with {self._workers} workers")

    def drain(self) -> None:
        """Block until every queued payload has been handled."""
        self._source.join()

    def stop(self, timeout: float = None) -> None:
        """Signal the workers to exit and wait for them. Payloads still queued stay queued."""
        self._stopping.set()
        for t in self._threads:
            t.join(timeout)
        self._threads = []
        self.logger.info("Delivery loop stopped")

    def _run(self) -> None:
        while not self._stopping.is_set():
            payload = self._source.get(timeout=self._poll_interval)
            if payload is None:
                continue
            try:
                self._handler(payload)
            except Exception:
                self.logger.exception(f"Unhandled error delivering {payload!r}, message dropped")
            finally:
                self._source.task_done()
