from __future__ import annotations

import itertools
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from ..interface import InventoryStore, OrderStore, OrderTransaction
from ..models import InventoryRecord, Order
from ...exceptions import StoreError


class _InMemoryOrderTransaction(OrderTransaction):
    def __init__(self, store: InMemoryOrderStore) -> None:
        self._store = store
        # order id -> stored image before this transaction first wrote it (None if created here)
        self._before: Dict[int, Optional[Order]] = {}

    def persist(self, order: Order) -> Order:
        if order.id is not None and order.id not in self._before:
            self._before[order.id] = self._store.find_by_id(order.id)
        saved = self._store.persist(order)
        self._before.setdefault(saved.id, None)
        return saved

    def find_by_id(self, order_id: int) -> Optional[Order]:
        return self._store.find_by_id(order_id)

    def rollback(self) -> None:
        for order_id, before in self._before.items():
            self._store._restore(order_id, before)


class InMemoryOrderStore(OrderStore):
    """
    Dict-backed order store.
    - Identifiers are sequential integers starting at 1.
    - Orders are deep-copied on the way in and out, and every write happens
      under a lock, so readers never see a half-applied update.
    """

    def __init__(self) -> None:
        self._orders: Dict[int, Order] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def persist(self, order: Order) -> Order:
        with self._lock:
            if order.id is None:
                order = order.model_copy(update={"id": next(self._ids)})
            elif order.id not in self._orders:
                raise StoreError(f"Order {order.id} does not exist")
            self._orders[order.id] = order.model_copy(deep=True)
        return order.model_copy(deep=True)

    def find_by_id(self, order_id: int) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
        return order.model_copy(deep=True) if order is not None else None

    def list_all(self) -> List[Order]:
        with self._lock:
            orders = [self._orders[k] for k in sorted(self._orders)]
        return [o.model_copy(deep=True) for o in orders]

    @contextmanager
    def transaction(self) -> Iterator[OrderTransaction]:
        tx = _InMemoryOrderTransaction(self)
        try:
            yield tx
        except Exception:
            tx.rollback()
            raise

    def _restore(self, order_id: int, image: Optional[Order]) -> None:
        with self._lock:
            if image is None:
                self._orders.pop(order_id, None)
            else:
                self._orders[order_id] = image.model_copy(deep=True)


class InMemoryInventoryStore(InventoryStore):
    """Dict-backed inventory store keyed by product code."""

    def __init__(self) -> None:
        self._records: Dict[str, InventoryRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_by_product_code(self, product_code: str) -> Optional[InventoryRecord]:
        with self._lock:
            record = self._records.get(product_code)
        return record.model_copy() if record is not None else None

    def persist(self, record: InventoryRecord) -> InventoryRecord:
        with self._lock:
            existing = self._records.get(record.product_code)
            if existing is not None:
                record = record.model_copy(update={"id": existing.id})
            else:
                record = record.model_copy(update={"id": next(self._ids)})
            self._records[record.product_code] = record.model_copy()
        return record.model_copy()

    def list_all(self) -> List[InventoryRecord]:
        with self._lock:
            return [r.model_copy() for r in self._records.values()]

    def count(self) -> int:
        with self._lock:
            return len(self._records)
