from __future__ import annotations

from contextlib import AbstractContextManager
from typing import List, Optional, Protocol

from .models import InventoryRecord, Order


# ---- Order store protocol ----

class OrderTransaction(Protocol):
    """
    Unit of work scoped to the orders one caller touches.

    Writes are visible as soon as `persist` returns. Leaving the transaction
    with an exception restores every touched order to its pre-transaction image.
    """

    def persist(self, order: Order) -> Order:
        ...

    def find_by_id(self, order_id: int) -> Optional[Order]:
        ...


class OrderStore(Protocol):
    """
    Storage contract for orders.

    - `persist` assigns an identifier on first write and replaces the stored
      record afterwards. A single write is atomic.
    - Returned orders are copies; mutating them has no effect until persisted.
    """

    def persist(self, order: Order) -> Order:
        """Store the order and return it with its identifier."""
        ...

    def find_by_id(self, order_id: int) -> Optional[Order]:
        """Get an order by identifier, or None."""
        ...

    def list_all(self) -> List[Order]:
        """List every order in ascending identifier order."""
        ...

    def transaction(self) -> AbstractContextManager[OrderTransaction]:
        """Open a transaction that commits on normal exit and rolls back on error."""
        ...


# ---- Inventory store protocol ----

class InventoryStore(Protocol):
    """Storage contract for inventory records, keyed by product code."""

    def find_by_product_code(self, product_code: str) -> Optional[InventoryRecord]:
        """Get the record for a product code, or None when the product is unknown."""
        ...

    def persist(self, record: InventoryRecord) -> InventoryRecord:
        """Insert or update the record with the same product code."""
        ...

    def list_all(self) -> List[InventoryRecord]:
        """List every inventory record."""
        ...

    def count(self) -> int:
        """Number of inventory records."""
        ...
