from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ...exceptions import InvalidStatusTransition


class OrderStatus(str, Enum):
    """Fulfillment status of an order. PROCESSED and FAILED are terminal."""
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    PROCESSED = "PROCESSED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.PROCESSED, OrderStatus.FAILED)

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.PROCESSED, OrderStatus.FAILED}),
    OrderStatus.PROCESSED: frozenset(),
    OrderStatus.FAILED: frozenset(),
}


class OrderItem(BaseModel):
    """A line item embedded in an order."""
    model_config = ConfigDict(frozen=True)

    product_code: str = Field(description="Product code the line refers to")
    quantity: int = Field(description="Requested quantity")
    price: Decimal = Field(description="Unit price supplied by the requester")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class OrderState(BaseModel):
    """Fulfillment projection of an order, the only part that changes after creation."""
    model_config = ConfigDict(validate_assignment=True)

    status: OrderStatus = Field(default=OrderStatus.PENDING, description="Current status")
    processed_at: Optional[datetime] = Field(default=None, description="Set when the order reaches PROCESSED")
    discount: Decimal = Field(default=Decimal("0"), description="Discount applied during fulfillment")

    def transition_to(self, target: OrderStatus) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStatusTransition(self.status, target)
        self.status = target

    def mark_processed(self, at: datetime) -> None:
        self.transition_to(OrderStatus.PROCESSED)
        self.processed_at = at


class Order(BaseModel):
    """A customer order.

    Everything except ``state`` is fixed at creation. ``id`` is None until the
    order store assigns one on first persist.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(default=None, description="Identifier assigned by the order store")
    customer_id: str = Field(description="Customer who placed the order")
    items: Tuple[OrderItem, ...] = Field(description="Line items in submission order")
    total_amount: Decimal = Field(description="Total supplied by the requester, never recomputed")
    created_at: datetime = Field(description="Creation timestamp")
    state: OrderState = Field(default_factory=OrderState, description="Mutable fulfillment projection")

    @property
    def status(self) -> OrderStatus:
        return self.state.status

    @property
    def computed_total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
