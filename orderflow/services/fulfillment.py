from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from ..config import get_config
from ..data.interface import InventoryStore, OrderStore, OrderTransaction
from ..data.models import Order, OrderItem, OrderStatus, utc_now
from ..logging import get_logger
from ..metrics import ORDERS_FAILED, ORDERS_PROCESSED, MetricsSink


_ORDER_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_order_id(payload) -> Optional[int]:
    """Decode a queue payload into an order identifier, or None if it is not one.

    Only plain ASCII decimal text is accepted; `int()` alone would also take
    padding, underscores and non-ASCII digits.
    """
    if not isinstance(payload, str) or not _ORDER_ID_PATTERN.fullmatch(payload):
        return None
    return int(payload)


def compute_discount(total_amount: Decimal, threshold: Decimal, rate: Decimal) -> Decimal:
    """Discount owed on an order total.

    Only totals strictly above `threshold` earn a discount. The product is
    exact Decimal arithmetic and is not quantized.

    Args:
        total_amount (Decimal): Requester-supplied order total.
        threshold (Decimal): Totals above this amount are discounted.
        rate (Decimal): Fraction of the total given back, e.g. Decimal("0.10").
    Returns:
        Decimal: The discount, Decimal("0") at or below the threshold.
    """
    if total_amount > threshold:
        return total_amount * rate
    return Decimal("0")


class FulfillmentEngine:
    """Consumes queued order identifiers and drives each order to a terminal status.

    Every invocation that reaches PROCESSING ends in PROCESSED or FAILED. The one
    exception is when the forced FAILED write itself fails; that error reaches
    the caller.
    """

    def __init__(
        self,
        orders: OrderStore,
        inventory: InventoryStore,
        metrics: MetricsSink,
        discount_threshold: Decimal = None,
        discount_rate: Decimal = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.config = get_config()
        self.logger = get_logger(__name__)
        self._orders = orders
        self._inventory = inventory
        self._metrics = metrics
        self._threshold = self.config.discount_threshold if discount_threshold is None else discount_threshold
        self._rate = self.config.discount_rate if discount_rate is None else discount_rate
        self._clock = clock

    def process_order(self, payload: str) -> None:
        """Fulfill the order named by a queue payload.

        Malformed payloads and unknown identifiers are logged and ignored, as
        are store errors before the order reaches PROCESSING. Orders that
        already reached a terminal status are left untouched.

        PROCESSING is committed on its own before validation starts, so a
        rolled-back fulfillment returns the order to PROCESSING and the forced
        FAILED always moves forward.

        Args:
            payload (str): Order identifier in its decimal string form.
        Raises:
            Exception: Only when marking a failed order as FAILED could not be persisted.
        """
        order_id = parse_order_id(payload)
        if order_id is None:
            self.logger.error(f"Invalid order ID received: {payload!r}")
            return

        self.logger.info(f"Processing order: {order_id}")

        try:
            order = self._orders.find_by_id(order_id)
        except Exception:
            self.logger.exception(f"Could not load order {order_id}, message dropped")
            return
        if order is None:
            self.logger.error(f"Order not found: {order_id}")
            return

        if order.status.is_terminal:
            self.logger.info(f"Order {order_id} is already {order.status.value}, skipping")
            return

        try:
            order = self._start_processing(order)
        except Exception:
            self.logger.exception(f"Could not move order {order_id} to PROCESSING, it stays PENDING")
            return

        try:
            with self._orders.transaction() as tx:
                outcome = self._fulfill(tx, order)
        except Exception:
            self.logger.exception(f"Error processing order {order_id}")
            self._force_failed(order_id)
            return

        if outcome is OrderStatus.PROCESSED:
            self._metrics.increment(ORDERS_PROCESSED)
        else:
            self._metrics.increment(ORDERS_FAILED)

    def _start_processing(self, order: Order) -> Order:
        if order.status is OrderStatus.PROCESSING:
            self.logger.warning(f"Order {order.id} was left in PROCESSING, resuming")
            return order
        with self._orders.transaction() as tx:
            order.state.transition_to(OrderStatus.PROCESSING)
            return tx.persist(order)

    def _fulfill(self, tx: OrderTransaction, order: Order) -> OrderStatus:
        if self._first_shortfall(order) is not None:
            order.state.transition_to(OrderStatus.FAILED)
            tx.persist(order)
            self.logger.warning(f"Order {order.id} failed due to inventory issues")
            return OrderStatus.FAILED

        discount = compute_discount(order.total_amount, self._threshold, self._rate)
        if discount:
            order.state.discount = discount
            self.logger.info(f"Applied discount to order {order.id}: {discount}")

        # Observability only; the supplied total is kept as is
        computed_total = order.computed_total
        if computed_total != order.total_amount:
            self.logger.warning(
                f"Total amount mismatch for order {order.id}: "
                f"supplied {order.total_amount}, computed {computed_total}"
            )

        order.state.mark_processed(self._clock())
        tx.persist(order)
        self.logger.info(f"Order {order.id} processed successfully")
        return OrderStatus.PROCESSED

    def _first_shortfall(self, order: Order) -> Optional[OrderItem]:
        for item in order.items:
            record = self._inventory.find_by_product_code(item.product_code)
            if record is None:
                self.logger.warning(f"Unknown product {item.product_code} in order {order.id}")
                return item
            if record.available_quantity < item.quantity:
                self.logger.warning(
                    f"Insufficient inventory for product {item.product_code}: "
                    f"requested {item.quantity}, available {record.available_quantity}"
                )
                return item
        return None

    def _force_failed(self, order_id: int) -> None:
        with self._orders.transaction() as tx:
            current = tx.find_by_id(order_id)
            if current is None or current.status is not OrderStatus.PROCESSING:
                status = "missing" if current is None else current.status.value
                self.logger.warning(f"Order {order_id} not forced to FAILED, it is {status}")
                return
            current.state.transition_to(OrderStatus.FAILED)
            tx.persist(current)
        self.logger.warning(f"Order {order_id} marked FAILED after an error")
        self._metrics.increment(ORDERS_FAILED)
