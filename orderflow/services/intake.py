from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional, Union

from ..data.interface import OrderStore
from ..data.models import Order, OrderItem, OrderReceipt, OrderRequest, utc_now
from ..exceptions import PublishError
from ..logging import get_logger
from ..messaging.queue import OrderPublisher
from ..metrics import ORDERS_RECEIVED, MetricsSink


class OrderIntake:
    """Records new orders and queues them for fulfillment. Also serves order queries."""

    def __init__(
        self,
        orders: OrderStore,
        publisher: OrderPublisher,
        metrics: MetricsSink,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.logger = get_logger(__name__)
        self._orders = orders
        self._publisher = publisher
        self._metrics = metrics
        self._clock = clock

    def create_order(self, request: Union[OrderRequest, dict]) -> OrderReceipt:
        """Persist a PENDING order and publish its identifier.

        No inventory checks happen here. If publishing fails, the stored order
        stays PENDING and is not retried.

        Args:
            request (OrderRequest | dict): The submission; dicts are validated into an OrderRequest.
        Returns:
            OrderReceipt: Identifier, customer, total, PENDING status and creation time.
        Raises:
            pydantic.ValidationError: If a dict request is invalid.
            PublishError: If the identifier could not be published.
        """
        if not isinstance(request, OrderRequest):
            request = OrderRequest.model_validate(request)

        self.logger.info(f"Creating order for customer: {request.customer_id}")

        order = Order(
            customer_id=request.customer_id,
            items=[OrderItem(**item.model_dump()) for item in request.items],
            total_amount=request.total_amount,
            created_at=self._clock(),
        )
        with self._orders.transaction() as tx:
            order = tx.persist(order)
        self.logger.info(f"Order created with ID: {order.id}")

        try:
            self._publisher.publish(str(order.id))
        except PublishError:
            self.logger.error(f"Failed to send order {order.id} to queue, it stays PENDING")
            raise
        except Exception as e:
            self.logger.error(f"Failed to send order {order.id} to queue, it stays PENDING")
            raise PublishError(f"Could not publish order {order.id}: {e}") from e
        self.logger.info(f"Order ID {order.id} sent to queue for processing")

        self._metrics.increment(ORDERS_RECEIVED)

        return OrderReceipt(
            order_id=order.id,
            customer_id=order.customer_id,
            total_amount=order.total_amount,
            status=order.status,
            created_at=order.created_at,
        )

    def get_order(self, order_id: int) -> Optional[Order]:
        return self._orders.find_by_id(order_id)

    def list_orders(self) -> List[Order]:
        return self._orders.list_all()
