from decimal import Decimal

import pytest
from pydantic import ValidationError

from orderflow.data.models import (
    Order,
    OrderItem,
    OrderReceipt,
    OrderRequest,
    OrderState,
    OrderStatus,
)
from orderflow.exceptions import InvalidStatusTransition


def test_terminal_statuses():
    assert OrderStatus.PROCESSED.is_terminal
    assert OrderStatus.FAILED.is_terminal
    assert not OrderStatus.PENDING.is_terminal
    assert not OrderStatus.PROCESSING.is_terminal


@pytest.mark.parametrize("current, target", [
    (OrderStatus.PENDING, OrderStatus.PROCESSING),
    (OrderStatus.PROCESSING, OrderStatus.PROCESSED),
    (OrderStatus.PROCESSING, OrderStatus.FAILED),
])
def test_allowed_transitions(current, target):
    state = OrderState(status=current)
    state.transition_to(target)
    assert state.status is target


@pytest.mark.parametrize("current, target", [
    (OrderStatus.PENDING, OrderStatus.PROCESSED),
    (OrderStatus.PENDING, OrderStatus.FAILED),
    (OrderStatus.PROCESSED, OrderStatus.PROCESSING),
    (OrderStatus.PROCESSED, OrderStatus.FAILED),
    (OrderStatus.FAILED, OrderStatus.PROCESSING),
    (OrderStatus.PROCESSING, OrderStatus.PENDING),
])
def test_backward_or_skipping_transitions_are_rejected(current, target):
    state = OrderState(status=current)
    with pytest.raises(InvalidStatusTransition):
        state.transition_to(target)
    assert state.status is current


def test_new_state_defaults():
    state = OrderState()
    assert state.status is OrderStatus.PENDING
    assert state.processed_at is None
    assert state.discount == Decimal("0")


def test_order_core_fields_are_immutable():
    order = Order(
        customer_id="C1",
        items=[OrderItem(product_code="SKU-001", quantity=1, price=Decimal("1.00"))],
        total_amount=Decimal("1.00"),
        created_at="2026-01-01T00:00:00Z",
    )
    with pytest.raises(ValidationError):
        order.total_amount = Decimal("2.00")
    with pytest.raises(ValidationError):
        order.items[0].quantity = 5
    # The fulfillment projection stays mutable
    order.state.discount = Decimal("0.10")
    assert order.state.discount == Decimal("0.10")


def test_items_keep_submission_order_and_total():
    order = Order(
        customer_id="C1",
        items=[
            OrderItem(product_code="B", quantity=2, price=Decimal("49.99")),
            OrderItem(product_code="A", quantity=3, price=Decimal("0.01")),
        ],
        total_amount=Decimal("100"),
        created_at="2026-01-01T00:00:00Z",
    )
    assert [i.product_code for i in order.items] == ["B", "A"]
    assert order.items[0].line_total == Decimal("99.98")
    assert order.computed_total == Decimal("100.01")


def test_request_requires_items():
    with pytest.raises(ValidationError):
        OrderRequest(customer_id="C1", items=[], total_amount="10")


def test_request_float_prices_become_exact_decimals():
    request = OrderRequest(
        customer_id="C1",
        items=[{"product_code": "SKU-001", "quantity": 2, "price": 49.99}],
        total_amount=99.98,
    )
    assert request.items[0].price == Decimal("49.99")
    assert request.total_amount == Decimal("99.98")


def test_receipt_default_message():
    receipt = OrderReceipt(
        order_id=1,
        customer_id="C1",
        total_amount=Decimal("1"),
        status=OrderStatus.PENDING,
        created_at="2026-01-01T00:00:00Z",
    )
    assert receipt.message == "Order received and queued for processing"
