"""Exceptions raised by orderflow components."""
from __future__ import annotations


class OrderflowError(Exception):
    """Base class for orderflow errors."""


class InvalidStatusTransition(OrderflowError):
    """An order was asked to move to a status its current status does not allow."""

    def __init__(self, current, target) -> None:
        super().__init__(f"Cannot move order from {current.value} to {target.value}")
        self.current = current
        self.target = target


class PublishError(OrderflowError):
    """An order identifier could not be handed to the fulfillment queue."""


class StoreError(OrderflowError):
    """A store rejected or could not complete a read or write."""
