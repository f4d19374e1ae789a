from .fulfillment import FulfillmentEngine, compute_discount, parse_order_id
from .intake import OrderIntake

__all__ = ["FulfillmentEngine", "OrderIntake", "compute_discount", "parse_order_id"]
