from .consumer import DeliveryLoop
from .queue import InProcessOrderQueue, OrderPublisher

__all__ = ["DeliveryLoop", "InProcessOrderQueue", "OrderPublisher"]
