"""Order intake and asynchronous fulfillment."""

__version__ = "0.1.0"
