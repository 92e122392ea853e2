"""Cart-to-order checkout service: transactional order creation, order queries and sales analytics."""

__version__ = "1.0.0"
