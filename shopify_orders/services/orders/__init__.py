"""
Order access service and its building blocks.
"""

from .service import OrderService, ShopifyOrderService
from .strategy import ExecutionStrategy, OrderOperation, strategy_for

__all__ = [
    "ExecutionStrategy",
    "OrderOperation",
    "OrderService",
    "ShopifyOrderService",
    "strategy_for",
]
