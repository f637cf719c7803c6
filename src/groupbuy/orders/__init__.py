from groupbuy.orders.domain import Order, OrderStatus
from groupbuy.orders.infrastructure import IOrderRepository
from groupbuy.orders.module import build_orders_module

__all__ = [
    "IOrderRepository",
    "Order",
    "OrderStatus",
    "build_orders_module",
]
