# orders/models/__init__.py

from .order import Order
from .order_item import OrderItem
from .order_status_entry import OrderStatusEntry

__all__ = [
    "Order",
    "OrderItem",
    "OrderStatusEntry",
]
