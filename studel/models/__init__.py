# studel/models/__init__.py
from .catalog import Vendor, Product, DeliveryZone
from .order import Order, OrderItem, OrderStatus, OrderStatusEntry
from .user import User, Role

# Export all models
__all__ = [
    "DeliveryZone",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderStatusEntry",
    "Product",
    "Role",
    "User",
    "Vendor",
]
