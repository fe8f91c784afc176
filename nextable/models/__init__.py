# nextable/models/__init__.py
from .user import User, UserRole
from .restaurant import AssignmentRole, Restaurant, RestaurantTable, TableStatus, UserRestaurant
from .menu import MenuItem
from .order import Order, OrderItem, OrderStatus

# Export all models
__all__ = [
    "AssignmentRole",
    "MenuItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Restaurant",
    "RestaurantTable",
    "TableStatus",
    "User",
    "UserRestaurant",
    "UserRole",
]
