from app.models.admin import Admin
from app.models.enums import Category, HistoryType, OrderStatus
from app.models.history import ProductHistory
from app.models.order import Order, OrderItem
from app.models.product import Product

__all__ = [
    "Admin",
    "Category",
    "HistoryType",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Product",
    "ProductHistory",
]
