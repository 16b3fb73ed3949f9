from enum import Enum


class Category(str, Enum):
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    HOME_GOODS = "Home Goods"


class OrderStatus(str, Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


class HistoryType(str, Enum):
    ARRIVAL = "arrival"
    DEPARTURE = "departure"
