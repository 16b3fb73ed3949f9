from datetime import datetime

from app.schemas.base import CamelModel
from app.schemas.product import ProductOut


class HistoryOut(CamelModel):
    id: int
    product_id: int
    type: str
    quantity: int
    timestamp: datetime | None = None
    product: ProductOut | None = None
