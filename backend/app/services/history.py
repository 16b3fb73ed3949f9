from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFoundError
from app.models.history import ProductHistory


def list_history_for_product(db: Session, product_id: int) -> list[ProductHistory]:
    rows = (
        db.query(ProductHistory)
        .options(joinedload(ProductHistory.product))
        .filter(ProductHistory.product_id == product_id)
        .order_by(ProductHistory.id.asc())
        .all()
    )
    if not rows:
        raise NotFoundError("No history found for this product.")
    return rows


def list_all_history(db: Session) -> list[ProductHistory]:
    return (
        db.query(ProductHistory)
        .options(joinedload(ProductHistory.product))
        .order_by(ProductHistory.id.desc())
        .all()
    )
