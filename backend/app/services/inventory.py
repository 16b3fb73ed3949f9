from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.db import atomic
from app.core.errors import NotFoundError, ValidationError
from app.core.logger import Logger
from app.models.enums import HistoryType
from app.models.history import ProductHistory
from app.models.product import Product
from app.schemas.product import ProductCreate, ProductFilters, ProductUpdate

logger = Logger.get_logger(__name__)


def record_movement(db: Session, product: Product, delta: int) -> ProductHistory | None:
    """Append the ledger row for a change of `delta` units in a product's supply."""
    if delta == 0:
        return None
    kind = HistoryType.ARRIVAL if delta > 0 else HistoryType.DEPARTURE
    row = ProductHistory(product=product, type=kind.value, quantity=abs(delta))
    db.add(row)
    return row


def _live_product(db: Session, product_id: int) -> Product | None:
    return (
        db.query(Product)
        .filter(Product.id == product_id, Product.deleted_at.is_(None))
        .first()
    )


# -------------------------
# Create / read
# -------------------------

def create_product(db: Session, data: ProductCreate) -> Product:
    with atomic(db, "add product"):
        product = Product(
            name=data.name,
            supply=data.supply,
            price=data.price,
            category=data.category.value,
        )
        db.add(product)
        record_movement(db, product, data.supply)

    logger.info(f"Product {product.id} created ({product.name}, supply={product.supply})")
    return product


def list_products(db: Session, filters: ProductFilters | None = None) -> list[Product]:
    filters = filters or ProductFilters()
    stmt = db.query(Product)

    if not filters.include_deleted:
        stmt = stmt.filter(Product.deleted_at.is_(None))
    if filters.name:
        stmt = stmt.filter(func.lower(Product.name).contains(filters.name.lower(), autoescape=True))
    if filters.category:
        stmt = stmt.filter(Product.category == filters.category.value)
    if filters.min_price is not None:
        stmt = stmt.filter(Product.price >= filters.min_price)
    if filters.max_price is not None:
        stmt = stmt.filter(Product.price <= filters.max_price)

    return stmt.order_by(Product.id.asc()).all()


def get_product(db: Session, product_id: int) -> Product:
    product = _live_product(db, product_id)
    if not product:
        raise NotFoundError("Product not found.")
    return product


# -------------------------
# Update / delete
# -------------------------

def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    changes = data.changes()
    if not changes:
        raise ValidationError("Request body cannot be empty.")

    nulls = [f"{field} cannot be null." for field, value in changes.items() if value is None]
    if nulls:
        raise ValidationError("Invalid product update.", nulls)

    with atomic(db, "update product"):
        product = _live_product(db, product_id)
        if not product:
            raise NotFoundError("Product not found or already deleted.")

        if "supply" in changes:
            record_movement(db, product, changes["supply"] - product.supply)
        if "category" in changes:
            changes["category"] = changes["category"].value

        for field, value in changes.items():
            setattr(product, field, value)
        product.updated_at = datetime.now(timezone.utc)

    logger.info(f"Product {product.id} updated: {sorted(changes)}")
    return product


def delete_product(db: Session, product_id: int) -> Product:
    with atomic(db, "delete product"):
        product = _live_product(db, product_id)
        if not product:
            raise NotFoundError("Product not found.")
        product.deleted_at = datetime.now(timezone.utc)

    logger.info(f"Product {product.id} soft-deleted")
    return product
