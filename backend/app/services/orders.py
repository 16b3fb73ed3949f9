"""
Order placement and lifecycle.

Orders move pending -> shipped or pending -> cancelled; shipped and cancelled
are terminal. Cancelling puts every line's quantity back into stock. Each
operation here that writes more than one row runs inside a single
transaction, so a failure leaves no partial order and no partial stock
movement behind.
"""

from sqlalchemy.orm import Session, selectinload

from app.core.db import atomic
from app.core.errors import (
    InsufficientStockError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from app.core.logger import Logger
from app.models.enums import OrderStatus
from app.models.order import Order, OrderItem
from app.models.product import Product
from app.schemas.order import OrderCreate
from app.services.inventory import record_movement

logger = Logger.get_logger(__name__)

# target status -> current statuses it may be reached from
ALLOWED_FROM = {
    OrderStatus.PENDING: {OrderStatus.PENDING},
    OrderStatus.SHIPPED: {OrderStatus.PENDING, OrderStatus.SHIPPED},
    OrderStatus.CANCELLED: {OrderStatus.PENDING},
}

TRANSITION_ERRORS = {
    OrderStatus.PENDING: "Shipped or cancelled orders cannot return to pending.",
    OrderStatus.SHIPPED: "Cannot ship a cancelled order.",
    OrderStatus.CANCELLED: "Only pending orders can be cancelled.",
}


def _parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Status must be one of: {allowed}.") from None


def _order_query(db: Session, with_products: bool = False):
    items = selectinload(Order.items)
    if with_products:
        items = items.selectinload(OrderItem.product)
    return db.query(Order).options(items)


# -------------------------
# Place
# -------------------------

def place_order(db: Session, data: OrderCreate) -> Order:
    if not data.items:
        raise ValidationError("An order must contain at least one item.")

    with atomic(db, "place order"):
        order = Order(status=OrderStatus.PENDING.value, total_price=0)
        db.add(order)
        db.flush()  # order.id for the child rows

        total_price = 0
        for item in data.items:
            product = (
                db.query(Product)
                .filter(Product.id == item.product_id, Product.deleted_at.is_(None))
                .first()
            )
            if not product:
                logger.warning(f"Order rejected: product {item.product_id} not found")
                raise NotFoundError(f"Product with ID {item.product_id} not found.")

            if item.quantity > product.supply:
                logger.warning(
                    f"Order rejected: {item.quantity} x product {product.id} requested, {product.supply} in stock"
                )
                raise InsufficientStockError(
                    f"Not enough stock for {product.name}. Available: {product.supply}"
                )

            total_price += product.price * item.quantity
            product.supply -= item.quantity

            db.add(
                OrderItem(
                    order=order,
                    product_id=product.id,
                    quantity=item.quantity,
                    price_at_purchase=product.price,
                )
            )
            record_movement(db, product, -item.quantity)
            db.flush()

        order.total_price = total_price

    logger.info(f"Order {order.id} placed: {len(data.items)} item(s), total={total_price}")
    return order


# -------------------------
# Status
# -------------------------

def update_order_status(db: Session, order_id: int, new_status) -> Order:
    target = _parse_status(new_status)

    with atomic(db, "update order"):
        order = _order_query(db).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order not found.")

        current = OrderStatus(order.status)
        if current not in ALLOWED_FROM[target]:
            logger.warning(f"Order {order.id}: rejected transition {current.value} -> {target.value}")
            raise InvalidTransitionError(TRANSITION_ERRORS[target])

        if target is OrderStatus.CANCELLED:
            _restore_stock(db, order)

        order.status = target.value

    logger.info(f"Order {order.id} status {current.value} -> {target.value}")
    return order


def _restore_stock(db: Session, order: Order) -> None:
    product_ids = {item.product_id for item in order.items}
    products = {p.id: p for p in db.query(Product).filter(Product.id.in_(product_ids)).all()}

    # soft-deleted products still have a row, so their stock is restored too
    for item in order.items:
        product = products.get(item.product_id)
        if product is None:
            logger.warning(
                f"Order {order.id}: product {item.product_id} no longer exists, "
                f"{item.quantity} unit(s) not restored"
            )
            continue
        product.supply += item.quantity
        record_movement(db, product, item.quantity)


# -------------------------
# Read / delete
# -------------------------

def list_orders(db: Session) -> list[Order]:
    return _order_query(db).order_by(Order.id.desc()).all()


def get_order(db: Session, order_id: int) -> Order:
    order = _order_query(db, with_products=True).filter(Order.id == order_id).first()
    if not order:
        raise NotFoundError("Order not found.")
    return order


def delete_order(db: Session, order_id: int) -> None:
    """
    Hard-delete an order and its items. Unlike cancellation this does not
    put stock back or write history.
    """
    with atomic(db, "delete order"):
        order = db.get(Order, order_id)
        if not order:
            raise NotFoundError("Order not found or already deleted.")
        db.delete(order)

    logger.info(f"Order {order_id} deleted (stock left unchanged)")
