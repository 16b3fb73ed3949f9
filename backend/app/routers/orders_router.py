from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.routers.deps import require_admin
from app.schemas.base import MessageResponse
from app.schemas.order import (
    OrderCreate,
    OrderDetail,
    OrderOut,
    OrderResult,
    OrderStatusUpdate,
)
from app.services import orders

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("", response_model=OrderResult, status_code=201)
def place_order(body: OrderCreate, db: Session = Depends(get_db)):
    order = orders.place_order(db, body)
    return {"message": "Order placed successfully!", "order": order}


@router.get("", response_model=list[OrderOut])
def list_orders(db: Session = Depends(get_db)):
    return orders.list_orders(db)


@router.get("/{order_id}", response_model=OrderDetail)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return orders.get_order(db, order_id)


@router.put("/{order_id}", response_model=OrderResult)
def update_order_status(order_id: int, body: OrderStatusUpdate, db: Session = Depends(get_db)):
    order = orders.update_order_status(db, order_id, body.status)
    return {"message": "Order status updated successfully.", "order": order}


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(order_id: int, db: Session = Depends(get_db)):
    orders.delete_order(db, order_id)
    return {"message": "Order deleted successfully."}
