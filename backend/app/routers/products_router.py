from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.models.enums import Category
from app.routers.deps import require_admin
from app.schemas.base import MessageResponse
from app.schemas.history import HistoryOut
from app.schemas.product import (
    ProductCreate,
    ProductCreated,
    ProductFilters,
    ProductOut,
    ProductUpdate,
)
from app.services import history, inventory

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("", response_model=ProductCreated, status_code=201)
def create_product(body: ProductCreate, db: Session = Depends(get_db)):
    product = inventory.create_product(db, body)
    return {"message": "Product added successfully!", "product": product}


@router.get("", response_model=list[ProductOut])
def list_products(
    name: str | None = Query(default=None),
    category: Category | None = Query(default=None),
    min_price: int | None = Query(default=None, alias="minPrice"),
    max_price: int | None = Query(default=None, alias="maxPrice"),
    include_deleted: bool = Query(default=False, alias="includeDeleted"),
    db: Session = Depends(get_db),
):
    filters = ProductFilters(
        name=name,
        category=category,
        min_price=min_price,
        max_price=max_price,
        include_deleted=include_deleted,
    )
    return inventory.list_products(db, filters)


# must be registered before /{product_id}
@router.get("/history", response_model=list[HistoryOut])
def list_all_history(db: Session = Depends(get_db)):
    return history.list_all_history(db)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return inventory.get_product(db, product_id)


@router.put("/{product_id}", response_model=ProductCreated)
def update_product(product_id: int, body: ProductUpdate, db: Session = Depends(get_db)):
    product = inventory.update_product(db, product_id, body)
    return {"message": "Product updated successfully.", "product": product}


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    inventory.delete_product(db, product_id)
    return {"message": "Product deleted successfully."}


@router.get("/{product_id}/history", response_model=list[HistoryOut])
def product_history(product_id: int, db: Session = Depends(get_db)):
    return history.list_history_for_product(db, product_id)
