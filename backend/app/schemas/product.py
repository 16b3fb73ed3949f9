from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints

from app.models.enums import Category
from app.schemas.base import CamelModel

ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=160)]
Cents = Annotated[int, Field(ge=0, strict=True)]
Count = Annotated[int, Field(ge=0, strict=True)]


class ProductCreate(CamelModel):
    name: ProductName
    supply: Count = 0
    price: Cents = 0
    category: Category


class ProductUpdate(CamelModel):
    """One optional slot per mutable column; unset slots are left alone."""

    name: ProductName | None = None
    supply: Count | None = None
    price: Cents | None = None
    category: Category | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ProductFilters(CamelModel):
    name: str | None = None
    category: Category | None = None
    min_price: int | None = None
    max_price: int | None = None
    include_deleted: bool = False


class ProductOut(CamelModel):
    id: int
    name: str
    supply: int
    price: int
    category: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class ProductCreated(CamelModel):
    message: str
    product: ProductOut
