from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field
from pydantic.alias_generators import to_camel

from services.product_service.schemas import ProductResponse
from shared.validation import DB_INT_MAX


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Presence and business-range checks live in validation.py so they report
# per-line detail; the bounds here only keep values inside the column range.
class OrderLineCreate(_CamelModel):
    product: Optional[int] = Field(
        default=None,
        ge=1,
        le=DB_INT_MAX,
        validation_alias=AliasChoices("product", "productId", "product_id"),
    )
    quantity: Optional[int] = Field(default=None, le=DB_INT_MAX)
    price: Optional[float] = None


class OrderCreate(_CamelModel):
    lines: Optional[list[OrderLineCreate]] = Field(
        default=None, validation_alias=AliasChoices("lines", "products")
    )
    total_amount: Optional[float] = None
    status: Optional[str] = None


class OrderLineResponse(_CamelModel):
    product_id: int
    # None once the referenced product has been deleted
    product: Optional[ProductResponse] = None
    quantity: int
    price: float


class OrderResponse(_CamelModel):
    id: int
    user: int = Field(validation_alias="user_id", serialization_alias="user")
    lines: list[OrderLineResponse] = []
    total_amount: float
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
