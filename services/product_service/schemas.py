from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from shared.validation import DB_INT_MAX


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Required fields are optional at the parsing layer; validate_product reports
# what is missing with field-level detail.
class ProductCreate(_CamelModel):
    name: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = Field(default=None, le=DB_INT_MAX)
    description: Optional[str] = None


class ProductUpdate(_CamelModel):
    name: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = Field(default=None, le=DB_INT_MAX)
    description: Optional[str] = None


class ProductResponse(_CamelModel):
    id: int
    name: str
    price: float
    stock: int
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TotalValueResponse(_CamelModel):
    total_value: float


class DeleteResponse(BaseModel):
    message: str
