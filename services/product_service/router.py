from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security.dependencies import get_current_user
from shared.validation import DB_INT_MAX

from .schemas import (
    DeleteResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    TotalValueResponse,
)
from .service import ProductService

ProductId = Annotated[int, Path(ge=1, le=DB_INT_MAX)]

# Every inventory route sits behind the auth gate
router = APIRouter(
    prefix="/products",
    tags=["Inventory"],
    dependencies=[Depends(get_current_user)],
)


# Static paths first so they are not captured by /{product_id}
@router.get("/low-stock", response_model=list[ProductResponse])
async def list_low_stock(db: AsyncSession = Depends(get_db)):
    return await ProductService.list_low_stock(db)


@router.get("/total-value", response_model=TotalValueResponse)
async def total_value(db: AsyncSession = Depends(get_db)):
    return TotalValueResponse(total_value=await ProductService.total_value(db))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(product: ProductCreate, db: AsyncSession = Depends(get_db)):
    return await ProductService.create_product(db, product)


@router.get("", response_model=list[ProductResponse])
async def list_products(db: AsyncSession = Depends(get_db)):
    return await ProductService.list_products(db)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: ProductId, db: AsyncSession = Depends(get_db)):
    return await ProductService.get_product_by_id(db, product_id)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: ProductId,
    changes: ProductUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await ProductService.update_product(db, product_id, changes)


@router.delete("/{product_id}", response_model=DeleteResponse)
async def delete_product(product_id: ProductId, db: AsyncSession = Depends(get_db)):
    await ProductService.delete_product(db, product_id)
    return DeleteResponse(message="Product deleted")
