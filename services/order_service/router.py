from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db, get_settings
from shared.config.settings import Settings
from shared.security.dependencies import get_current_user
from shared.validation import DB_INT_MAX

from .schemas import OrderCreate, OrderResponse
from .service import OrderService

OrderId = Annotated[int, Path(ge=1, le=DB_INT_MAX)]

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order: OrderCreate,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await OrderService.create_order(
        db, user_id, order, decrement_stock=settings.decrement_stock_on_order
    )


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.list_orders(db, user_id)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: OrderId,
    user_id: int = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.get_order(db, user_id, order_id)
