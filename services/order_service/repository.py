from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .models import Order, OrderLine


def _owned_orders(user_id: int):
    # populate_existing so lines/products are (re)loaded on objects already in the session
    return (
        select(Order)
        .where(Order.user_id == user_id)
        .options(selectinload(Order.lines).selectinload(OrderLine.product))
        .execution_options(populate_existing=True)
    )


class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, order: Order):
        db.add(order)
        await db.commit()
        return order

    @staticmethod
    async def get_order_for_user(db: AsyncSession, user_id: int, order_id: int):
        result = await db.execute(_owned_orders(user_id).where(Order.id == order_id))
        return result.scalars().first()

    @staticmethod
    async def list_orders_for_user(db: AsyncSession, user_id: int):
        result = await db.execute(_owned_orders(user_id).order_by(Order.id))
        return result.scalars().all()
