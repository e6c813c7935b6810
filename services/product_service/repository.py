from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Product


class ProductRepository:

    @staticmethod
    async def create_product(db: AsyncSession, product: Product):
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def get_all_products(db: AsyncSession):
        result = await db.execute(select(Product).order_by(Product.id))
        return result.scalars().all()

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def update_product(db: AsyncSession, product: Product):
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product: Product):
        await db.delete(product)
        await db.commit()

    @staticmethod
    async def get_products_below_stock(db: AsyncSession, threshold: int):
        result = await db.execute(
            select(Product).where(Product.stock < threshold).order_by(Product.id)
        )
        return result.scalars().all()

    @staticmethod
    async def get_total_value(db: AsyncSession) -> float:
        # SUM over an empty table is NULL, hence the coalesce
        result = await db.execute(
            select(func.coalesce(func.sum(Product.price * Product.stock), 0))
        )
        return float(result.scalar_one())
