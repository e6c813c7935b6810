import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import NotFound, ValidationError, field_error
from shared.observability.metrics import (
    inventory_low_stock_products,
    inventory_product_writes_total,
)

from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate
from .validation import validate_product

LOW_STOCK_THRESHOLD = 10

logger = structlog.get_logger(__name__)


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate):
        validate_product(data.name, data.price, data.stock)
        product = Product(
            name=data.name,
            price=data.price,
            stock=data.stock,
            description=data.description,
        )
        product = await ProductRepository.create_product(db, product)
        inventory_product_writes_total.labels(operation="create").inc()
        logger.info("product_created", product_id=product.id, stock=product.stock)
        return product

    @staticmethod
    async def list_products(db: AsyncSession):
        return await ProductRepository.get_all_products(db)

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    @staticmethod
    async def update_product(db: AsyncSession, product_id: int, data: ProductUpdate):
        product = await ProductService.get_product_by_id(db, product_id)
        changes = data.model_dump(exclude_unset=True)

        # Validate the merged record before touching the mapped object
        merged = {
            field: changes.get(field, getattr(product, field))
            for field in ("name", "price", "stock")
        }
        validate_product(**merged)

        for field, value in changes.items():
            setattr(product, field, value)

        product = await ProductRepository.update_product(db, product)
        inventory_product_writes_total.labels(operation="update").inc()
        logger.info("product_updated", product_id=product.id, fields=sorted(changes))
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int) -> None:
        product = await ProductService.get_product_by_id(db, product_id)
        # No check against existing order lines; they keep a dangling product id
        await ProductRepository.delete_product(db, product)
        inventory_product_writes_total.labels(operation="delete").inc()
        logger.info("product_deleted", product_id=product_id)

    @staticmethod
    async def list_low_stock(db: AsyncSession):
        products = await ProductRepository.get_products_below_stock(db, LOW_STOCK_THRESHOLD)
        inventory_low_stock_products.set(len(products))
        return products

    @staticmethod
    async def total_value(db: AsyncSession) -> float:
        return await ProductRepository.get_total_value(db)

    @staticmethod
    async def reduce_stock(db: AsyncSession, product_id: int, quantity: int) -> Product:
        """Deducts ``quantity`` inside the caller's transaction. The caller commits."""
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            raise NotFound(f"Product {product_id} not found")

        if product.stock < quantity:
            raise ValidationError(
                [field_error("stock", f"Insufficient stock for product {product.name}")]
            )

        product.stock -= quantity
        return product
