import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.service import ProductService
from shared.errors import NotFound
from shared.observability.metrics import inventory_orders_placed_total

from .models import Order, OrderLine
from .repository import OrderRepository
from .schemas import OrderCreate
from .validation import accept_total_amount, resolve_status, validate_order_lines

logger = structlog.get_logger(__name__)


class OrderService:
    @staticmethod
    async def create_order(
        db: AsyncSession,
        user_id: int,
        data: OrderCreate,
        decrement_stock: bool = False,
    ):
        lines = data.lines or []
        validate_order_lines(lines)
        status = resolve_status(data.status)
        total = accept_total_amount(lines, data.total_amount)

        order = Order(
            user_id=user_id,
            total_amount=total,
            status=status.value,
            lines=[
                OrderLine(product_id=line.product, quantity=line.quantity, price=line.price)
                for line in lines
            ],
        )

        if decrement_stock:
            await OrderService.adjust_stock_for_order(db, order)

        order = await OrderRepository.create_order(db, order)
        inventory_orders_placed_total.labels(status=order.status).inc()
        logger.info(
            "order_created",
            order_id=order.id,
            user_id=user_id,
            lines=len(order.lines),
            total_amount=total,
        )
        return await OrderRepository.get_order_for_user(db, user_id, order.id)

    @staticmethod
    async def adjust_stock_for_order(db: AsyncSession, order: Order) -> None:
        """
        Decrements stock for every line of ``order``.

        Runs in the same session as the order insert, so a failure on any line
        leaves both stock and orders untouched. Only used when
        ``Settings.decrement_stock_on_order`` is on.
        """
        for line in order.lines:
            await ProductService.reduce_stock(db, line.product_id, line.quantity)

    @staticmethod
    async def list_orders(db: AsyncSession, user_id: int):
        return await OrderRepository.list_orders_for_user(db, user_id)

    @staticmethod
    async def get_order(db: AsyncSession, user_id: int, order_id: int):
        order = await OrderRepository.get_order_for_user(db, user_id, order_id)
        if not order:
            # Same answer whether the order is missing or belongs to someone else
            raise NotFound("Order not found")
        return order
