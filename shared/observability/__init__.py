from .setup import setup_observability
from .metrics import (
    inventory_auth_attempts_total,
    inventory_product_writes_total,
    inventory_orders_placed_total,
    inventory_low_stock_products
)
