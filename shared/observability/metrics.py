from prometheus_client import Counter, Gauge

# Business Metrics
inventory_auth_attempts_total = Counter(
    "inventory_auth_attempts_total",
    "Registration and login attempts",
    ["action", "outcome"]  # action='register'|'login', outcome='success'|'rejected'
)

inventory_product_writes_total = Counter(
    "inventory_product_writes_total",
    "Product create/update/delete operations",
    ["operation"]
)

inventory_orders_placed_total = Counter(
    "inventory_orders_placed_total",
    "Orders persisted",
    ["status"]
)

inventory_low_stock_products = Gauge(
    "inventory_low_stock_products",
    "Number of products below the low-stock threshold at the last query"
)
