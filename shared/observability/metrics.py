from prometheus_client import Counter, Gauge

# Business Metrics
store_orders_created_total = Counter(
    "store_orders_created_total",
    "Total cash-on-delivery orders created"
)

store_order_admission_rejected_total = Counter(
    "store_order_admission_rejected_total",
    "Checkout attempts rejected by the per-phone cooldown",
    ["endpoint"] # Labels: 'create', 'check'
)

store_order_status_updates_total = Counter(
    "store_order_status_updates_total",
    "Order status changes made from the admin surface",
    ["status"]
)

store_refunds_total = Counter(
    "store_refunds_total",
    "Refund lifecycle events",
    ["event"] # Labels: 'created', 'processed'
)

store_active_carts = Gauge(
    "store_active_carts",
    "Number of carts created since process start that have not been cleared"
)

store_reviews_total = Counter(
    "store_reviews_total",
    "Product review events",
    ["event"] # Labels: 'submitted', 'approved', 'hidden'
)
