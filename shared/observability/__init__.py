from .setup import setup_observability
from .metrics import (
    store_orders_created_total,
    store_order_admission_rejected_total,
    store_order_status_updates_total,
    store_refunds_total,
    store_reviews_total,
    store_active_carts
)
