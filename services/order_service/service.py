import math
import random
from datetime import datetime, timedelta

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.settings import ORDER_COOLDOWN_SECONDS
from shared.errors import NotFound, PersistenceFailed, RateLimited, ValidationFailed
from shared.observability import store_order_admission_rejected_total, store_orders_created_total

from .lifecycle import OrderStatus, TrackingView, build_tracking
from .models import Order, OrderItem
from .repository import OrderRepository
from .schemas import OrderCreate

logger = structlog.get_logger(__name__)

ORDER_ID_ATTEMPTS = 5


def mask_phone(phone: str) -> str:
    return f"******{phone[-4:]}"


class OrderService:

    @staticmethod
    def generate_order_id(now: datetime) -> str:
        """ORD-YYYYMMDD-NNNNN using the UTC creation date and a 5-digit random suffix."""
        return f"ORD-{now:%Y%m%d}-{random.randint(10000, 99999)}"

    @staticmethod
    def remaining_cooldown(created_at: datetime, now: datetime, window: int = ORDER_COOLDOWN_SECONDS) -> int:
        """Whole seconds left before `window` has passed since `created_at`, never below 1."""
        elapsed = math.floor((now - created_at).total_seconds())
        return max(1, min(window, window - elapsed))

    @staticmethod
    async def check_cooldown(db: AsyncSession, phone: str, now: datetime, endpoint: str = "check"):
        """Admission gate. Raises RateLimited while an order from `phone` is inside the window.

        This is a read-then-write check: two submissions racing within the
        same instant can both pass before either commits.
        """
        since = now - timedelta(seconds=ORDER_COOLDOWN_SECONDS)
        try:
            recent = await OrderRepository.latest_for_phone_since(db, phone, since)
        except SQLAlchemyError as e:
            logger.error("cooldown_lookup_failed", phone=mask_phone(phone), error=str(e))
            raise PersistenceFailed("Failed to check cooldown") from e

        if recent:
            remaining = OrderService.remaining_cooldown(recent.created_at, now)
            store_order_admission_rejected_total.labels(endpoint=endpoint).inc()
            logger.info(
                "order_admission_rejected",
                phone=mask_phone(phone),
                conflicting_order=recent.order_id,
                retry_after=remaining,
            )
            raise RateLimited(remaining)

    @staticmethod
    async def _new_order_id(db: AsyncSession, now: datetime) -> str:
        for _ in range(ORDER_ID_ATTEMPTS):
            candidate = OrderService.generate_order_id(now)
            if not await OrderRepository.order_id_exists(db, candidate):
                return candidate
        raise PersistenceFailed("Failed to create order")

    @staticmethod
    async def create_order(db: AsyncSession, data: OrderCreate, now: datetime) -> Order:
        total = data.computed_total()
        if data.total_amount is not None and round(data.total_amount, 2) != total:
            raise ValidationFailed({"total_amount": "Total does not match the items in the order"})

        await OrderService.check_cooldown(db, data.customer_phone, now, endpoint="create")

        try:
            order_id = await OrderService._new_order_id(db, now)
            order = Order(
                order_id=order_id,
                customer_name=data.customer_name,
                customer_phone=data.customer_phone,
                customer_email=data.customer_email,
                delivery_address=data.delivery_address,
                alternate_phone=data.alternate_phone,
                delivery_instructions=data.delivery_instructions,
                total_amount=total,
                payment_method="COD",
                payment_status="Pending",
                order_status=OrderStatus.PENDING.value,
                created_at=now,
                updated_at=now,
                items=[
                    OrderItem(
                        product_id=item.product_id,
                        product_name=item.product_name,
                        product_price=item.product_price,
                        quantity=item.quantity,
                        subtotal=round(item.product_price * item.quantity, 2),
                    )
                    for item in data.items
                ],
            )
            order = await OrderRepository.create_order(db, order)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("order_create_failed", phone=mask_phone(data.customer_phone), error=str(e))
            raise PersistenceFailed("Failed to create order") from e

        store_orders_created_total.inc()
        logger.info(
            "order_created",
            order_id=order.order_id,
            phone=mask_phone(order.customer_phone),
            items=len(order.items),
            total_amount=order.total_amount,
        )
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: str) -> Order:
        try:
            order = await OrderRepository.get_by_order_id(db, order_id)
        except SQLAlchemyError as e:
            logger.error("order_lookup_failed", order_id=order_id, error=str(e))
            raise PersistenceFailed() from e
        if not order:
            raise NotFound("Order")
        return order

    @staticmethod
    async def get_tracking(db: AsyncSession, order_id: str) -> tuple[Order, TrackingView]:
        order = await OrderService.get_order(db, order_id)
        return order, build_tracking(order.order_status)
