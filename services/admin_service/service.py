from typing import Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.order_service.lifecycle import OrderStatus, TransitionPolicy, is_transition_allowed
from services.order_service.repository import OrderRepository
from services.order_service.service import OrderService
from shared.config.settings import ORDER_STATUS_POLICY
from shared.errors import PersistenceFailed, TransitionDenied
from shared.observability import store_order_status_updates_total

from .schemas import StatsResponse

logger = structlog.get_logger(__name__)

ALL_STATUSES = "All"

STATUS_POLICY = TransitionPolicy(ORDER_STATUS_POLICY)

# Free-form statuses would give the counter unbounded label values
KNOWN_STATUSES = frozenset(s.value for s in OrderStatus)
OTHER_STATUS_LABEL = "other"


def status_label(status: str) -> str:
    return status if status in KNOWN_STATUSES else OTHER_STATUS_LABEL


class AdminService:

    @staticmethod
    async def list_orders(db: AsyncSession, status: Optional[str] = None):
        if status == ALL_STATUSES:
            status = None
        return await OrderRepository.list_orders(db, status)

    @staticmethod
    async def update_order_status(
        db: AsyncSession,
        order_id: str,
        new_status: str,
        policy: Optional[TransitionPolicy] = None,
    ):
        """Manual override from the back office.

        Under the default permissive policy every value is written as-is,
        including backwards moves; strict mode consults the transition table.
        """
        policy = policy or STATUS_POLICY
        order = await OrderService.get_order(db, order_id)
        previous = order.order_status

        if not is_transition_allowed(previous, new_status, policy):
            logger.warning("order_status_denied", order_id=order_id, current=previous, requested=new_status)
            raise TransitionDenied(previous, new_status)

        try:
            order = await OrderRepository.update_status(db, order, new_status)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("order_status_update_failed", order_id=order_id, error=str(e))
            raise PersistenceFailed("Failed to update order") from e

        store_order_status_updates_total.labels(status=status_label(new_status)).inc()
        logger.info("order_status_changed", order_id=order_id, previous=previous, status=new_status)
        return order

    @staticmethod
    async def stats(db: AsyncSession) -> StatsResponse:
        try:
            return StatsResponse(
                total_orders=await OrderRepository.count_orders(db),
                total_revenue=await OrderRepository.total_revenue(db),
                pending_orders=await OrderRepository.count_orders(db, OrderStatus.PENDING.value),
                delivered_orders=await OrderRepository.count_orders(db, OrderStatus.DELIVERED.value),
            )
        except SQLAlchemyError as e:
            logger.error("stats_failed", error=str(e))
            raise PersistenceFailed("Failed to fetch stats") from e
