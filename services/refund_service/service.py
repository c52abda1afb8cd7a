from datetime import datetime

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.order_service.lifecycle import OrderStatus
from services.order_service.service import OrderService
from shared.errors import NotFound, PersistenceFailed, TransitionDenied, ValidationFailed
from shared.observability import store_refunds_total

from .models import Refund
from .repository import RefundRepository
from .schemas import RefundCreate, RefundResponse, RefundStatus

logger = structlog.get_logger(__name__)


class RefundService:

    @staticmethod
    def to_response(refund: Refund) -> RefundResponse:
        return RefundResponse(
            id=refund.id,
            order_id=refund.order.order_id,
            customer_name=refund.order.customer_name,
            amount=refund.amount,
            reason=refund.reason,
            status=refund.status,
            created_at=refund.created_at,
            processed_at=refund.processed_at,
        )

    @staticmethod
    async def create_refund(db: AsyncSession, data: RefundCreate, now: datetime) -> Refund:
        """Open a refund for an order and move the order onto the refund branch."""
        order = await OrderService.get_order(db, data.order_id)

        if await RefundRepository.get_for_order(db, order.id):
            raise ValidationFailed({"order_id": "A refund already exists for this order"})

        amount = data.amount if data.amount is not None else order.total_amount
        if amount > order.total_amount:
            raise ValidationFailed({"amount": "Refund cannot exceed the order total"})

        refund = Refund(
            order=order,
            amount=amount,
            reason=data.reason,
            status=RefundStatus.PENDING.value,
            created_at=now,
            processed_at=None,
        )
        order.order_status = OrderStatus.REFUND_PENDING.value
        try:
            refund = await RefundRepository.create_refund(db, refund)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("refund_create_failed", order_id=order.order_id, error=str(e))
            raise PersistenceFailed("Failed to create refund") from e

        store_refunds_total.labels(event="created").inc()
        logger.info("refund_created", refund_id=refund.id, order_id=order.order_id, amount=amount)
        return refund

    @staticmethod
    async def list_refunds(db: AsyncSession):
        return await RefundRepository.list_refunds(db)

    @staticmethod
    async def update_status(db: AsyncSession, refund_id: int, status: RefundStatus, now: datetime) -> Refund:
        """Settle a refund. Pending -> Processed happens once; a processed refund is final."""
        refund = await RefundRepository.get_refund(db, refund_id)
        if not refund:
            raise NotFound("Refund")

        if refund.status == status.value:
            return refund
        if refund.status == RefundStatus.PROCESSED.value:
            raise TransitionDenied(refund.status, status.value, subject="refund")

        refund.status = status.value
        if status is RefundStatus.PROCESSED:
            refund.processed_at = now
            refund.order.order_status = OrderStatus.REFUNDED.value

        try:
            await RefundRepository.save(db)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("refund_update_failed", refund_id=refund_id, error=str(e))
            raise PersistenceFailed("Failed to update refund") from e

        if status is RefundStatus.PROCESSED:
            store_refunds_total.labels(event="processed").inc()
        logger.info("refund_updated", refund_id=refund_id, status=refund.status)
        return refund
