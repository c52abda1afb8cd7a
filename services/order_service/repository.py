from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Order


class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, order: Order) -> Order:
        # Order and its items are flushed and committed together
        db.add(order)
        await db.commit()
        return order

    @staticmethod
    async def get_by_order_id(db: AsyncSession, order_id: str) -> Optional[Order]:
        result = await db.execute(select(Order).where(Order.order_id == order_id))
        return result.scalars().first()

    @staticmethod
    async def order_id_exists(db: AsyncSession, order_id: str) -> bool:
        result = await db.execute(select(Order.id).where(Order.order_id == order_id))
        return result.first() is not None

    @staticmethod
    async def latest_for_phone_since(
        db: AsyncSession, phone: str, since: datetime
    ) -> Optional[Order]:
        """Most recent order for `phone` created strictly after `since`."""
        result = await db.execute(
            select(Order)
            .where(Order.customer_phone == phone)
            .where(Order.created_at > since)
            .order_by(Order.created_at.desc())
            .limit(1)
        )
        return result.scalars().first()

    @staticmethod
    async def list_orders(db: AsyncSession, status: Optional[str] = None) -> Sequence[Order]:
        stmt = select(Order).order_by(Order.created_at.desc(), Order.id.desc())
        if status:
            stmt = stmt.where(Order.order_status == status)
        result = await db.execute(stmt)
        return result.scalars().all()

    @staticmethod
    async def update_status(db: AsyncSession, order: Order, status: str) -> Order:
        order.order_status = status
        await db.commit()
        return order

    @staticmethod
    async def count_orders(db: AsyncSession, status: Optional[str] = None) -> int:
        stmt = select(func.count(Order.id))
        if status:
            stmt = stmt.where(Order.order_status == status)
        result = await db.execute(stmt)
        return result.scalar_one()

    @staticmethod
    async def total_revenue(db: AsyncSession) -> float:
        result = await db.execute(select(func.coalesce(func.sum(Order.total_amount), 0.0)))
        return float(result.scalar_one())
