from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Refund


class RefundRepository:
    @staticmethod
    async def create_refund(db: AsyncSession, refund: Refund) -> Refund:
        db.add(refund)
        await db.commit()
        return refund

    @staticmethod
    async def get_refund(db: AsyncSession, refund_id: int) -> Optional[Refund]:
        result = await db.execute(select(Refund).where(Refund.id == refund_id))
        return result.scalars().first()

    @staticmethod
    async def get_for_order(db: AsyncSession, order_pk: int) -> Optional[Refund]:
        result = await db.execute(select(Refund).where(Refund.order_pk == order_pk))
        return result.scalars().first()

    @staticmethod
    async def list_refunds(db: AsyncSession) -> Sequence[Refund]:
        result = await db.execute(select(Refund).order_by(Refund.created_at.desc(), Refund.id.desc()))
        return result.scalars().all()

    @staticmethod
    async def save(db: AsyncSession):
        await db.commit()
