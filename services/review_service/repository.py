from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Review


class ReviewRepository:
    @staticmethod
    async def create_review(db: AsyncSession, review: Review) -> Review:
        db.add(review)
        await db.commit()
        return review

    @staticmethod
    async def get_review(db: AsyncSession, review_id: int) -> Optional[Review]:
        result = await db.execute(select(Review).where(Review.id == review_id))
        return result.scalars().first()

    @staticmethod
    async def list_reviews(
        db: AsyncSession,
        product_id: Optional[int] = None,
        approved_only: bool = False,
    ) -> Sequence[Review]:
        stmt = select(Review).order_by(Review.created_at.desc(), Review.id.desc())
        if product_id is not None:
            stmt = stmt.where(Review.product_id == product_id)
        if approved_only:
            stmt = stmt.where(Review.is_approved.is_(True))
        result = await db.execute(stmt)
        return result.scalars().all()

    @staticmethod
    async def save(db: AsyncSession):
        await db.commit()
