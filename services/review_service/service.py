from datetime import datetime

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.service import ProductService
from shared.errors import NotFound, PersistenceFailed
from shared.observability import store_reviews_total

from .models import Review
from .repository import ReviewRepository
from .schemas import ReviewCreate

logger = structlog.get_logger(__name__)


class ReviewService:

    @staticmethod
    async def list_for_product(db: AsyncSession, product_id: int):
        """Approved reviews of a product on sale, newest first."""
        await ProductService.get_product_by_id(db, product_id, active_only=True)
        return await ReviewRepository.list_reviews(db, product_id=product_id, approved_only=True)

    @staticmethod
    async def submit(db: AsyncSession, product_id: int, data: ReviewCreate, now: datetime) -> Review:
        """Customer reviews go live immediately; the back office can hide them later."""
        await ProductService.get_product_by_id(db, product_id, active_only=True)

        review = Review(product_id=product_id, is_approved=True, created_at=now, **data.model_dump())
        try:
            review = await ReviewRepository.create_review(db, review)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("review_create_failed", product_id=product_id, error=str(e))
            raise PersistenceFailed("Failed to submit review") from e

        store_reviews_total.labels(event="submitted").inc()
        logger.info("review_submitted", review_id=review.id, product_id=product_id, rating=review.rating)
        return review

    @staticmethod
    async def list_all(db: AsyncSession):
        return await ReviewRepository.list_reviews(db)

    @staticmethod
    async def moderate(db: AsyncSession, review_id: int, is_approved: bool) -> Review:
        review = await ReviewRepository.get_review(db, review_id)
        if not review:
            raise NotFound("Review")

        review.is_approved = is_approved
        try:
            await ReviewRepository.save(db)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("review_update_failed", review_id=review_id, error=str(e))
            raise PersistenceFailed("Failed to update review") from e

        store_reviews_total.labels(event="approved" if is_approved else "hidden").inc()
        logger.info("review_moderated", review_id=review_id, is_approved=is_approved)
        return review
