from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.clock import Clock, get_clock
from shared.config.database import get_db
from shared.security import get_current_admin

from .schemas import AdminReviewResponse, ReviewCreate, ReviewModeration, ReviewResponse
from .service import ReviewService

public_router = APIRouter(prefix="/products", tags=["Reviews"])
router = APIRouter(prefix="/admin/reviews", tags=["Admin"], dependencies=[Depends(get_current_admin)])


@public_router.get("/{product_id}/reviews", response_model=list[ReviewResponse])
async def list_reviews(product_id: int, db: AsyncSession = Depends(get_db)):
    return await ReviewService.list_for_product(db, product_id)


@public_router.post("/{product_id}/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def submit_review(
    product_id: int,
    payload: ReviewCreate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return await ReviewService.submit(db, product_id, payload, clock())


@router.get("", response_model=list[AdminReviewResponse])
async def list_all_reviews(db: AsyncSession = Depends(get_db)):
    return await ReviewService.list_all(db)


@router.patch("/{review_id}", response_model=AdminReviewResponse)
async def moderate_review(review_id: int, payload: ReviewModeration, db: AsyncSession = Depends(get_db)):
    return await ReviewService.moderate(db, review_id, payload.is_approved)
