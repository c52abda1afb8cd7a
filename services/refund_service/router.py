from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.clock import Clock, get_clock
from shared.config.database import get_db
from shared.security import get_current_admin

from .schemas import RefundCreate, RefundResponse, RefundUpdate
from .service import RefundService

# Router-level dependency protects all refund endpoints
router = APIRouter(prefix="/admin/refunds", tags=["Admin"], dependencies=[Depends(get_current_admin)])


@router.get("", response_model=list[RefundResponse])
async def list_refunds(db: AsyncSession = Depends(get_db)):
    refunds = await RefundService.list_refunds(db)
    return [RefundService.to_response(refund) for refund in refunds]


@router.post("", response_model=RefundResponse, status_code=status.HTTP_201_CREATED)
async def create_refund(
    payload: RefundCreate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    refund = await RefundService.create_refund(db, payload, clock())
    return RefundService.to_response(refund)


@router.patch("/{refund_id}", response_model=RefundResponse)
async def update_refund(
    refund_id: int,
    payload: RefundUpdate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    refund = await RefundService.update_status(db, refund_id, payload.status, clock())
    return RefundService.to_response(refund)
