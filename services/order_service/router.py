from dataclasses import asdict

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.clock import Clock, get_clock
from shared.config.database import get_db
from shared.config.settings import CHECKOUT_RATE_LIMIT
from shared.security import limiter

from .schemas import CooldownCheck, CooldownResponse, OrderCreate, OrderResponse, TrackingResponse
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(CHECKOUT_RATE_LIMIT)
async def create_order(
    request: Request,                          # REQUIRED: slowapi needs this to check IP/Headers
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return await OrderService.create_order(db, payload, clock())


# Pre-flight used by the checkout page before the full submission
@router.post("/check-cooldown", response_model=CooldownResponse)
@limiter.limit(CHECKOUT_RATE_LIMIT)
async def check_cooldown(
    request: Request,
    payload: CooldownCheck,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    await OrderService.check_cooldown(db, payload.phone.strip(), clock())
    return CooldownResponse()


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, db: AsyncSession = Depends(get_db)):
    return await OrderService.get_order(db, order_id)


@router.get("/{order_id}/tracking", response_model=TrackingResponse)
async def get_tracking(order_id: str, db: AsyncSession = Depends(get_db)):
    order, view = await OrderService.get_tracking(db, order_id)
    return TrackingResponse(
        order_id=order.order_id,
        status=view.status,
        is_refund=view.is_refund,
        current_step=view.current_step,
        steps=[asdict(step) for step in view.steps],
        notice=view.notice,
    )
