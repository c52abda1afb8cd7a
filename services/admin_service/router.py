from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from services.order_service.schemas import OrderResponse
from services.order_service.service import OrderService
from shared.config.database import get_db
from shared.security import get_current_admin

from .schemas import OrderStatusUpdate, StatsResponse
from .service import AdminService

# THIS PROTECTS THE ENTIRE BACK OFFICE
router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(get_current_admin)])


@router.get("/orders", response_model=list[OrderResponse])
async def list_orders(
    status: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db)
):
    return await AdminService.list_orders(db, status)


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, db: AsyncSession = Depends(get_db)):
    return await OrderService.get_order(db, order_id)


@router.patch("/orders/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await AdminService.update_order_status(db, order_id, payload.order_status)


@router.get("/stats", response_model=StatsResponse)
async def stats(db: AsyncSession = Depends(get_db)):
    return await AdminService.stats(db)
