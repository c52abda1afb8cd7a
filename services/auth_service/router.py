from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db

from .schemas import AdminLogin, TokenResponse
from .service import AuthService

router = APIRouter(prefix="/admin", tags=["Authentication"])


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate and receive a JWT access token",
)
async def login(payload: AdminLogin, db: AsyncSession = Depends(get_db)):
    return await AuthService.login(db, payload)
