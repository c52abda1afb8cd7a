from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.repository import UserRepository
from shared.config.database import get_db
from shared.errors import AuthenticationFailed

from .jwt_handler import verify_access_token

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="admin/login", auto_error=False)

async def get_current_admin(
    request: Request,
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> int:
    """Dependency guarding the back office; returns the admin user ID.

    A valid signature is not enough: the account behind the token must still exist.
    """
    admin_id = verify_access_token(token) if token else None
    if admin_id is None or await UserRepository.get_by_id(db, admin_id) is None:
        raise AuthenticationFailed("Could not validate credentials", challenge=True)

    # Store in request state for downstream use (like rate limiting)
    request.state.admin_id = admin_id
    return admin_id
