"""
Admin authentication. Tokens are signed JWTs with an expiry; the user id
is the subject.
"""
import structlog
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import AuthenticationFailed
from shared.security.jwt_handler import create_access_token

from .models import User
from .repository import UserRepository
from .schemas import AdminLogin, AdminResponse, TokenResponse

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:

    @staticmethod
    def _hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def _verify_password(plain: str, hashed: str) -> bool:
        return _pwd_context.verify(plain, hashed)

    @staticmethod
    async def login(db: AsyncSession, data: AdminLogin) -> TokenResponse:
        user = await UserRepository.get_by_email(db, data.email)
        # Same message for unknown email and wrong password
        if not user or not AuthService._verify_password(data.password, user.hashed_password):
            logger.warning("admin_login_failed", email=data.email)
            raise AuthenticationFailed()

        token = create_access_token(user.id)
        logger.info("admin_login", user_id=user.id)
        return TokenResponse(access_token=token, user=AdminResponse.model_validate(user))

    @staticmethod
    async def ensure_admin(db: AsyncSession, email: str, password: str) -> User | None:
        """Create the bootstrap admin when no account exists yet."""
        if await UserRepository.count(db) > 0:
            return None
        user = User(email=email, hashed_password=AuthService._hash_password(password))
        user = await UserRepository.create(db, user)
        logger.info("admin_bootstrapped", email=email)
        return user
