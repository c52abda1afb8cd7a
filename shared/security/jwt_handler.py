from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt

from shared.config.settings import JWT_SECRET_KEY as SECRET_KEY

if not SECRET_KEY:
    raise ValueError("FATAL ERROR: JWT_SECRET_KEY is not set in the environment!")

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
ADMIN_SCOPE = "admin"


def create_access_token(admin_id: int, expires_delta: timedelta | None = None) -> str:
    """Signed, expiring token for a back-office session."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {"sub": str(admin_id), "scope": ADMIN_SCOPE, "exp": expire}
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str) -> int | None:
    """Admin id carried by a valid token; None if it is forged, expired or not an admin token."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    if payload.get("scope") != ADMIN_SCOPE or not str(subject or "").isdigit():
        return None
    return int(subject)
