from .jwt_handler import create_access_token, verify_access_token
from .dependencies import get_current_admin
from .rate_limiter import limiter, admin_id_or_ip

__all__ = [
    "create_access_token",
    "verify_access_token",
    "get_current_admin",
    "limiter",
    "admin_id_or_ip"
]
