from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request
from .jwt_handler import verify_access_token

def admin_id_or_ip(request: Request) -> str:
    """
    Key function for SlowAPI.
    Uses the admin ID from the Authorization header when present,
    otherwise the client's IP address (shoppers are anonymous).
    """
    auth_header = request.headers.get("Authorization")

    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.split(" ")[1]
        admin_id = verify_access_token(token)
        if admin_id is not None:
            return f"admin:{admin_id}"

    return f"ip:{get_remote_address(request)}"

limiter = Limiter(key_func=admin_id_or_ip)
