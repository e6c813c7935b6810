from .jwt_handler import TokenService
from .dependencies import get_current_user
from .rate_limiter import build_limiter, user_id_or_ip, AUTH_RATE_LIMIT

__all__ = [
    "TokenService",
    "get_current_user",
    "build_limiter",
    "user_id_or_ip",
    "AUTH_RATE_LIMIT",
]
