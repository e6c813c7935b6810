from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from shared.config.settings import Settings
from shared.errors import InvalidToken

AUTH_RATE_LIMIT = "20/minute"


def user_id_or_ip(request: Request) -> str:
    """
    Key function for SlowAPI.
    Extracts the user ID directly from the Authorization header if available.
    Falls back to the client's IP address if unauthenticated.
    """
    auth_header = request.headers.get("Authorization")

    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.split(" ", 1)[1]
        try:
            return f"user:{request.app.state.token_service.verify(token)}"
        except InvalidToken:
            pass

    # Fallback to IP address (handles proxies if X-Forwarded-For is set correctly by Uvicorn)
    return f"ip:{get_remote_address(request)}"


def build_limiter(settings: Settings) -> Limiter:
    """One limiter per application, each with its own in-memory counters."""
    return Limiter(key_func=user_id_or_ip, enabled=settings.rate_limit_enabled)
