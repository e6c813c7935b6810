from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from shared.errors import MissingToken

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


async def get_current_user(request: Request, token: str | None = Depends(oauth2_scheme)) -> int:
    """Auth gate: validates the bearer token and returns the caller's user id."""
    if not token:
        raise MissingToken()

    user_id = request.app.state.token_service.verify(token)

    # Store in request state for downstream use (like rate limiting)
    request.state.user_id = user_id
    return user_id
