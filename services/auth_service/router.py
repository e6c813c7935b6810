from fastapi import APIRouter, Depends, Request, status
from slowapi import Limiter
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security.rate_limiter import AUTH_RATE_LIMIT

from .schemas import TokenResponse, UserCredentials
from .service import AuthService


def build_router(limiter: Limiter) -> APIRouter:
    """Auth routes rate limited by the owning application's ``limiter``."""
    # No auth gate here: these routes mint the tokens the other routers require
    router = APIRouter(prefix="/auth", tags=["Authentication"])

    @router.post(
        "/register",
        response_model=TokenResponse,
        status_code=status.HTTP_201_CREATED,
        summary="Register a new user account and receive a token",
    )
    @limiter.limit(AUTH_RATE_LIMIT)
    async def register(request: Request, payload: UserCredentials, db: AsyncSession = Depends(get_db)):
        return await AuthService.register(db, request.app.state.token_service, payload)

    @router.post(
        "/login",
        response_model=TokenResponse,
        summary="Authenticate and receive a bearer token",
    )
    @limiter.limit(AUTH_RATE_LIMIT)
    async def login(request: Request, payload: UserCredentials, db: AsyncSession = Depends(get_db)):
        return await AuthService.login(db, request.app.state.token_service, payload)

    return router
