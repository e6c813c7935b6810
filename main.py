from datetime import datetime, timezone
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.database import Database
from shared.config.settings import Settings
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import TokenService, build_limiter

# IMPORTANT: import models so they register with Base
from services.auth_service import models as auth_models  # noqa: F401
from services.product_service import models as product_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401

from services.auth_service.router import build_router as build_auth_router
from services.product_service.router import router as product_router
from services.order_service.router import router as order_router

SERVER_NAME = "ATC Next Gen API"
VERSION = "1.0.0"

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title=SERVER_NAME, version=VERSION)
    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.token_service = TokenService(settings.jwt_secret_key)

    limiter = build_limiter(settings)
    app.state.limiter = limiter

    # --- OBSERVABILITY BOOTSTRAP ---
    setup_observability(app, "inventory_api", settings)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(build_auth_router(limiter))
    app.include_router(product_router)
    app.include_router(order_router)

    @app.get("/status", tags=["Status"])
    async def server_status():
        return {
            "server": SERVER_NAME,
            "version": VERSION,
            "status": "running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.on_event("startup")
    async def startup_event():
        await app.state.database.create_all()
        logger.info("startup_complete", port=settings.port)

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.database.dispose()

    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
