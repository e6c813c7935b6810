from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from fastapi import Request

from .settings import Settings

Base = declarative_base()


class Database:
    """Owns the async engine and session factory for one application instance."""

    def __init__(self, settings: Settings):
        self.engine = create_async_engine(settings.database_url, echo=settings.db_echo)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    async def create_all(self) -> None:
        # IMPORTANT: models must be imported before this so they register with Base
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request):
    async with request.app.state.database.session_factory() as session:
        yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
