import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, fallback: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    if raw.strip():
        return tuple(item.strip() for item in raw.split(",") if item.strip())
    return fallback


def _default_database_url() -> str:
    db_user = os.getenv("POSTGRES_USER", "postgres")
    db_password = os.getenv("POSTGRES_PASSWORD", "postgres")
    db_host = os.getenv("POSTGRES_HOST", "localhost")  # In Docker, this will be 'postgres'
    db_port = os.getenv("POSTGRES_PORT", "5432")
    db_name = os.getenv("POSTGRES_DB", "inventory")
    return f"postgresql+asyncpg://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup and passed into the app."""

    database_url: str
    jwt_secret_key: str
    port: int = 3000
    db_echo: bool = False
    rate_limit_enabled: bool = True
    metrics_enabled: bool = True
    otlp_endpoint: str | None = None
    decrement_stock_on_order: bool = False
    # "*" lets any browser origin call the API
    cors_allowed_origins: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        secret = os.getenv("JWT_SECRET_KEY")
        if not secret:
            raise ValueError("FATAL ERROR: JWT_SECRET_KEY is not set in the environment!")

        return cls(
            database_url=os.getenv("DATABASE_URL") or _default_database_url(),
            jwt_secret_key=secret,
            port=int(os.getenv("PORT", "3000")),
            db_echo=_env_flag("DB_ECHO"),
            rate_limit_enabled=_env_flag("RATE_LIMIT_ENABLED", True),
            metrics_enabled=_env_flag("METRICS_ENABLED", True),
            otlp_endpoint=os.getenv("OTLP_ENDPOINT") or None,
            decrement_stock_on_order=_env_flag("DECREMENT_STOCK_ON_ORDER"),
            cors_allowed_origins=_env_list("CORS_ALLOWED_ORIGINS", ("*",)),
        )
