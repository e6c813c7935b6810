import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import DuplicateUser, InvalidCredentials
from shared.observability.metrics import inventory_auth_attempts_total
from shared.security.jwt_handler import TokenService

from .models import User
from .repository import UserRepository
from .schemas import TokenResponse, UserCredentials

logger = structlog.get_logger(__name__)


class AuthService:

    @staticmethod
    def _verify_password(supplied: str, stored: str) -> bool:
        # Plaintext, non-constant-time comparison. Known security gap; the
        # password column holds the raw value until hashing is agreed on.
        return supplied == stored

    @staticmethod
    async def register(db: AsyncSession, tokens: TokenService, data: UserCredentials) -> TokenResponse:
        existing = await UserRepository.get_by_username(db, data.username)
        if existing:
            inventory_auth_attempts_total.labels(action="register", outcome="rejected").inc()
            raise DuplicateUser()

        user = User(username=data.username, password=data.password)
        try:
            user = await UserRepository.create(db, user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same name
            await db.rollback()
            inventory_auth_attempts_total.labels(action="register", outcome="rejected").inc()
            raise DuplicateUser() from exc

        # Issued only once the user row is committed
        token = tokens.issue(user.id)
        inventory_auth_attempts_total.labels(action="register", outcome="success").inc()
        logger.info("user_registered", user_id=user.id)
        return TokenResponse(token=token)

    @staticmethod
    async def login(db: AsyncSession, tokens: TokenService, data: UserCredentials) -> TokenResponse:
        user = await UserRepository.get_by_username(db, data.username)
        if not user or not AuthService._verify_password(data.password, user.password):
            inventory_auth_attempts_total.labels(action="login", outcome="rejected").inc()
            logger.info("login_failed")
            raise InvalidCredentials()

        inventory_auth_attempts_total.labels(action="login", outcome="success").inc()
        logger.info("login_succeeded", user_id=user.id)
        return TokenResponse(token=tokens.issue(user.id))
