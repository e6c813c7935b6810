import math
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt

from shared.errors import InvalidToken

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = 24


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies signed bearer tokens. Stateless apart from the key."""

    def __init__(self, secret_key: str, clock: Callable[[], datetime] = _utcnow):
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key")
        self._secret_key = secret_key
        self._clock = clock

    def issue(self, user_id: int) -> str:
        """Creates a JWT for ``user_id`` that expires 24 hours from now."""
        issued_at = self._clock()
        expire = issued_at + timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
        to_encode = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            # Rounded up so a fractional issuance second never shortens the lifetime
            "exp": math.ceil(expire.timestamp()),
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> int:
        """Returns the user id bound to ``token`` or raises InvalidToken."""
        try:
            # Expiry is checked against our own clock below
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as exc:
            raise InvalidToken() from exc

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidToken()
        if self._clock().timestamp() > exp:
            raise InvalidToken()

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidToken() from exc
