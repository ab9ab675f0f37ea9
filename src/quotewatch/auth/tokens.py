"""Signed, time-limited session tokens (JWT via python-jose).

Tokens are stateless: validity depends only on signature, issuer and expiry.
There is no revocation list, so a token stays valid until it expires even
after logout.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from quotewatch.db.models import User
from quotewatch.errors import TokenExpiredError, TokenInvalidError
from quotewatch.utils import utc_now

logger = logging.getLogger(__name__)

DEFAULT_LIFETIME = timedelta(days=7)


@dataclass(frozen=True)
class TokenClaims:
    """Decoded token payload."""

    user_id: int
    email: str
    is_premium: bool
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and verifies session tokens bound to a user and their premium flag."""

    def __init__(
        self,
        secret: str,
        *,
        lifetime: timedelta = DEFAULT_LIFETIME,
        issuer: str = "quotewatch",
        algorithm: str = "HS256",
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._issuer = issuer
        self._algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, user: User, *, now: datetime | None = None) -> str:
        """Sign a token for `user`, valid for `lifetime` from `now`."""
        issued_at = now or utc_now()
        payload = {
            "user_id": user.id,
            "email": user.email,
            "is_premium": bool(user.is_premium),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
            "iss": self._issuer,
            "sub": str(user.id),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature, issuer and expiry.

        Raises:
            TokenExpiredError: The token was valid but its `exp` has passed.
            TokenInvalidError: Bad signature, malformed token, wrong issuer or missing claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except JWTError as e:
            logger.debug("Token rejected: %s", e)
            raise TokenInvalidError() from e

        try:
            user_id = int(payload["user_id"])
            if payload.get("sub") != str(user_id):
                raise ValueError("subject does not match user_id")
            return TokenClaims(
                user_id=user_id,
                email=str(payload["email"]),
                is_premium=bool(payload.get("is_premium", False)),
                issued_at=_from_timestamp(payload["iat"]),
                expires_at=_from_timestamp(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("Token has malformed claims: %s", e)
            raise TokenInvalidError() from e


def _from_timestamp(value: int | float) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)
