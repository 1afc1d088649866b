"""JWT Token Service."""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, jwt
from jose.exceptions import JOSEError

from app.config import get_settings


class TokenError(Exception):
    """Base class for token failures."""


class TokenGenerationError(TokenError):
    """Signing failed, usually a misconfigured secret or algorithm."""


class TokenExpiredError(TokenError):
    pass


class InvalidTokenError(TokenError):
    """Malformed, mis-signed or otherwise unverifiable token."""


class JWTService:
    """Issues and verifies signed, time-limited bearer tokens."""

    def __init__(
        self,
        secret_key: str | None = None,
        algorithm: str | None = None,
        expire_minutes: int | None = None,
    ) -> None:
        settings = get_settings()
        self.secret_key = secret_key if secret_key is not None else settings.JWT_SECRET_KEY
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.expire_minutes = expire_minutes if expire_minutes is not None else settings.JWT_EXPIRE_MINUTES

    def issue(self, claims: dict[str, Any], expires_in: timedelta | None = None) -> str:
        """Sign claims plus `iat`/`exp` and return the compact token."""
        if not self.secret_key:
            raise TokenGenerationError("Token generation failed")

        issued_at = datetime.now(timezone.utc)
        lifetime = expires_in if expires_in is not None else timedelta(minutes=self.expire_minutes)
        payload = {
            **claims,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + lifetime).timestamp()),
        }
        try:
            return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        except (JOSEError, TypeError, ValueError) as e:
            raise TokenGenerationError("Token generation failed") from e

    def verify(self, token: str) -> dict[str, Any]:
        """Check signature and expiry and return the claims."""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm], options={"require_exp": True})
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except JOSEError as e:
            raise InvalidTokenError("Invalid token") from e
        except (TypeError, ValueError, AttributeError) as e:
            raise InvalidTokenError("Token verification failed") from e

    def decode(self, token: str) -> dict[str, Any] | None:
        """Return claims without verifying anything. For diagnostics only."""
        try:
            return jwt.get_unverified_claims(token)
        except JOSEError:
            return None

    def create_user_token(self, user_id: int, email: str, name: str | None) -> str:
        """Issue a token for the given user."""
        return self.issue({"userId": user_id, "email": email, "name": name})


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService()
    return _jwt_service
