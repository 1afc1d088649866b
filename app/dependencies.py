"""Authentication dependencies for FastAPI routes.

`get_current_user` guards protected routes: a missing bearer token is a 401,
an invalid or expired one a 403, and the handler never runs in either case.
`get_optional_user` never rejects and yields None instead.
"""

import logging
from dataclasses import dataclass

from fastapi import Request

from app.errors import AuthError, InternalError
from app.services.jwt import TokenError, get_jwt_service

logger = logging.getLogger("taskboard")

BEARER_PREFIX = "Bearer "


@dataclass
class CurrentUser:
    """Authenticated user context."""

    user_id: int
    email: str
    name: str | None


def extract_bearer_token(request: Request) -> str | None:
    """Token from an `Authorization: Bearer <token>` header, if present."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        return None
    return auth_header[len(BEARER_PREFIX) :].strip() or None


def _identity_from_claims(claims: dict) -> CurrentUser:
    return CurrentUser(
        user_id=int(claims["userId"]),
        email=claims["email"],
        name=claims.get("name"),
    )


def get_current_user(request: Request) -> CurrentUser:
    """Require a valid bearer token and attach its identity to request.state.user."""
    try:
        token = extract_bearer_token(request)
        if not token:
            raise AuthError("Access token required", status_code=401)

        try:
            claims = get_jwt_service().verify(token)
        except TokenError as e:
            raise AuthError(str(e), status_code=403) from None

        try:
            user = _identity_from_claims(claims)
        except (KeyError, TypeError, ValueError):
            raise AuthError("Invalid token", status_code=403) from None
    except AuthError:
        raise
    except Exception as e:
        logger.exception("Authentication error")
        raise InternalError("Authentication error") from e

    request.state.user = user
    return user


def get_optional_user(request: Request) -> CurrentUser | None:
    """Return the authenticated user if a valid token exists; otherwise None."""
    try:
        token = extract_bearer_token(request)
        user = None
        if token:
            try:
                user = _identity_from_claims(get_jwt_service().verify(token))
            except (TokenError, KeyError, TypeError, ValueError):
                user = None
    except Exception as e:
        logger.exception("Authentication error")
        raise InternalError("Authentication error") from e

    request.state.user = user
    return user
