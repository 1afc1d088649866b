"""Authentication API endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_optional_user
from app.errors import AuthError, ConflictError
from app.rate_limit import limiter
from app.schemas.auth import AuthData, SessionData, UserResponse
from app.schemas.common import ApiResponse
from app.services.auth import AuthResult, get_auth_service
from app.services.jwt import get_jwt_service
from app.services.validation import get_request_validator

logger = logging.getLogger("taskboard")

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_data(result: AuthResult) -> AuthData:
    token = get_jwt_service().create_user_token(
        user_id=result.user_id,  # type: ignore[arg-type]
        email=result.email,  # type: ignore[arg-type]
        name=result.name,
    )
    user = UserResponse(id=result.user_id, email=result.email, name=result.name)  # type: ignore[arg-type]
    return AuthData(user=user, token=token)


@router.post(
    "/register",
    status_code=201,
    response_model=ApiResponse[AuthData],
    response_model_exclude_unset=True,
)
@limiter.limit("5/minute")
def register(
    request: Request,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> ApiResponse[AuthData]:
    """Register a new user account."""
    body = get_request_validator().require("register", payload)
    result = get_auth_service().register(db, body["email"], body["password"], body.get("name"))

    if not result.success:
        raise ConflictError(result.error)

    return ApiResponse(success=True, message="User registered successfully", data=_auth_data(result))


@router.post("/login", response_model=ApiResponse[AuthData], response_model_exclude_unset=True)
@limiter.limit("10/minute")
def login(
    request: Request,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> ApiResponse[AuthData]:
    """Authenticate and receive a JWT token."""
    body = get_request_validator().require("login", payload)
    result = get_auth_service().authenticate(db, body["email"], body["password"])

    if not result.success:
        logger.info("Failed login for %s", body["email"])
        raise AuthError(result.error, status_code=401)

    return ApiResponse(success=True, message="Login successful", data=_auth_data(result))


@router.get("/me", response_model=ApiResponse[SessionData], response_model_exclude_unset=True)
def me(user: CurrentUser | None = Depends(get_optional_user)) -> ApiResponse[SessionData]:
    """Report whether the request carries a valid token, and for whom."""
    if user is None:
        return ApiResponse(success=True, data=SessionData(authenticated=False))
    return ApiResponse(
        success=True,
        data=SessionData(
            authenticated=True,
            user=UserResponse(id=user.user_id, email=user.email, name=user.name),
        ),
    )
