"""Pydantic schemas for authentication endpoints."""

import re
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, EmailStr, StringConstraints, field_validator
from pydantic_core import PydanticCustomError

# Lookaheads for each character class; the first character must also be one of the allowed ones.
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]")

Password = Annotated[str, StringConstraints(min_length=8)]
DisplayName = Annotated[str, StringConstraints(min_length=2, max_length=100)]


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: Password
    name: DisplayName | None = None

    @field_validator("name", mode="before")
    @classmethod
    def reject_null_name(cls, value: Any) -> Any:
        # Omitting the name is fine; sending null is not.
        if value is None:
            raise PydanticCustomError("string_type", "Name must be a string")
        return value

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        if not PASSWORD_PATTERN.match(value):
            raise PydanticCustomError(
                "password_strength",
                "Password must contain uppercase, lowercase, number, and special character",
            )
        return value


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def reject_empty_password(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("password_required", "Password is required")
        return value


class UserResponse(BaseModel):
    id: int
    email: str
    name: str | None

    model_config = {"from_attributes": True}


class AuthData(BaseModel):
    user: UserResponse
    token: str


class SessionData(BaseModel):
    authenticated: bool
    user: UserResponse | None = None
