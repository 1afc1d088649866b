"""Response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """`{success, message?, data?}`. Routes serialize with exclude_unset so absent keys stay absent."""

    success: bool = True
    message: str | None = None
    data: T | None = None
