"""Application errors mapped to HTTP responses by the handlers in main.py."""


class AppError(Exception):
    """Base error carrying the status code and the client-facing message."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Client data failed a schema rule."""

    status_code = 400
    default_message = "Invalid request"


class AuthError(AppError):
    """Missing (401) or invalid/expired (403) bearer token."""

    status_code = 401
    default_message = "Access token required"


class NotFoundError(AppError):
    """Resource absent or owned by someone else."""

    status_code = 404
    default_message = "Task not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "User with this email already exists"


class InternalError(AppError):
    """Unexpected failure. Details are logged, never returned."""

    status_code = 500
    default_message = "Internal server error"
