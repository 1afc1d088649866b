"""Named request schemas and first-error message resolution."""

from dataclasses import dataclass
from typing import Any

import pydantic

from app.errors import ValidationError
from app.schemas.auth import LoginRequest, RegisterRequest
from app.schemas.task import TaskCreate, TaskUpdate

SCHEMAS: dict[str, type[pydantic.BaseModel]] = {
    "register": RegisterRequest,
    "login": LoginRequest,
    "task.create": TaskCreate,
    "task.update": TaskUpdate,
}

# Partial schemas return only the keys the caller sent; no defaults applied.
PARTIAL_SCHEMAS = {"task.update"}

FIELD_LABELS = {
    "email": "Email",
    "password": "Password",
    "name": "Name",
    "title": "Title",
    "description": "Description",
    "status": "Status",
    "priority": "Priority",
    "due_date": "Due date",
}

FIELD_MESSAGES = {
    ("email", "value_error"): "Please enter a valid email address",
    ("password", "string_too_short"): "Password must be at least 8 characters long",
    ("name", "string_too_short"): "Name must be at least 2 characters long",
    ("name", "string_too_long"): "Name cannot exceed 100 characters",
    ("title", "string_too_short"): "Title cannot be empty",
    ("title", "string_too_long"): "Title cannot exceed 255 characters",
    ("description", "string_too_long"): "Description cannot exceed 1000 characters",
    ("status", "literal_error"): "Status must be pending, in_progress, or completed",
    ("priority", "literal_error"): "Priority must be low, medium, or high",
}

GENERIC_MESSAGES = {
    "missing": "{label} is required",
    "string_type": "{label} must be a string",
    "extra_forbidden": "{field} is not allowed",
    "model_type": "Request body must be a JSON object",
    "dict_type": "Request body must be a JSON object",
}


@dataclass
class ValidationResult:
    """Outcome of validating a payload against a named schema."""

    value: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def first_error_message(exc: pydantic.ValidationError) -> str:
    """Human-readable message for the first violated rule."""
    error = exc.errors(include_url=False)[0]
    field = str(error["loc"][0]) if error["loc"] else ""
    kind = error["type"]
    label = FIELD_LABELS.get(field, field)

    if (field, kind) in FIELD_MESSAGES:
        return FIELD_MESSAGES[(field, kind)]
    if field == "due_date" and kind.startswith("date"):
        return "Due date must be a valid date"
    if kind in GENERIC_MESSAGES:
        return GENERIC_MESSAGES[kind].format(label=label, field=field)
    return error["msg"]


class RequestValidator:
    """Validates request payloads against the named schemas."""

    def validate(self, schema: str, payload: Any) -> ValidationResult:
        """Return the coerced value, or the message of the first failing rule."""
        model_cls = SCHEMAS[schema]
        try:
            model = model_cls.model_validate(payload)
        except pydantic.ValidationError as exc:
            return ValidationResult(error=first_error_message(exc))
        return ValidationResult(value=model.model_dump(exclude_unset=schema in PARTIAL_SCHEMAS))

    def require(self, schema: str, payload: Any) -> dict[str, Any]:
        """Like validate(), raising ValidationError on failure."""
        result = self.validate(schema, payload)
        if not result.ok:
            raise ValidationError(result.error)
        return result.value  # type: ignore[return-value]


_request_validator: RequestValidator | None = None


def get_request_validator() -> RequestValidator:
    """Get singleton request validator instance."""
    global _request_validator
    if _request_validator is None:
        _request_validator = RequestValidator()
    return _request_validator
