"""Pydantic schemas for task endpoints."""

from datetime import date, datetime, timezone
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator
from pydantic_core import PydanticCustomError

TaskStatus = Literal["pending", "in_progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]

Title = Annotated[str, StringConstraints(min_length=1, max_length=255)]
Description = Annotated[str, StringConstraints(max_length=1000)]


class _TaskPayload(BaseModel):
    """Validators shared by create and update.

    Fields are declared on the subclasses so that errors are reported in
    title, description, status, priority, due_date order.
    """

    model_config = ConfigDict(extra="forbid")

    @field_validator("due_date", mode="before", check_fields=False)
    @classmethod
    def accept_iso_datetime(cls, value: Any) -> Any:
        """Full ISO-8601 timestamps are checked against the current moment, then truncated to their UTC date.

        A timestamp without an offset is taken as UTC.
        """
        if isinstance(value, str) and "T" in value:
            try:
                moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return value
            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=timezone.utc)
            if moment < datetime.now(timezone.utc):
                raise PydanticCustomError("due_date_past", "Due date cannot be in the past")
            return moment.astimezone(timezone.utc).date()
        return value

    @field_validator("due_date", check_fields=False)
    @classmethod
    def reject_past_due_date(cls, value: date | None) -> date | None:
        if value is not None and value < datetime.now(timezone.utc).date():
            raise PydanticCustomError("due_date_past", "Due date cannot be in the past")
        return value


class TaskCreate(_TaskPayload):
    title: Title
    description: Description | None = None
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"
    due_date: date | None = None


class TaskUpdate(_TaskPayload):
    title: Title | None = None
    description: Description | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None


class TaskResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: str | None
    status: str
    priority: str
    due_date: date | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TaskListData(BaseModel):
    tasks: list[TaskResponse]
    pagination: Pagination
