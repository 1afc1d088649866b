"""Task API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.errors import ValidationError
from app.schemas.common import ApiResponse
from app.schemas.task import Pagination, TaskListData, TaskResponse
from app.services.task import get_task_service
from app.services.validation import get_request_validator

router = APIRouter(prefix="/tasks", tags=["Tasks"])

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(raw: str | None, default: int) -> int:
    """Parse a pagination parameter; anything non-numeric or below 1 falls back to the default."""
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= 1 else default


@router.post("", status_code=201, response_model=ApiResponse[TaskResponse], response_model_exclude_unset=True)
def create_task(
    payload: dict[str, Any] = Body(...),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[TaskResponse]:
    """Create a task owned by the current user."""
    fields = get_request_validator().require("task.create", payload)
    task = get_task_service().create_task(db, user.user_id, fields)
    return ApiResponse(success=True, message="Task created successfully", data=TaskResponse.model_validate(task))


@router.get("", response_model=ApiResponse[TaskListData], response_model_exclude_unset=True)
def list_tasks(
    status: str | None = None,
    priority: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[TaskListData]:
    """List the current user's tasks with optional filters and pagination."""
    result = get_task_service().list_tasks(
        db,
        user.user_id,
        status=status,
        priority=priority,
        page=_positive_int(page, DEFAULT_PAGE),
        limit=_positive_int(limit, DEFAULT_LIMIT),
    )
    return ApiResponse(
        success=True,
        data=TaskListData(
            tasks=[TaskResponse.model_validate(t) for t in result.tasks],
            pagination=Pagination(page=result.page, limit=result.limit, total=result.total, pages=result.pages),
        ),
    )


@router.get("/{task_id}", response_model=ApiResponse[TaskResponse], response_model_exclude_unset=True)
def get_task(
    task_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[TaskResponse]:
    """Get a single task by ID."""
    task = get_task_service().get_task_or_404(db, task_id, user.user_id)
    return ApiResponse(success=True, data=TaskResponse.model_validate(task))


@router.put("/{task_id}", response_model=ApiResponse[TaskResponse], response_model_exclude_unset=True)
def update_task(
    task_id: int,
    payload: dict[str, Any] = Body(...),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[TaskResponse]:
    """Partially update a task. Only the fields sent are changed."""
    fields = get_request_validator().require("task.update", payload)
    changes = {key: value for key, value in fields.items() if value is not None}
    if not changes:
        raise ValidationError("No fields to update")

    service = get_task_service()
    task = service.get_task_or_404(db, task_id, user.user_id)
    task = service.update_task(db, task, changes)
    return ApiResponse(success=True, message="Task updated successfully", data=TaskResponse.model_validate(task))


@router.delete("/{task_id}", response_model=ApiResponse[dict], response_model_exclude_unset=True)
def delete_task(
    task_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[dict]:
    """Delete a task."""
    service = get_task_service()
    task = service.get_task_or_404(db, task_id, user.user_id)
    service.delete_task(db, task)
    return ApiResponse(success=True, message="Task deleted successfully")
