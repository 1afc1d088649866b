"""Task service for user-scoped CRUD, filtering and pagination."""

import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.database import utcnow
from app.errors import InternalError, NotFoundError
from app.models.task import Task

logger = logging.getLogger("taskboard")

UPDATABLE_FIELDS = ("title", "description", "status", "priority", "due_date")
NO_FILTER = "all"
# Largest value a 64-bit INTEGER column or bound parameter can hold.
MAX_SQL_INTEGER = 2**63 - 1


@dataclass
class TaskPage:
    """One page of a filtered task listing."""

    tasks: list[Task]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@contextmanager
def _persistence(db: Session, action: str) -> Iterator[None]:
    """Roll back and convert driver failures into InternalError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Task %s failed", action)
        raise InternalError() from e


class TaskService:
    """Handles task persistence. Every query is constrained to the owner's user_id."""

    def _owned(self, db: Session, user_id: int) -> Query:
        return db.query(Task).filter(Task.user_id == user_id)

    def create_task(self, db: Session, user_id: int, fields: dict[str, Any]) -> Task:
        """Insert a task owned by user_id and return the stored row."""
        with _persistence(db, "create"):
            task = Task(user_id=user_id, **{k: v for k, v in fields.items() if k in UPDATABLE_FIELDS})
            db.add(task)
            db.commit()
            db.refresh(task)
        logger.debug("Created task %s for user %s", task.id, user_id)
        return task

    def list_tasks(
        self,
        db: Session,
        user_id: int,
        status: str | None = None,
        priority: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> TaskPage:
        """List a user's tasks, newest first, with optional status/priority filters."""
        with _persistence(db, "list"):
            query = self._owned(db, user_id)
            if status and status != NO_FILTER:
                query = query.filter(Task.status == status)
            if priority and priority != NO_FILTER:
                query = query.filter(Task.priority == priority)

            total = query.count()
            tasks = (
                query.order_by(Task.created_at.desc(), Task.id.desc())
                .offset(min((page - 1) * limit, MAX_SQL_INTEGER))
                .limit(min(limit, MAX_SQL_INTEGER))
                .all()
            )
        return TaskPage(tasks=tasks, page=page, limit=limit, total=total)

    def get_task(self, db: Session, task_id: int, user_id: int) -> Task | None:
        """Get a single task by ID, scoped to user."""
        if not 1 <= task_id <= MAX_SQL_INTEGER:
            return None
        with _persistence(db, "lookup"):
            return self._owned(db, user_id).filter(Task.id == task_id).first()

    def get_task_or_404(self, db: Session, task_id: int, user_id: int) -> Task:
        task = self.get_task(db, task_id, user_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def update_task(self, db: Session, task: Task, changes: dict[str, Any]) -> Task:
        """Apply only the provided fields and refresh updated_at."""
        with _persistence(db, "update"):
            for field, value in changes.items():
                if field in UPDATABLE_FIELDS:
                    setattr(task, field, value)
            task.updated_at = utcnow()
            db.commit()
            db.refresh(task)
        return task

    def delete_task(self, db: Session, task: Task) -> None:
        with _persistence(db, "delete"):
            db.delete(task)
            db.commit()


_task_service: TaskService | None = None


def get_task_service() -> TaskService:
    """Get singleton task service instance."""
    global _task_service
    if _task_service is None:
        _task_service = TaskService()
    return _task_service
