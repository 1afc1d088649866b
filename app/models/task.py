"""Task model."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Text

from app.database import Base, utcnow

TASK_STATUSES = ("pending", "in_progress", "completed")
TASK_PRIORITIES = ("low", "medium", "high")


class Task(Base):
    """A to-do item owned by exactly one user."""

    __tablename__ = "task"
    __table_args__ = (Index("ix_task_user_id_created_at", "user_id", "created_at"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(32), nullable=False, default="pending")  # pending, in_progress, completed
    priority = Column(String(16), nullable=False, default="medium")  # low, medium, high
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
