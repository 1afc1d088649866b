"""User model."""

from sqlalchemy import Column, DateTime, Integer, String

from app.database import Base, utcnow


class User(Base):
    """Registered account."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
