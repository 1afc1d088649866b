"""Authentication service."""

import logging
from dataclasses import dataclass

import bcrypt
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.errors import InternalError
from app.models.user import User

logger = logging.getLogger("taskboard")


@dataclass
class AuthResult:
    """Result of an authentication attempt."""

    success: bool
    error: str | None = None
    user_id: int | None = None
    email: str | None = None
    name: str | None = None


def _password_bytes(password: str) -> bytes:
    # bcrypt only considers the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    """Salted bcrypt hash of a plaintext password."""
    rounds = get_settings().BCRYPT_ROUNDS
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))


class AuthService:
    """Handles user registration and authentication."""

    def register(self, db: Session, email: str, password: str, name: str | None = None) -> AuthResult:
        """Register a new user. Returns AuthResult with success/error."""
        email = email.lower().strip()
        try:
            existing = db.query(User).filter(func.lower(User.email) == email).first()
            if existing:
                return AuthResult(success=False, error="User with this email already exists")

            user = User(
                email=email,
                password_hash=hash_password(password),
                name=name.strip() if name else None,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            db.rollback()
            return AuthResult(success=False, error="User with this email already exists")
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Registration failed for %s", email)
            raise InternalError() from e

        logger.info("Registered user %s (id=%s)", user.email, user.id)
        return AuthResult(success=True, user_id=user.id, email=user.email, name=user.name)

    def authenticate(self, db: Session, email: str, password: str) -> AuthResult:
        """Authenticate a user by email and password."""
        try:
            user = db.query(User).filter(func.lower(User.email) == email.lower().strip()).first()
        except SQLAlchemyError as e:
            logger.exception("Login lookup failed")
            raise InternalError() from e

        if not user or not verify_password(password, user.password_hash):
            return AuthResult(success=False, error="Invalid email or password")

        return AuthResult(success=True, user_id=user.id, email=user.email, name=user.name)

    def ensure_user(self, db: Session, email: str, password: str, name: str | None = None) -> bool:
        """Create the user unless the email is taken. Returns True if created."""
        result = self.register(db, email, password, name)
        return result.success


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
