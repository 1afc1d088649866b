"""Tests for the database bootstrap script."""

from sqlalchemy.exc import OperationalError

from app import init_db
from app.config import get_settings
from app.database import SessionLocal
from app.models.user import User
from app.services.auth import verify_password


class _BrokenEngine:
    def connect(self):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestInitDb:
    def test_creates_tables_and_demo_user(self):
        assert init_db.main() == 0

        settings = get_settings()
        db = SessionLocal()
        try:
            user = db.query(User).filter(User.email == settings.DEMO_USER_EMAIL).one()
            assert user.name == settings.DEMO_USER_NAME
            assert verify_password(settings.DEMO_USER_PASSWORD, user.password_hash)
        finally:
            db.close()

    def test_seed_is_idempotent(self):
        init_db.create_tables()
        init_db.seed_demo_user()
        assert init_db.seed_demo_user() is False

    def test_unreachable_database(self, monkeypatch):
        monkeypatch.setattr(init_db, "engine", _BrokenEngine())
        assert init_db.main() == 1
