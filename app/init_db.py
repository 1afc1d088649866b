"""Create missing tables and the demo account.

Usage: python -m app.init_db
"""

import logging
import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.database import Base, SessionLocal, engine
from app.models.task import Task  # noqa: F401
from app.models.user import User  # noqa: F401
from app.services.auth import get_auth_service

logger = logging.getLogger("taskboard")


def check_connection() -> bool:
    """Return True if the database answers a trivial query."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database connection failed")
        return False
    return True


def create_tables() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


def seed_demo_user() -> bool:
    """Create the demo user unless it already exists. Returns True if created."""
    settings = get_settings()
    db = SessionLocal()
    try:
        created = get_auth_service().ensure_user(
            db, settings.DEMO_USER_EMAIL, settings.DEMO_USER_PASSWORD, settings.DEMO_USER_NAME
        )
    finally:
        db.close()

    if created:
        logger.info("Demo user created: %s", settings.DEMO_USER_EMAIL)
    else:
        logger.info("Demo user already exists: %s", settings.DEMO_USER_EMAIL)
    return created


def main() -> int:
    logging.basicConfig(level=get_settings().LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not check_connection():
        logger.error("Cannot proceed without a database connection")
        return 1

    create_tables()
    seed_demo_user()
    logger.info("Database initialization completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
