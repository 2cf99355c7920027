import os

# Must be set before app.core.config builds its Settings
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("CHAT_DELIVERY_POLICY", "broadcast_all")

import pytest

from app.main import app
from app.db.session import Database, get_db
from app.core.config import settings

database = Database(settings.DATABASE_URL)


@pytest.fixture()
def db_session():
    """
    Fresh schema per test. Application code commits normally; the tables are
    dropped afterwards so nothing leaks between tests.
    """
    database.create_all()
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        database.drop_all()


@pytest.fixture(autouse=True)
def override_get_db(db_session):
    def _get_db_override():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_db] = _get_db_override
    yield
    app.dependency_overrides.clear()
