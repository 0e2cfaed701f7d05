import os

# Settings are read at import time, so the environment goes first
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["SESSION_COOKIE_SECURE"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from user_portal.core.rate_limit import login_limiter  # noqa: E402
from user_portal.db.session import Base, SessionLocal, engine  # noqa: E402
from user_portal.main import app  # noqa: E402
from user_portal.models.schemas import UserCreate  # noqa: E402
from user_portal.models.user import UserRole  # noqa: E402
from user_portal.services import user_service  # noqa: E402


@pytest.fixture(autouse=True)
def reset_state():
    # Fresh schema and rate limiter for every test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    login_limiter.reset()
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user():
    """Insert a user through the service layer and return its public fields."""

    def _make(
        email: str = "ana@example.com",
        password: str = "secret-pass",
        role: UserRole = UserRole.EMPLOYEE,
        **extra,
    ) -> dict:
        session = SessionLocal()
        try:
            result = user_service.create_user(
                session, UserCreate(email=email, password=password, role=role, **extra)
            )
            assert result.ok, result.error
            user = result.value
            return {"id": str(user.id), "email": user.email, "role": user.role.value}
        finally:
            session.close()

    return _make
