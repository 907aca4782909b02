import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("JWT_EXPIRES_MINUTES", "60")
os.environ["DATABASE_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import get_db
from app.core.notifications import NotificationDispatcher, get_notification_dispatcher
from app.core.security import hash_password
from app.main import app
from app.models.base import Base
from app.repositories.admin_repo import create_admin
from app.repositories.submission_repo import create_submission
from app.schemas.admin_schema import AdminIdentity
from app.schemas.submission_schema import SubmissionCreate
from helpers import ADMIN_PASSWORD, RecordingNotifier, registration_fields, sample_receipt


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def primary_notifier():
    return RecordingNotifier("primary")


@pytest.fixture()
def secondary_notifier():
    return RecordingNotifier("secondary")


@pytest.fixture()
def dispatcher(primary_notifier, secondary_notifier):
    return NotificationDispatcher([primary_notifier, secondary_notifier], event_name="Test Dinner")


@pytest.fixture()
def client(db_session, dispatcher):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def admin(db_session):
    return create_admin(
        db_session,
        email="admin@example.com",
        name="Admin User",
        password_hash=hash_password(ADMIN_PASSWORD),
    )


@pytest.fixture()
def actor(admin):
    return AdminIdentity.model_validate(admin)


@pytest.fixture()
def auth_headers(client, admin):
    resp = client.post("/admin/login", json={"email": admin.email, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture()
def make_submission(db_session):
    def _make(**overrides):
        data = SubmissionCreate.model_validate(registration_fields(**overrides))
        return create_submission(db_session, data, sample_receipt(), amount=12000)

    return _make
