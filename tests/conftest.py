import os

# Settings are read at import time, so the environment comes first
os.environ["TESTING"] = "True"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["SESSION_REAPER_ENABLED"] = "False"
os.environ.pop("SMTP_HOST", None)

import asyncio
from datetime import datetime
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.core.security import get_password_hash
from app.db.database import SessionLocal, create_schema, engine
from app.db.models import Base
from app.domain.enums import UserRole
from app.infrastructure.external_services.email_service import EmailService, NotificationResult
from app.infrastructure.orm import UserModel
from app.infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl

PASSWORD = "CorrectHorse9!"


class FakeEmailService(EmailService):
    """Records notifications instead of sending them"""

    def __init__(self, fail: bool = False):
        super().__init__()
        self.fail = fail
        self.sent = []

    async def send(self, kind, recipient, payload):
        self.sent.append((kind, recipient, payload))
        if self.fail:
            return NotificationResult(success=False, error="SMTP unavailable")
        return NotificationResult(success=True)

    def last_code(self, recipient: str = None) -> str:
        for _, to, payload in reversed(self.sent):
            if recipient is None or to == recipient:
                return payload["code"]
        raise AssertionError(f"no code sent to {recipient}")


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def schema():
    create_schema()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(schema):
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def uow(db):
    return UnitOfWorkImpl(db)


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture
def make_user(db):
    """Insert a user straight into the database"""

    def _make_user(email="rep@example.com", password=PASSWORD, verified=True, active=True, **fields):
        now = datetime.utcnow()
        model = UserModel(
            id=uuid4(),
            email=email,
            hashed_password=get_password_hash(password),
            name=fields.pop("name", "Riley Rep"),
            phone=fields.pop("phone", "+15550100"),
            role=fields.pop("role", UserRole.SALES_REP),
            is_email_verified=verified,
            is_active=active,
            created_at=now,
            updated_at=now,
            **fields,
        )
        db.add(model)
        db.commit()
        return model

    return _make_user


@pytest.fixture
def client(schema, email_service):
    from app.api.dependencies import get_email_service
    from app.main import app

    app.dependency_overrides[get_email_service] = lambda: email_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
