from datetime import datetime

import pytest
import pytz
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.dependencies import get_current_time, get_notifier, get_storage
from app.services.storage import LocalUploadStorage
from database import Base, get_db
from main import app

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=pytz.UTC)

VALID_FORM = {
    "fullName": "A B",
    "dob": "2000-01-01",
    "gender": "F",
    "email": "a@b.com",
    "phone": "123-456-7890",
    "address": "X",
    "result": "Pass",
    "classApplying": "10",
    "agreed": "on",
}


class RecordingNotifier:
    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_submission_notice(self, submission, photo_path):
        self.sent.append((submission, photo_path))
        if self.fail:
            raise ConnectionError("SMTP server unavailable")


@pytest.fixture
def valid_form():
    return dict(VALID_FORM)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def upload_storage(tmp_path):
    return LocalUploadStorage(str(tmp_path / "uploads"))


@pytest.fixture
def override(db_session, notifier, upload_storage):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_storage] = lambda: upload_storage
    app.dependency_overrides[get_current_time] = lambda: FIXED_NOW
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest.fixture
def client(override):
    return TestClient(app)
