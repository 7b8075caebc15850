import os
from datetime import datetime, timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient
from jose import jwt

# Ensure the app uses a test configuration
os.environ.setdefault("TOUCHPOINTS_SECRET_KEY", "test-secret")
os.environ.setdefault("TOUCHPOINTS_LOG_LEVEL", "WARNING")

from touchpoints.core.config import settings  # noqa: E402
from touchpoints.core.database import DatabaseManager  # noqa: E402
from touchpoints.main import create_app  # noqa: E402
from touchpoints.repositories.events import EventStore  # noqa: E402


class FakeClock:
    """Deterministic clock: returns `now`, then steps forward by `step`"""

    def __init__(self, start=datetime(2024, 1, 1, 9, 0, 0), step=timedelta(seconds=1)):
        self.now = start
        self.step = step

    def set(self, value):
        self.now = value

    def __call__(self):
        current = self.now
        self.now = current + self.step
        return current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def store(mongo_client, clock):
    event_store = EventStore(mongo_client["touchpoints_test"], clock=clock)
    event_store.ensure_indexes()
    return event_store


def make_token(sub="user-1", role="analyst", secret=None, **claims):
    payload = {"sub": sub, "role": role, "email": f"{sub}@example.com", **claims}
    return jwt.encode(
        payload,
        secret or settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token(sub='admin-1', role='admin')}"}


@pytest.fixture
def db_manager(mongo_client):
    return DatabaseManager(client_factory=lambda **kwargs: mongo_client)


@pytest.fixture
def client(db_manager):
    with TestClient(create_app(db_manager)) as test_client:
        yield test_client


WEBSITE_VISIT = {
    "ip": "1.2.3.4",
    "owner_contact": "alice@example.com",
    "number_of_visits": 3,
    "page_visits": 5,
    "website_duration": 120,
    "location": "Berlin",
    "time": "10:00:00",
    "date": "2024-01-01",
}

STORE_VISIT = {
    "owner_contact": "alice@example.com",
    "number_of_visits": 1,
    "location": "Berlin Mitte",
    "time": "15:30:00",
    "date": "2024-01-02",
}

SIGNUP = {
    "username": "alice",
    "email": "alice@example.com",
    "location": "Berlin",
    "time": "16:00:00",
    "date": "2024-01-02",
}


@pytest.fixture
def website_visit():
    return dict(WEBSITE_VISIT)


@pytest.fixture
def store_visit():
    return dict(STORE_VISIT)


@pytest.fixture
def signup():
    return dict(SIGNUP)
