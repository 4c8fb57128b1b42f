"""Shared test configuration and fixtures for YC Registration tests"""

import logging
import os
from datetime import date, datetime, timezone

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from tests.config import test_config, test_env

for _name, _value in test_env.items():
    os.environ.setdefault(_name, _value)

from fastapi.testclient import TestClient  # noqa: E402

from yc_registration.backends.redis_store import RedisRegistrationStore  # noqa: E402
from yc_registration.main import app  # noqa: E402
from yc_registration.models.database import get_redis  # noqa: E402
from yc_registration.models.registration import (  # noqa: E402
    Registration,
    new_registration_id,
)
from yc_registration.services.wizard_state_manager import (  # noqa: E402
    WizardStateManager,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class FakeRedis:
    """In-memory stand-in for the async Redis commands the app uses"""

    def __init__(self):
        self.store = {}
        self.ttls = {}
        self.available = True
        # Commands that fail while the rest keep working
        self.failing_commands = set()

    def _check(self, command):
        if not self.available or command in self.failing_commands:
            raise RedisConnectionError("Redis is down")

    async def get(self, key):
        self._check("get")
        return self.store.get(key)

    async def set(self, key, value):
        self._check("set")
        self.store[key] = value
        return True

    async def setex(self, key, ttl, value):
        self._check("setex")
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, key):
        self._check("delete")
        self.ttls.pop(key, None)
        return 1 if self.store.pop(key, None) is not None else 0

    async def ping(self):
        self._check("ping")
        return True


class RecordingStore(RedisRegistrationStore):
    """Local store that also counts append calls"""

    def __init__(self, redis_client):
        super().__init__(redis_client)
        self.append_calls = 0

    async def append(self, registration):
        self.append_calls += 1
        await super().append(registration)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def registration_store(fake_redis):
    return RecordingStore(fake_redis)


@pytest.fixture
def wizard_state_manager(fake_redis):
    return WizardStateManager(redis_client=fake_redis, ttl_seconds=1800)


@pytest.fixture
def make_registration():
    """Factory for valid Registration records with overridable fields"""

    def _make(**overrides) -> Registration:
        fields = {
            "id": new_registration_id(),
            "first_name": "Ann",
            "last_name": "Smith",
            "email": "ann@example.com",
            "phone": "555-0100",
            "date_of_birth": date(1990, 5, 17),
            "gender": "female",
            "corps_name": "Central Corps",
            "emergency_name": "Bob Smith",
            "emergency_phone": "555-0199",
            "emergency_relationship": "Brother",
            "agreed_to_terms": True,
            "is_under18": False,
            "registered_at": datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc),
        }
        if overrides.get("is_under18"):
            fields.update(
                {
                    "guardian_first_name": "Mary",
                    "guardian_last_name": "Smith",
                    "guardian_email": "mary@example.com",
                    "guardian_phone": "555-0111",
                    "guardian_relationship": "parent",
                }
            )
        fields.update(overrides)
        return Registration(**fields)

    return _make


@pytest.fixture
def client(fake_redis):
    """Test client whose Redis dependency is the in-memory fake"""
    original_overrides = app.dependency_overrides.copy()
    app.dependency_overrides.clear()
    app.dependency_overrides[get_redis] = lambda: fake_redis

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)


@pytest.fixture
def admin_client(client):
    """Test client with a logged-in admin session"""
    response = client.post(
        "/admin/login",
        data={
            "username": test_config["admin_username"],
            "password": test_config["admin_password"],
        },
        follow_redirects=False,
    )
    assert response.status_code == 303
    return client
