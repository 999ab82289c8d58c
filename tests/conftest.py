import os
from datetime import datetime, timedelta, timezone

import pytest

# Cheap work factor, set before the app reads its settings.
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from app.auth.storage import MemoryStorage
from app.config import Settings
from app.services.registry import build_services


class FakeClock:
    """Frozen UTC clock the tests move by hand."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def mock_settings(**overrides):
    values = {
        "BACKEND_URL": "",
        "BACKEND_API_KEY": "",
        "DATABASE_URL": "",
        "MOCK_LATENCY_MS": 0,
        "SEED_MOCK_DATA": True,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def settings():
    return mock_settings()


@pytest.fixture
async def services(settings, storage, clock):
    services = await build_services(settings, storage=storage, clock=clock)
    yield services
    await services.close()


@pytest.fixture
async def sql_services(storage, clock):
    services = await build_services(mock_settings(DATABASE_URL="sqlite://"), storage=storage, clock=clock)
    yield services
    await services.close()


@pytest.fixture
async def admin(services):
    return (await services.users.get_profile("user-1")).data


@pytest.fixture
async def john(services):
    return (await services.users.get_profile("user-2")).data


@pytest.fixture
async def jane(services):
    return (await services.users.get_profile("user-3")).data
