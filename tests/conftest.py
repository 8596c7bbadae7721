"""Shared test fixtures for tasktrack tests."""

from datetime import datetime

import pytest

from apps.core.adapters.cache_store import InMemoryLocalStore
from apps.core.config import get_backend_capabilities
from apps.core.storage import FallbackStorage
from fakes import FakeClock, UTC


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def local_store():
    return InMemoryLocalStore()


@pytest.fixture
def storage(local_store):
    return FallbackStorage(local_store)


@pytest.fixture(autouse=True)
def _reset_capabilities():
    get_backend_capabilities.cache_clear()
    yield
    get_backend_capabilities.cache_clear()


@pytest.fixture
def at():
    """at(9, 30) -> 2024-01-05 09:30 UTC; other days via `day=`."""
    def _at(hour, minute=0, day=5):
        return datetime(2024, 1, day, hour, minute, tzinfo=UTC)
    return _at


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='alice', password='secret')


@pytest.fixture
def auth_client(client, user):
    client.force_login(user)
    return client
