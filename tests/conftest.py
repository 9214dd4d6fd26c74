import pytest

from expense_client import create_client
from expense_client.config import Config
from expense_client.extensions import MemorySessionStore

from fake_service import BASE_URL, create_fake_service, mounted_session


class TestConfig(Config):
    API_BASE_URL = BASE_URL
    REQUEST_TIMEOUT = None
    NOTIFICATION_DURATION = 5.0


@pytest.fixture
def service():
    return create_fake_service()


@pytest.fixture
def store():
    return MemorySessionStore()


@pytest.fixture
def make_client(service, store):
    """Build clients that share the fake service and the session store."""
    def factory():
        return create_client(TestConfig, http=mounted_session(service), store=store)
    return factory


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def signed_in(client):
    result = client.auth.register({"name": "Ada", "email": "ada@example.com", "password": "secret"})
    assert result["success"]
    client.notifier.history.clear()
    client.navigator.history.clear()
    return client


def seed(client, *rows):
    """Create expenses through the service and return them in creation order."""
    created = []
    for row in rows:
        result = client.expenses.create_expense(row)
        assert result["success"], result
        created.append(result["expense"])
    client.notifier.history.clear()
    return created
