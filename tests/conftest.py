import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Configure the environment and initialize the storefront domain once. Each
    test pushes its own domain context (see ``run_around_tests``).
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["BCRYPT_ROUNDS"] = "4"
    os.environ["ADMIN_EMAIL"] = "admin@example.com"
    os.environ.pop("SENDGRID_API_KEY", None)
    os.environ.pop("REDIS_URL", None)

    from storefront.config import get_settings

    get_settings.cache_clear()

    from storefront.bootstrap import init_domain

    init_domain()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain():
    from storefront.domain import storefront

    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    from storefront.caching import reset_server_cache
    from storefront.notifications.channel import reset_channels

    reset_channels()
    reset_server_cache()

    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()

    reset_channels()
    reset_server_cache()


@pytest.fixture()
def outbox():
    """The fake email adapter every notification is sent through."""
    from storefront.notifications.channel import get_channel
    from storefront.notifications.notification.notification import NotificationChannel

    return get_channel(NotificationChannel.EMAIL.value)


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient
    from storefront.web import create_app

    return TestClient(create_app())


@pytest.fixture()
def admin_client(client):
    """A client signed in as the store's first administrator."""
    response = client.post(
        "/api/auth/create-first-admin",
        json={"email": "owner@example.com", "password": "owner-pw", "full_name": "Store Owner"},
    )
    assert response.status_code == 201
    return client


@pytest.fixture()
def shopper_client():
    """A second, independent client signed in as a regular shopper."""
    from fastapi.testclient import TestClient
    from storefront.web import create_app

    shopper = TestClient(create_app())
    response = shopper.post(
        "/api/auth/signup",
        json={"email": "priya@example.com", "password": "s3cret-pw", "full_name": "Priya Sharma"},
    )
    assert response.status_code == 201
    return shopper
