"""Shared fixtures for identity tests."""

import pytest
from protean.utils.globals import current_domain
from storefront.identity.user.registration import RegisterUser


@pytest.fixture()
def register():
    """Factory: register an account and return its id."""

    def _register(email="priya@example.com", password="s3cret-pw", full_name="Priya Sharma"):
        return current_domain.process(
            RegisterUser(email=email, password=password, full_name=full_name),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def user_id(register):
    return register()
