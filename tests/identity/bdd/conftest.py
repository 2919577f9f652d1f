"""Shared BDD fixtures and step definitions for Identity."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.identity.user.registration import RegisterUser


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@given(parsers.cfparse('a shopper registered as "{email}" with password "{password}"'), target_fixture="user_id")
def registered_shopper(email, password):
    return current_domain.process(
        RegisterUser(email=email, password=password, full_name="Priya Sharma"),
        asynchronous=False,
    )


@then("the request is rejected")
def request_rejected(error):
    assert isinstance(error["exc"], ValidationError)
