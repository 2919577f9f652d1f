"""Application tests for granting and revoking administrator rights."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from storefront.identity.projections.user_directory import find_by_email
from storefront.identity.user.administration import (
    AdminAlreadyExists,
    CreateFirstAdmin,
    GrantAdmin,
    RevokeAdmin,
    admin_exists,
)
from storefront.identity.user.registration import InvalidCredentials
from storefront.identity.user.user import User


def _first_admin(email="owner@example.com", password="owner-pw", full_name="Store Owner"):
    return current_domain.process(
        CreateFirstAdmin(email=email, password=password, full_name=full_name),
        asynchronous=False,
    )


class TestCreateFirstAdmin:
    def test_creates_admin_account(self):
        assert admin_exists() is False

        user_id = _first_admin()

        assert current_domain.repository_for(User).get(user_id).is_admin is True
        assert admin_exists() is True

    def test_promotes_existing_account_with_matching_password(self, user_id):
        promoted = _first_admin(email="priya@example.com", password="s3cret-pw", full_name="Priya Sharma")

        assert promoted == user_id
        assert find_by_email("priya@example.com").is_admin is True

    def test_existing_account_needs_its_password(self, user_id):
        with pytest.raises(InvalidCredentials):
            _first_admin(email="priya@example.com", password="wrong-pw")

    def test_only_once(self):
        _first_admin()
        with pytest.raises(AdminAlreadyExists):
            _first_admin(email="second@example.com")


class TestGrantAndRevoke:
    def test_grant_admin(self, user_id):
        current_domain.process(GrantAdmin(user_id=user_id), asynchronous=False)

        assert current_domain.repository_for(User).get(user_id).is_admin is True
        assert find_by_email("priya@example.com").is_admin is True

    def test_revoke_admin(self, user_id):
        owner_id = _first_admin()
        current_domain.process(GrantAdmin(user_id=user_id), asynchronous=False)

        current_domain.process(RevokeAdmin(user_id=user_id, requested_by=owner_id), asynchronous=False)

        assert current_domain.repository_for(User).get(user_id).is_admin is False
        assert find_by_email("priya@example.com").is_admin is False

    def test_cannot_revoke_self(self):
        owner_id = _first_admin()
        with pytest.raises(ValidationError):
            current_domain.process(RevokeAdmin(user_id=owner_id, requested_by=owner_id), asynchronous=False)

    def test_cannot_revoke_non_admin(self, user_id):
        with pytest.raises(ValidationError):
            current_domain.process(RevokeAdmin(user_id=user_id), asynchronous=False)
