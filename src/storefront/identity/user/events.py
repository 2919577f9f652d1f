"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A shopper created an account."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    username: String(required=True)
    full_name: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class ProfileUpdated:
    """A user changed their name, phone or default address."""

    __version__ = 1

    user_id: Identifier(required=True)
    full_name: String(required=True)
    changed_fields: String()


@storefront.event(part_of="User")
class PasswordChanged:
    __version__ = 1

    user_id: Identifier(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="User")
class UserLoggedIn:
    __version__ = 1

    user_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)


@storefront.event(part_of="User")
class AdminGranted:
    """A user was given back-office access."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    granted_at: DateTime(required=True)


@storefront.event(part_of="User")
class AdminRevoked:
    """A user lost back-office access."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    revoked_at: DateTime(required=True)
