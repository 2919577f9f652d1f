"""User directory: find an account by email, list accounts for the back-office."""

from protean.core.projector import on
from protean.fields import Boolean, DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.events import AdminGranted, AdminRevoked, ProfileUpdated, UserRegistered
from storefront.identity.user.user import User


@storefront.projection
class UserDirectory:
    email: Identifier(identifier=True, required=True)
    user_id: String(required=True)
    username: String(max_length=100)
    full_name: String(max_length=200)
    is_admin: Boolean(default=False)
    registered_at: DateTime()


def find_by_email(email: str) -> UserDirectory | None:
    entries = current_domain.repository_for(UserDirectory)._dao.query.filter(email=email.strip().lower()).all().items
    return entries[0] if entries else None


def find_by_user_id(user_id: str) -> UserDirectory | None:
    entries = current_domain.repository_for(UserDirectory)._dao.query.filter(user_id=str(user_id)).all().items
    return entries[0] if entries else None


@storefront.projector(projector_for=UserDirectory, aggregates=[User])
class UserDirectoryProjector:
    @on(UserRegistered)
    def on_user_registered(self, event):
        current_domain.repository_for(UserDirectory).add(
            UserDirectory(
                email=event.email,
                user_id=str(event.user_id),
                username=event.username,
                full_name=event.full_name,
                is_admin=False,
                registered_at=event.registered_at,
            )
        )

    @on(ProfileUpdated)
    def on_profile_updated(self, event):
        entry = find_by_user_id(event.user_id)
        if entry is None:
            return
        entry.full_name = event.full_name
        current_domain.repository_for(UserDirectory).add(entry)

    @on(AdminGranted)
    def on_admin_granted(self, event):
        entry = find_by_user_id(event.user_id)
        if entry is None:
            return
        entry.is_admin = True
        current_domain.repository_for(UserDirectory).add(entry)

    @on(AdminRevoked)
    def on_admin_revoked(self, event):
        entry = find_by_user_id(event.user_id)
        if entry is None:
            return
        entry.is_admin = False
        current_domain.repository_for(UserDirectory).add(entry)
