"""Back-office access: granting and revoking administrator rights."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.projections.user_directory import UserDirectory, find_by_email
from storefront.identity.user.passwords import verify_password
from storefront.identity.user.registration import InvalidCredentials, register_user
from storefront.identity.user.user import User

logger = structlog.get_logger(__name__)


class AdminAlreadyExists(ValidationError):
    """The first administrator has already been created."""


@storefront.command(part_of="User")
class GrantAdmin:
    user_id: Identifier(required=True)


@storefront.command(part_of="User")
class RevokeAdmin:
    user_id: Identifier(required=True)
    requested_by: Identifier()


@storefront.command(part_of="User")
class CreateFirstAdmin:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    full_name: String(required=True, max_length=200)


def admin_exists() -> bool:
    return bool(current_domain.repository_for(UserDirectory)._dao.query.filter(is_admin=True).all().items)


@storefront.command_handler(part_of=User)
class AdministrationHandler:
    @handle(GrantAdmin)
    def grant_admin(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.grant_admin()
        repo.add(user)
        logger.info("Admin privileges granted", user_id=str(user.id))

    @handle(RevokeAdmin)
    def revoke_admin(self, command):
        if command.requested_by and str(command.requested_by) == str(command.user_id):
            raise ValidationError({"user_id": ["You cannot revoke your own admin privileges"]})

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.revoke_admin()
        repo.add(user)
        logger.info("Admin privileges revoked", user_id=str(user.id), revoked_by=command.requested_by)

    @handle(CreateFirstAdmin)
    def create_first_admin(self, command):
        if admin_exists():
            raise AdminAlreadyExists({"admin": ["An administrator already exists"]})

        repo = current_domain.repository_for(User)
        entry = find_by_email(command.email)
        if entry is None:
            user = register_user(command.email, command.password, command.full_name)
        else:
            user = repo.get(entry.user_id)
            if not verify_password(command.password, user.password_hash):
                raise InvalidCredentials()

        user.grant_admin()
        repo.add(user)
        logger.info("First administrator created", user_id=str(user.id))
        return str(user.id)
