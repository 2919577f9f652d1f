"""Profile and password maintenance: commands and handlers."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.passwords import hash_password, verify_password
from storefront.identity.user.registration import check_password_strength
from storefront.identity.user.user import PROFILE_FIELDS, User


@storefront.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    full_name: String(max_length=200)
    phone: String(max_length=20)
    address: String(max_length=255)
    city: String(max_length=100)
    state: String(max_length=100)
    zip_code: String(max_length=20)
    country: String(max_length=100)


@storefront.command(part_of="User")
class ChangePassword:
    user_id: Identifier(required=True)
    current_password: String(required=True, max_length=128)
    new_password: String(required=True, max_length=128)


@storefront.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        changes = {name: getattr(command, name) for name in PROFILE_FIELDS if getattr(command, name) is not None}
        user.update_profile(**changes)
        repo.add(user)

    @handle(ChangePassword)
    def change_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if not verify_password(command.current_password, user.password_hash):
            raise ValidationError({"current_password": ["Current password is incorrect"]})
        check_password_strength(command.new_password)

        user.change_password(hash_password(command.new_password))
        repo.add(user)
