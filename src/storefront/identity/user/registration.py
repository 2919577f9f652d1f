"""Account registration and sign-in: commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.projections.user_directory import find_by_email
from storefront.identity.user.passwords import MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH, hash_password, verify_password
from storefront.identity.user.user import User

logger = structlog.get_logger(__name__)


class EmailAlreadyRegistered(ValidationError):
    """An account with this email address already exists."""


class InvalidCredentials(Exception):
    """Email and password do not match an account."""

    def __init__(self):
        super().__init__("Invalid email or password")


def check_password_strength(password: str) -> None:
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError({"password": [f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"]})


@storefront.command(part_of="User")
class RegisterUser:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    full_name: String(required=True, max_length=200)


@storefront.command(part_of="User")
class AuthenticateUser:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)


def register_user(email, password, full_name) -> User:
    """Create and persist a new account. Raises EmailAlreadyRegistered on a taken email."""
    check_password_strength(password)
    if find_by_email(email) is not None:
        raise EmailAlreadyRegistered({"email": ["User with this email already exists"]})

    user = User.register(
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
    )
    current_domain.repository_for(User).add(user)
    logger.info("User registered", user_id=str(user.id), username=user.username)
    return user


@storefront.command_handler(part_of=User)
class AccountAccessHandler:
    @handle(RegisterUser)
    def register(self, command):
        user = register_user(command.email, command.password, command.full_name)
        return str(user.id)

    @handle(AuthenticateUser)
    def authenticate(self, command):
        entry = find_by_email(command.email)
        if entry is None:
            logger.info("Login failed: unknown email")
            raise InvalidCredentials()

        repo = current_domain.repository_for(User)
        try:
            user = repo.get(entry.user_id)
        except ObjectNotFoundError:
            raise InvalidCredentials() from None

        if not verify_password(command.password, user.password_hash):
            logger.info("Login failed: wrong password", user_id=str(user.id))
            raise InvalidCredentials()

        user.record_login()
        repo.add(user)
        return str(user.id)
