"""User aggregate root: a storefront account, shopper or administrator."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, ValueObject

from storefront.domain import storefront
from storefront.identity.shared.email import EmailAddress

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

PROFILE_FIELDS = ("full_name", "phone", "address", "city", "state", "zip_code", "country")


def _check_full_name(full_name):
    if not full_name or len(full_name.strip()) < 2:
        raise ValidationError({"full_name": ["Full name is required"]})


@storefront.aggregate
class User:
    """A registered account.

    The username is the local part of the email address. Administrators
    share the same aggregate; ``is_admin`` unlocks the back-office.
    The password is only ever held as a bcrypt hash.
    """

    email: ValueObject(EmailAddress, required=True)
    username: String(required=True, max_length=100)
    password_hash: String(required=True, max_length=100)
    full_name: String(required=True, max_length=200)
    phone: String(max_length=20)
    address: String(max_length=255)
    city: String(max_length=100)
    state: String(max_length=100)
    zip_code: String(max_length=20)
    country: String(max_length=100)
    is_admin: Boolean(default=False)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)
    last_login_at: DateTime()

    @classmethod
    def register(cls, email, password_hash, full_name):
        from storefront.identity.user.events import UserRegistered

        _check_full_name(full_name)
        email_vo = EmailAddress(address=email.strip().lower())
        now = datetime.now()

        user = cls(
            email=email_vo,
            username=email_vo.address.split("@")[0],
            password_hash=password_hash,
            full_name=full_name.strip(),
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=email_vo.address,
                username=user.username,
                full_name=user.full_name,
                registered_at=now,
            )
        )
        return user

    def update_profile(
        self,
        full_name=_UNSET,
        phone=_UNSET,
        address=_UNSET,
        city=_UNSET,
        state=_UNSET,
        zip_code=_UNSET,
        country=_UNSET,
    ):
        from storefront.identity.user.events import ProfileUpdated

        values = {
            "full_name": full_name,
            "phone": phone,
            "address": address,
            "city": city,
            "state": state,
            "zip_code": zip_code,
            "country": country,
        }
        changed = []
        for field_name, value in values.items():
            if value is _UNSET:
                continue
            if field_name == "full_name":
                _check_full_name(value)
                value = value.strip()
            setattr(self, field_name, value)
            changed.append(field_name)

        if not changed:
            return

        self.updated_at = datetime.now()
        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                full_name=self.full_name,
                changed_fields=",".join(changed),
            )
        )

    def change_password(self, new_password_hash):
        from storefront.identity.user.events import PasswordChanged

        now = datetime.now()
        self.password_hash = new_password_hash
        self.updated_at = now
        self.raise_(PasswordChanged(user_id=self.id, changed_at=now))

    def record_login(self):
        from storefront.identity.user.events import UserLoggedIn

        now = datetime.now()
        self.last_login_at = now
        self.raise_(UserLoggedIn(user_id=self.id, logged_in_at=now))

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def grant_admin(self):
        from storefront.identity.user.events import AdminGranted

        if self.is_admin:
            raise ValidationError({"is_admin": ["User is already an administrator"]})

        now = datetime.now()
        self.is_admin = True
        self.updated_at = now
        self.raise_(AdminGranted(user_id=self.id, email=self.email.address, granted_at=now))

    def revoke_admin(self):
        from storefront.identity.user.events import AdminRevoked

        if not self.is_admin:
            raise ValidationError({"is_admin": ["User is not an administrator"]})

        now = datetime.now()
        self.is_admin = False
        self.updated_at = now
        self.raise_(AdminRevoked(user_id=self.id, email=self.email.address, revoked_at=now))

    def to_public_dict(self) -> dict:
        """Account details safe to return over the API (no password hash)."""
        return {
            "id": str(self.id),
            "email": self.email.address,
            "username": self.username,
            "full_name": self.full_name,
            "phone": self.phone,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "country": self.country,
            "is_admin": bool(self.is_admin),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
