"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def _invalid(email):
    return ValidationError({"email": [f"Invalid email address: {email!r}"]})


@storefront.value_object
class EmailAddress:
    """A structurally valid email address.

    Exactly one @, non-empty local and domain parts, a dotted domain without
    leading or trailing hyphens per label, no whitespace, no consecutive dots
    and none of the characters that are illegal outside quoted local parts.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise _invalid(email)

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise _invalid(email)

        if not domain_part or "." not in domain_part:
            raise _invalid(email)

        if domain_part.startswith(".") or domain_part.endswith("."):
            raise _invalid(email)

        if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
            raise _invalid(email)

        if ".." in email or any(ch in email for ch in _FORBIDDEN):
            raise _invalid(email)
