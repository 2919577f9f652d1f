"""Session-backed request dependencies.

The signed session cookie (Starlette ``SessionMiddleware``) carries only the
signed-in user's id under ``user_id``.
"""

from fastapi import Depends, HTTPException, Request
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.user.user import User

SESSION_USER_KEY = "user_id"


def current_user_id(request: Request) -> str | None:
    return request.session.get(SESSION_USER_KEY)


def sign_in(request: Request, user_id: str) -> None:
    request.session[SESSION_USER_KEY] = str(user_id)


def sign_out(request: Request) -> None:
    request.session.clear()


async def require_user(request: Request) -> User:
    """Return the signed-in user or answer 401."""
    user_id = current_user_id(request)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        sign_out(request)
        raise HTTPException(status_code=401, detail="User not found") from None


async def require_admin(user: User = Depends(require_user)) -> User:
    """Return the signed-in administrator or answer 403."""
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin privileges required")
    return user
