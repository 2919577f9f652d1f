"""Back-office API package."""

from storefront.admin.routes import router

__all__ = ["router"]
