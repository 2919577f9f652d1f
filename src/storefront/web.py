"""FastAPI application factory.

Every request runs inside the storefront domain context and carries a
request id in the structlog context. Sessions are signed cookies holding
only the signed-in user's id and the guest cart's session id.
"""

import asyncio
import contextlib
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from starlette.middleware.sessions import SessionMiddleware

from storefront.caching import get_server_cache
from storefront.caching.server_cache import run_periodic_cleanup
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    with storefront.domain_context():
        cache = get_server_cache()
    cleanup = asyncio.create_task(run_periodic_cleanup(cache))
    logger.info("Storefront started", persistent_cache=cache.is_persistent_available())
    try:
        yield
    finally:
        cleanup.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await cleanup
        logger.info("Storefront stopped")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.store_name} API",
        description="Storefront: catalogue, cart, checkout, order tracking and back-office",
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and bind a request id for logging."""
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        clear_context()
        add_context(request_id=request_id, path=request.url.path, method=request.method)
        with storefront.domain_context():
            response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # Outermost middleware is the last one added: sessions wrap the domain context.
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        max_age=settings.session_max_age,
        same_site="lax",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    from storefront.admin import router as admin_router
    from storefront.catalogue.api import (
        category_router,
        product_router,
        search_router,
        stock_alert_router,
    )
    from storefront.identity.api import router as auth_router
    from storefront.notifications.api import router as notifications_router
    from storefront.ordering.api import cart_router, order_router

    app.include_router(auth_router)
    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(search_router)
    app.include_router(stock_alert_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(admin_router)
    app.include_router(notifications_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": storefront.name,
                "persistent_cache": get_server_cache().is_persistent_available(),
            }
        )

    return app
