"""Back-office endpoints. Every route requires an administrator session."""

import json

import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.admin.dashboard import dashboard_stats
from storefront.caching import get_server_cache
from storefront.catalogue import queries
from storefront.catalogue.api.routes import create_category, create_product
from storefront.catalogue.api.schemas import (
    CreateCategoryRequest,
    CreateProductRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
    UpdateStockRequest,
)
from storefront.catalogue.category.management import DeleteCategory, UpdateCategory
from storefront.catalogue.product.management import AdjustStock, DeleteProduct, UpdateProduct
from storefront.catalogue.stock_alert.management import pending_subscribers
from storefront.identity.api.dependencies import require_admin
from storefront.identity.api.schemas import MessageResponse, UserIdRequest
from storefront.identity.user.administration import GrantAdmin, RevokeAdmin
from storefront.identity.user.user import User
from storefront.ordering.api.schemas import UpdateOrderStatusRequest
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import UpdateOrderStatus
from storefront.ordering.projections.order_summary import all_orders

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _process_or_404(command, detail: str):
    try:
        return current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=detail) from None


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@router.get("/products")
async def list_products():
    return queries.list_products()


@router.post("/products", status_code=201)
async def add_product(body: CreateProductRequest):
    return JSONResponse(status_code=201, content=create_product(body))


@router.put("/products/{product_id}")
async def update_product(product_id: str, body: UpdateProductRequest):
    changes = body.model_dump(exclude_none=True, exclude={"tags"})
    if body.tags is not None:
        changes["tags"] = json.dumps(body.tags)
    _process_or_404(UpdateProduct(product_id=product_id, **changes), "Product not found")
    return queries.get_product(product_id)


@router.put("/products/{product_id}/stock")
async def update_stock(product_id: str, body: UpdateStockRequest):
    _process_or_404(AdjustStock(product_id=product_id, stock=body.stock), "Product not found")
    return queries.get_product(product_id)


@router.delete("/products/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str) -> MessageResponse:
    _process_or_404(DeleteProduct(product_id=product_id), "Product not found")
    return MessageResponse(message="Product deleted")


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@router.get("/categories")
async def list_categories():
    return queries.list_categories()


@router.post("/categories", status_code=201)
async def add_category(body: CreateCategoryRequest):
    return JSONResponse(status_code=201, content=create_category(body))


@router.put("/categories/{category_id}")
async def update_category(category_id: str, body: UpdateCategoryRequest):
    _process_or_404(
        UpdateCategory(category_id=category_id, **body.model_dump(exclude_none=True)),
        "Category not found",
    )
    return next(c for c in queries.list_categories() if c["id"] == category_id)


@router.delete("/categories/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: str) -> MessageResponse:
    _process_or_404(DeleteCategory(category_id=category_id), "Category not found")
    return MessageResponse(message="Category deleted")


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@router.get("/orders")
async def list_orders(status: str | None = None):
    return [summary.to_dict() for summary in all_orders(status)]


@router.patch("/orders/{order_id}/status")
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest):
    _process_or_404(
        UpdateOrderStatus(order_id=order_id, status=body.status, note=body.note),
        "Order not found",
    )
    return current_domain.repository_for(Order).get(order_id).to_dict_detail()


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
@router.get("/users")
async def list_users():
    users = current_domain.repository_for(User)._dao.query.limit(None).all().items
    return [user.to_public_dict() for user in sorted(users, key=lambda u: u.created_at)]


@router.post("/make-admin", response_model=MessageResponse)
async def make_admin(body: UserIdRequest) -> MessageResponse:
    _process_or_404(GrantAdmin(user_id=body.user_id), "User not found")
    return MessageResponse(message="User is now an administrator")


@router.post("/revoke-admin", response_model=MessageResponse)
async def revoke_admin(body: UserIdRequest, admin: User = Depends(require_admin)) -> MessageResponse:
    _process_or_404(RevokeAdmin(user_id=body.user_id, requested_by=str(admin.id)), "User not found")
    return MessageResponse(message="Admin privileges revoked")


# ---------------------------------------------------------------------------
# Stock alerts
# ---------------------------------------------------------------------------
@router.get("/stock-notifications/{product_id}")
async def stock_notifications(product_id: str):
    return [
        {
            "id": str(s.id),
            "email": s.email.address,
            "product_id": str(s.product_id),
            "product_name": s.product_name,
            "status": s.status,
            "created_at": s.created_at.isoformat() if s.created_at else None,
        }
        for s in pending_subscribers(product_id)
    ]


# ---------------------------------------------------------------------------
# Dashboard and cache
# ---------------------------------------------------------------------------
@router.get("/dashboard")
async def dashboard():
    return dashboard_stats()


@router.get("/cache")
async def cache_stats():
    return get_server_cache().stats()


@router.delete("/cache", response_model=MessageResponse)
async def clear_cache() -> MessageResponse:
    get_server_cache().clear()
    logger.info("Server cache cleared by admin")
    return MessageResponse(message="Cache cleared")
