"""FastAPI endpoints for the Catalogue domain.

Browsing and search are public. Creating products and categories needs an
administrator session.
"""

import json

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue import queries
from storefront.catalogue.api.schemas import (
    CreateCategoryRequest,
    CreateProductRequest,
    NotifyBackInStockRequest,
    StockSubscribeRequest,
)
from storefront.catalogue.category.management import CreateCategory
from storefront.catalogue.product.management import CreateProduct
from storefront.catalogue.stock_alert.management import NotifyBackInStock, SubscribeToStock
from storefront.identity.api.dependencies import require_admin

product_router = APIRouter(prefix="/api/products", tags=["products"])
category_router = APIRouter(prefix="/api/categories", tags=["categories"])
search_router = APIRouter(prefix="/api/search", tags=["search"])
stock_alert_router = APIRouter(prefix="/api/stock-notifications", tags=["stock-notifications"])


def create_product(body: CreateProductRequest) -> dict:
    """Shared by the public admin-only endpoint and the back-office."""
    payload = body.model_dump(exclude={"tags"})
    product_id = current_domain.process(CreateProduct(**payload, tags=json.dumps(body.tags)), asynchronous=False)
    return queries.get_product(product_id)


def create_category(body: CreateCategoryRequest) -> dict:
    category_id = current_domain.process(CreateCategory(**body.model_dump()), asynchronous=False)
    return next(c for c in queries.list_categories() if c["id"] == str(category_id))


# --- Product endpoints ---


@product_router.get("")
async def list_products():
    return queries.list_products()


@product_router.get("/featured")
async def featured_products():
    return queries.featured_products()


@product_router.get("/trending")
async def trending_products():
    return queries.trending_products()


@product_router.get("/new")
async def new_products():
    return queries.new_products()


@product_router.get("/sale")
async def sale_products():
    return queries.sale_products()


@product_router.get("/category/{category_name}")
async def products_in_category(category_name: str):
    return queries.products_in_category(category_name)


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    try:
        return queries.get_product(product_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found") from None


@product_router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def add_product(body: CreateProductRequest):
    return JSONResponse(status_code=201, content=create_product(body))


# --- Search ---


@search_router.get("")
async def search(q: str = ""):
    return queries.search_products(q)


# --- Category endpoints ---


@category_router.get("")
async def list_categories():
    return queries.list_categories()


@category_router.get("/{slug}")
async def get_category(slug: str):
    try:
        return queries.get_category_by_slug(slug)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Category not found") from None


@category_router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def add_category(body: CreateCategoryRequest):
    return JSONResponse(status_code=201, content=create_category(body))


# --- Stock alerts ---


@stock_alert_router.post("/subscribe", status_code=201)
async def subscribe(body: StockSubscribeRequest):
    try:
        subscription_id = current_domain.process(
            SubscribeToStock(email=body.email, product_id=body.product_id),
            asynchronous=False,
        )
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found") from None
    return JSONResponse(
        status_code=201,
        content={
            "subscription_id": subscription_id,
            "message": "You will be notified when this product is back in stock",
        },
    )


@stock_alert_router.post("/notify", dependencies=[Depends(require_admin)])
async def notify(body: NotifyBackInStockRequest):
    try:
        count = current_domain.process(NotifyBackInStock(product_id=body.product_id), asynchronous=False)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found") from None
    return {"notified": count, "message": f"Notified {count} subscribers"}
