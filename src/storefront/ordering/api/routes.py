"""FastAPI routes for the Ordering domain: carts and orders."""

import json
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.api.dependencies import current_user_id, require_user
from storefront.identity.user.user import User
from storefront.ordering.api.schemas import (
    AddToCartRequest,
    CheckoutRequest,
    PlaceOrderRequest,
    UpdateCartQuantityRequest,
)
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.items import (
    AddToCart,
    ClearCart,
    MergeGuestCart,
    RemoveFromCart,
    UpdateCartQuantity,
)
from storefront.ordering.cart.lookup import find_cart, get_or_create_cart
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import CheckoutCart, PlaceOrder
from storefront.ordering.projections.order_summary import orders_for_user

CART_SESSION_KEY = "cart_session"


def _cart_session_id(request: Request) -> str:
    session_id = request.session.get(CART_SESSION_KEY)
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session[CART_SESSION_KEY] = session_id
    return session_id


def _resolve_cart(request: Request) -> ShoppingCart:
    """The signed-in user's cart, absorbing any guest cart from this browser session."""
    session_id = _cart_session_id(request)
    user_id = current_user_id(request)
    if not user_id:
        return get_or_create_cart(session_id=session_id)

    cart = get_or_create_cart(user_id=user_id)
    guest = find_cart(session_id=session_id)
    if guest is not None and guest.items:
        current_domain.process(
            MergeGuestCart(cart_id=str(cart.id), guest_session_id=session_id),
            asynchronous=False,
        )
        cart = current_domain.repository_for(ShoppingCart).get(cart.id)
    return cart


def _cart_payload(cart_id) -> dict:
    return current_domain.repository_for(ShoppingCart).get(cart_id).to_dict_summary()


def _get_order(order_id: str) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found") from None


def _address_json(address) -> str | None:
    return json.dumps(address.model_dump()) if address is not None else None


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("")
async def get_cart(request: Request):
    return _resolve_cart(request).to_dict_summary()


@cart_router.post("/items")
async def add_cart_item(body: AddToCartRequest, request: Request):
    cart = _resolve_cart(request)
    try:
        current_domain.process(
            AddToCart(cart_id=str(cart.id), product_id=body.product_id, quantity=body.quantity),
            asynchronous=False,
        )
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found") from None
    return _cart_payload(cart.id)


@cart_router.patch("/items/{product_id}")
async def update_cart_item(product_id: str, body: UpdateCartQuantityRequest, request: Request):
    cart = _resolve_cart(request)
    try:
        current_domain.process(
            UpdateCartQuantity(cart_id=str(cart.id), product_id=product_id, quantity=body.quantity),
            asynchronous=False,
        )
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found") from None
    return _cart_payload(cart.id)


@cart_router.delete("/items/{product_id}")
async def remove_cart_item(product_id: str, request: Request):
    cart = _resolve_cart(request)
    current_domain.process(RemoveFromCart(cart_id=str(cart.id), product_id=product_id), asynchronous=False)
    return _cart_payload(cart.id)


@cart_router.delete("")
async def clear_cart(request: Request):
    cart = _resolve_cart(request)
    current_domain.process(ClearCart(cart_id=str(cart.id)), asynchronous=False)
    return _cart_payload(cart.id)


@cart_router.post("/checkout", status_code=201)
async def checkout(body: CheckoutRequest, request: Request):
    cart = _resolve_cart(request)
    try:
        order_id = current_domain.process(
            CheckoutCart(
                cart_id=str(cart.id),
                user_id=current_user_id(request),
                shipping_address=_address_json(body.shipping_address),
                billing_address=_address_json(body.billing_address),
                payment_method=body.payment_method,
                notes=body.notes,
            ),
            asynchronous=False,
        )
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="A product in your cart is no longer available") from None
    return JSONResponse(status_code=201, content=_get_order(order_id).to_dict_detail())


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api", tags=["orders"])


@order_router.post("/orders", status_code=201)
async def place_order(body: PlaceOrderRequest, request: Request):
    try:
        order_id = current_domain.process(
            PlaceOrder(
                user_id=current_user_id(request),
                items=json.dumps([line.model_dump() for line in body.items]),
                shipping_address=_address_json(body.shipping_address),
                billing_address=_address_json(body.billing_address),
                payment_method=body.payment_method,
                notes=body.notes,
            ),
            asynchronous=False,
        )
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found") from None
    return JSONResponse(status_code=201, content=_get_order(order_id).to_dict_detail())


@order_router.get("/orders/{order_id}")
async def get_order(order_id: str, request: Request):
    """Guest orders are readable by id; a user's orders only by that user or an admin."""
    order = _get_order(order_id)
    viewer_id = current_user_id(request)
    if order.user_id and viewer_id and not order.belongs_to(viewer_id):
        viewer = current_domain.repository_for(User).get(viewer_id)
        if not viewer.is_admin:
            raise HTTPException(status_code=403, detail="Access denied")
    return order.to_dict_detail()


@order_router.get("/my-orders")
async def my_orders(user: User = Depends(require_user)):
    return [summary.to_dict() for summary in orders_for_user(user.id)]


@order_router.get("/users/{user_id}/orders")
async def user_orders(user_id: str, user: User = Depends(require_user)):
    if str(user.id) != user_id and not user.is_admin:
        raise HTTPException(status_code=403, detail="Access denied")
    return [summary.to_dict() for summary in orders_for_user(user_id)]
