"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from typing import Literal

from pydantic import BaseModel, Field

PaymentMethodLiteral = Literal["credit-card", "paypal", "bank-transfer", "cash-on-delivery"]
OrderStatusLiteral = Literal["pending", "processing", "shipped", "delivered", "cancelled"]


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str = "India"


class OrderLineSchema(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "0b5f0c5e-1c8e-4f3e-9a55-3d3c0b1f8a11",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CheckoutRequest(BaseModel):
    shipping_address: AddressSchema
    billing_address: AddressSchema | None = None
    payment_method: PaymentMethodLiteral
    notes: str | None = None


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    """Any client-supplied status or timestamp is ignored by the server."""

    items: list[OrderLineSchema] = Field(min_length=1)
    shipping_address: AddressSchema
    billing_address: AddressSchema | None = None
    payment_method: PaymentMethodLiteral
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "0b5f0c5e-1c8e-4f3e-9a55-3d3c0b1f8a11", "quantity": 1}],
                    "shipping_address": {
                        "first_name": "Asha",
                        "last_name": "Verma",
                        "email": "asha@example.com",
                        "phone": "9876543210",
                        "address": "12 MG Road",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "zip_code": "560001",
                        "country": "India",
                    },
                    "payment_method": "cash-on-delivery",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatusLiteral
    note: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
