"""Pydantic request/response schemas for the Catalogue API."""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    price: float = Field(gt=0)
    compare_at_price: float | None = None
    image_url: str = Field(min_length=1, max_length=500)
    category: str = Field(min_length=1, max_length=100)
    tags: list[str] = []
    rating: float = Field(default=0.0, ge=0, le=5)
    is_new: bool = False
    is_sale: bool = False
    is_featured: bool = False
    is_trending: bool = False
    stock: int = Field(default=0, ge=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Neon Tetra (pack of 10)",
                    "description": "Peaceful schooling fish for community tanks.",
                    "price": 450,
                    "image_url": "https://cdn.example.com/neon-tetra.jpg",
                    "category": "Fish",
                    "tags": ["freshwater", "schooling"],
                    "stock": 25,
                    "is_featured": True,
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, gt=0)
    compare_at_price: float | None = None
    clear_compare_at_price: bool = False
    image_url: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    is_new: bool | None = None
    is_sale: bool | None = None
    is_featured: bool | None = None
    is_trending: bool | None = None


class UpdateStockRequest(BaseModel):
    stock: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------
class CreateCategoryRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str | None = Field(default=None, max_length=120)
    image_url: str | None = None
    description: str | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    slug: str | None = Field(default=None, max_length=120)
    image_url: str | None = None
    description: str | None = None


# ---------------------------------------------------------------------------
# Stock alerts
# ---------------------------------------------------------------------------
class StockSubscribeRequest(BaseModel):
    email: str
    product_id: str


class NotifyBackInStockRequest(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class ProductIdResponse(BaseModel):
    product_id: str


class CategoryIdResponse(BaseModel):
    category_id: str
