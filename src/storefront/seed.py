"""Demo catalogue for local development.

Seeding is skipped when any category already exists.
"""

import json

from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory
from storefront.catalogue.product.management import CreateProduct
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_IMG = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&w=600&q=80"

DEMO_CATEGORIES = [
    {"name": "Women", "slug": "women", "image_url": _IMG.format("1552374196-1ab2a1c593e8")},
    {"name": "Men", "slug": "men", "image_url": _IMG.format("1520975661595-6453be3f7070")},
    {"name": "Accessories", "slug": "accessories", "image_url": _IMG.format("1556306535-0f09a537f0a3")},
    {"name": "Footwear", "slug": "footwear", "image_url": _IMG.format("1549298916-b41d501d3772")},
]

DEMO_PRODUCTS = [
    {
        "name": "Denim Jacket",
        "description": "Stylish denim jacket perfect for layering in all seasons.",
        "price": 5999,
        "compare_at_price": 7499,
        "image_url": _IMG.format("1541099649105-f69ad21f3246"),
        "category": "Women",
        "tags": ["jacket", "denim", "women"],
        "rating": 4.0,
        "is_sale": True,
        "is_featured": True,
        "stock": 15,
    },
    {
        "name": "White Shirt",
        "description": "Classic white button-up shirt for formal occasions.",
        "price": 3499,
        "image_url": _IMG.format("1598033129183-c4f50c736f10"),
        "category": "Men",
        "tags": ["shirt", "formal", "men"],
        "rating": 4.5,
        "is_featured": True,
        "stock": 25,
    },
    {
        "name": "Leather Bag",
        "description": "Premium leather crossbody bag in tan color.",
        "price": 9999,
        "image_url": _IMG.format("1591561954555-607968c989ab"),
        "category": "Accessories",
        "tags": ["bag", "leather", "accessories"],
        "rating": 5.0,
        "is_new": True,
        "is_featured": True,
        "stock": 10,
    },
    {
        "name": "Knit Sweater",
        "description": "Casual knit sweater in neutral beige tone.",
        "price": 4999,
        "image_url": _IMG.format("1576566588028-4147f3842f27"),
        "category": "Women",
        "tags": ["sweater", "knit", "women"],
        "rating": 4.0,
        "is_trending": True,
        "stock": 18,
    },
    {
        "name": "Sunglasses",
        "description": "Designer sunglasses with dark frames.",
        "price": 6499,
        "compare_at_price": 8999,
        "image_url": _IMG.format("1511499767150-a48a237f0083"),
        "category": "Accessories",
        "tags": ["sunglasses", "accessories"],
        "rating": 4.5,
        "is_sale": True,
        "is_trending": True,
        "stock": 0,
    },
    {
        "name": "Canvas Sneakers",
        "description": "Everyday low-top sneakers in off-white canvas.",
        "price": 2799,
        "image_url": _IMG.format("1525966222134-fcfa99b8ae77"),
        "category": "Footwear",
        "tags": ["sneakers", "canvas", "footwear"],
        "rating": 4.2,
        "is_new": True,
        "is_trending": True,
        "stock": 30,
    },
]


def seed_catalogue() -> dict:
    """Create the demo categories and products. Requires an active domain context."""
    if current_domain.repository_for(Category)._dao.query.all().items:
        logger.info("Catalogue already seeded, skipping")
        return {"categories": 0, "products": 0}

    for category in DEMO_CATEGORIES:
        current_domain.process(CreateCategory(**category), asynchronous=False)

    for product in DEMO_PRODUCTS:
        payload = {**product, "tags": json.dumps(product["tags"])}
        current_domain.process(CreateProduct(**payload), asynchronous=False)

    logger.info("Catalogue seeded", categories=len(DEMO_CATEGORIES), products=len(DEMO_PRODUCTS))
    return {"categories": len(DEMO_CATEGORIES), "products": len(DEMO_PRODUCTS)}
