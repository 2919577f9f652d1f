"""Storefront read side for the catalogue.

Listings are served from the ServerCache under ``catalogue:`` keys and
rebuilt from the repositories on a miss. Cached values are plain dicts so
they can round-trip through the persistent tier.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.caching import get_server_cache
from storefront.catalogue.cache_events import CATALOGUE_CACHE_PREFIX
from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product

# Search keys are open-ended, so their entries age out quickly.
SEARCH_TTL_MS = 60 * 1000


def _iso(value):
    return value.isoformat() if value else None


def product_to_dict(product: Product) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "compare_at_price": product.compare_at_price,
        "image_url": product.image_url,
        "category": product.category,
        "tags": product.tag_list,
        "rating": product.rating,
        "is_new": bool(product.is_new),
        "is_sale": bool(product.is_sale),
        "is_featured": bool(product.is_featured),
        "is_trending": bool(product.is_trending),
        "stock": product.stock,
        "in_stock": product.is_in_stock,
        "created_at": _iso(product.created_at),
        "updated_at": _iso(product.updated_at),
    }


def category_to_dict(category: Category) -> dict:
    return {
        "id": str(category.id),
        "name": category.name,
        "slug": category.slug,
        "image_url": category.image_url,
        "description": category.description,
        "created_at": _iso(category.created_at),
    }


def _all_products() -> list[Product]:
    products = current_domain.repository_for(Product)._dao.query.limit(None).all().items
    return sorted(products, key=lambda p: p.created_at, reverse=True)


def _cached_products(key: str, predicate=None, ttl: int | None = None) -> list[dict]:
    def fetch():
        return [product_to_dict(p) for p in _all_products() if predicate is None or predicate(p)]

    return get_server_cache().get_or_set(f"{CATALOGUE_CACHE_PREFIX}{key}", fetch, ttl)


def list_products() -> list[dict]:
    return _cached_products("products:all")


def featured_products() -> list[dict]:
    return _cached_products("products:featured", lambda p: p.is_featured)


def trending_products() -> list[dict]:
    return _cached_products("products:trending", lambda p: p.is_trending)


def new_products() -> list[dict]:
    return _cached_products("products:new", lambda p: p.is_new)


def sale_products() -> list[dict]:
    return _cached_products("products:sale", lambda p: p.is_sale)


def products_in_category(name: str) -> list[dict]:
    wanted = name.strip().lower()
    return _cached_products(f"products:category:{wanted}", lambda p: p.category.lower() == wanted)


def get_product(product_id: str) -> dict:
    """Raises ObjectNotFoundError for an unknown id (never cached)."""

    def fetch():
        try:
            return product_to_dict(current_domain.repository_for(Product).get(product_id))
        except ObjectNotFoundError:
            return None

    product = get_server_cache().get_or_set(f"{CATALOGUE_CACHE_PREFIX}product:{product_id}", fetch)
    if product is None:
        raise ObjectNotFoundError(f"Product with id `{product_id}` does not exist")
    return product


def search_products(query: str) -> list[dict]:
    """Case-insensitive substring match over name, description, category and tags."""
    needle = (query or "").strip().lower()
    if not needle:
        raise ValidationError({"q": ["Search query is required"]})

    def matches(product: Product) -> bool:
        haystack = [product.name, product.description or "", product.category, *product.tag_list]
        return any(needle in field.lower() for field in haystack)

    return _cached_products(f"search:{needle}", matches, ttl=SEARCH_TTL_MS)


def list_categories() -> list[dict]:
    def fetch():
        categories = current_domain.repository_for(Category)._dao.query.limit(None).all().items
        return [category_to_dict(c) for c in sorted(categories, key=lambda c: c.name.lower())]

    return get_server_cache().get_or_set(f"{CATALOGUE_CACHE_PREFIX}categories", fetch)


def get_category_by_slug(slug: str) -> dict:
    """Raises ObjectNotFoundError for an unknown slug."""
    for category in list_categories():
        if category["slug"] == slug:
            return category
    raise ObjectNotFoundError(f"Category `{slug}` does not exist")
