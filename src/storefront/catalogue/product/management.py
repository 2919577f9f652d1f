"""Product management: commands and handlers for the admin back-office."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.cache_events import invalidate_catalogue_cache
from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text(required=True)
    price: Float(required=True)
    compare_at_price: Float()
    image_url: String(required=True, max_length=500)
    category: String(required=True, max_length=100)
    tags: Text()  # JSON array of strings
    rating: Float(default=0.0)
    is_new: Boolean(default=False)
    is_sale: Boolean(default=False)
    is_featured: Boolean(default=False)
    is_trending: Boolean(default=False)
    stock: Integer(default=0)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float()
    compare_at_price: Float()
    clear_compare_at_price: Boolean(default=False)
    image_url: String(max_length=500)
    category: String(max_length=100)
    tags: Text()
    rating: Float()
    is_new: Boolean()
    is_sale: Boolean()
    is_featured: Boolean()
    is_trending: Boolean()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command(part_of="Product")
class AdjustStock:
    product_id: Identifier(required=True)
    stock: Integer(required=True)


def resolve_category_name(name: str) -> str:
    """Return the canonical name of an existing category, matched case-insensitively."""
    categories = current_domain.repository_for(Category)._dao.query.limit(None).all().items
    for category in categories:
        if category.name.lower() == name.strip().lower():
            return category.name
    raise ValidationError({"category": [f"Unknown category '{name}'"]})


def _parse_tags(raw):
    if raw is None:
        return None
    tags = json.loads(raw)
    if not isinstance(tags, list):
        raise ValidationError({"tags": ["Tags must be a list of strings"]})
    return [str(tag).strip() for tag in tags if str(tag).strip()]


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            compare_at_price=command.compare_at_price,
            image_url=command.image_url,
            category=resolve_category_name(command.category),
            tags=_parse_tags(command.tags) or [],
            rating=command.rating,
            is_new=command.is_new,
            is_sale=command.is_sale,
            is_featured=command.is_featured,
            is_trending=command.is_trending,
            stock=command.stock,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        changes = {}
        for field_name in ("name", "description", "price", "image_url", "rating"):
            value = getattr(command, field_name)
            if value is not None:
                changes[field_name] = value
        if command.clear_compare_at_price:
            changes["compare_at_price"] = None
        elif command.compare_at_price is not None:
            changes["compare_at_price"] = command.compare_at_price
        if command.category is not None:
            changes["category"] = resolve_category_name(command.category)
        if command.tags is not None:
            changes["tags"] = _parse_tags(command.tags)
        for flag in ("is_new", "is_sale", "is_featured", "is_trending"):
            value = getattr(command, flag)
            if value is not None:
                changes[flag] = value

        product.update_details(**changes)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)

        invalidate_catalogue_cache("product_deleted")
        logger.info("Product deleted", product_id=str(command.product_id), name=product.name)

    @handle(AdjustStock)
    def adjust_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.adjust_stock(command.stock)
        repo.add(product)
