"""Category management: commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.cache_events import invalidate_catalogue_cache
from storefront.catalogue.category.category import Category, slugify
from storefront.catalogue.product.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    image_url: String(max_length=500)
    description: Text()


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    slug: String(max_length=120)
    image_url: String(max_length=500)
    description: Text()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _assert_unique(name=None, slug=None, exclude_id=None):
    """Reject a name or slug already used by another category."""
    categories = current_domain.repository_for(Category)._dao.query.limit(None).all().items
    for category in categories:
        if exclude_id is not None and str(category.id) == str(exclude_id):
            continue
        if name is not None and category.name.lower() == name.lower():
            raise ValidationError({"name": [f"Category '{name}' already exists"]})
        if slug is not None and category.slug == slug:
            raise ValidationError({"slug": [f"Slug '{slug}' is already in use"]})


def _rename_products(old_name, new_name):
    """Move every product filed under ``old_name`` to ``new_name``."""
    product_repo = current_domain.repository_for(Product)
    products = product_repo._dao.query.limit(None).all().items
    moved = 0
    for product in products:
        if product.category.lower() == old_name.lower():
            product.update_details(category=new_name)
            product_repo.add(product)
            moved += 1
    logger.info("Category renamed", old_name=old_name, new_name=new_name, products=moved)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        slug = command.slug or slugify(command.name)
        _assert_unique(name=command.name, slug=slug)

        category = Category.create(
            name=command.name,
            slug=slug,
            image_url=command.image_url,
            description=command.description,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        _assert_unique(name=command.name, slug=command.slug, exclude_id=category.id)

        previous_name = category.name
        category.update_details(
            name=command.name,
            slug=command.slug,
            image_url=command.image_url,
            description=command.description,
        )
        repo.add(category)

        if command.name and command.name != previous_name:
            _rename_products(previous_name, command.name)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)

        invalidate_catalogue_cache("category_deleted")
        logger.info("Category deleted", category_id=str(command.category_id), name=category.name)
