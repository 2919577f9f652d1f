"""Category aggregate root for grouping storefront products."""

import re
from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from storefront.domain import storefront

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(value: str) -> str:
    """Derive a URL slug from a display name ("Fish Food & Care" -> "fish-food-care")."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower())
    return slug.strip("-")


@storefront.aggregate
class Category:
    """A named grouping of products shown in storefront navigation.

    Products reference their category by name; the slug is the category's
    address in storefront URLs. Both are unique across the catalogue.
    """

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    image_url: String(max_length=500)
    description: Text()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not _SLUG_PATTERN.match(self.slug):
            raise ValidationError({"slug": ["Slug may only contain lowercase letters, digits and hyphens"]})

    @classmethod
    def create(cls, name, slug=None, image_url=None, description=None):
        from storefront.catalogue.category.events import CategoryCreated

        now = datetime.now()
        category = cls(
            name=name,
            slug=slug or slugify(name),
            image_url=image_url,
            description=description,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
                slug=category.slug,
                image_url=image_url,
            )
        )
        return category

    def update_details(self, name=None, slug=None, image_url=None, description=None):
        from storefront.catalogue.category.events import CategoryUpdated

        if name is not None:
            self.name = name
        if slug is not None:
            self.slug = slug
        if image_url is not None:
            self.image_url = image_url
        if description is not None:
            self.description = description

        self.updated_at = datetime.now()

        self.raise_(
            CategoryUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
                image_url=self.image_url,
            )
        )
