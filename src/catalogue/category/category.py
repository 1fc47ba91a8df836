"""Category aggregate for grouping products in the catalogue."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String, Text

from shared.domain import storefront

_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@storefront.aggregate
class Category:
    """A flat product grouping addressed by id or by URL slug."""

    name = String(required=True, max_length=100, unique=True)
    slug = String(required=True, max_length=100, unique=True)
    description = Text()

    @invariant.post
    def slug_must_be_url_safe(self):
        if not _SLUG_RE.match(self.slug or ""):
            raise ValidationError({"slug": ["Slug may only contain lowercase letters, digits and hyphens"]})

    @classmethod
    def create(cls, name, slug, description=None):
        return cls(name=name.strip(), slug=slug.strip().lower(), description=description)

    def update_details(self, name=None, slug=None, description=None):
        if name is not None:
            self.name = name.strip()
        if slug is not None:
            self.slug = slug.strip().lower()
        if description is not None:
            self.description = description


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_slug(self, slug: str) -> Category | None:
        return self._dao.query.filter(slug=slug).all().first

    def find_clash(self, name=None, slug=None, exclude_id=None) -> Category | None:
        """A category other than ``exclude_id`` already using ``name`` or ``slug``."""
        candidates = []
        if name is not None:
            candidates += self._dao.query.filter(name=name.strip()).all().items
        if slug is not None:
            candidates += self._dao.query.filter(slug=slug.strip().lower()).all().items
        return next((c for c in candidates if str(c.id) != str(exclude_id)), None)

    def list_all(self) -> list[Category]:
        return self._dao.query.order_by("name").all().items
