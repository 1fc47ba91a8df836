"""Product aggregate: a sellable catalogue entry with price, stock and images."""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from shared.domain import storefront
from shared.money import from_paise, to_paise


@storefront.aggregate
class Product:
    """A catalogue product.

    ``category_id`` is a soft reference: products survive category deletion
    and are filtered out of category-joined listings. ``stock`` only moves
    through the compare-and-set in ``catalogue.product.stock`` once a product
    is on sale, never through a read-modify-write of the aggregate.
    """

    name = String(required=True, max_length=255)
    description = Text()
    sku = String(required=True, max_length=64, unique=True)
    price_paise = Integer(required=True, min_value=0)
    stock = Integer(default=0, min_value=0)
    images = Text(required=True)  # JSON: list of image URLs
    category_id = Identifier(required=True)
    variants = Text()  # JSON: list of {name, value}
    created_at = DateTime()

    @invariant.post
    def product_must_have_an_image(self):
        if not self.image_list:
            raise ValidationError({"images": ["At least one image is required"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, sku, price, stock, images, category_id, description=None, variants=None):
        return cls(
            name=name.strip(),
            description=description,
            sku=sku.strip(),
            price_paise=to_paise(price),
            stock=stock,
            images=json.dumps(list(images or [])),
            category_id=category_id,
            variants=_encode_variants(variants),
            created_at=datetime.now(UTC),
        )

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    @property
    def price(self):
        return from_paise(self.price_paise)

    @property
    def image_list(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def variant_list(self) -> list[dict] | None:
        return json.loads(self.variants) if self.variants else None

    # -------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        """Apply the non-``None`` fields in ``changes``."""
        for field in ("name", "description", "stock", "category_id"):
            value = changes.get(field)
            if value is not None:
                setattr(self, field, value)
        if changes.get("sku") is not None:
            self.sku = changes["sku"].strip()
        if changes.get("price") is not None:
            self.price_paise = to_paise(changes["price"])
        if changes.get("images") is not None:
            self.images = json.dumps(list(changes["images"]))
        if changes.get("variants") is not None:
            self.variants = _encode_variants(changes["variants"])


def _encode_variants(variants):
    if not variants:
        return None
    return json.dumps([{"name": str(v["name"]), "value": str(v["value"])} for v in variants])


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_sku(self, sku: str) -> Product | None:
        return self._dao.query.filter(sku=sku.strip()).all().first

    def fetch(self, product_id: str) -> Product | None:
        """Current row for ``product_id``, read straight from the store."""
        return self._dao.query.filter(id=product_id).all().first

    def list_in(self, category_ids) -> list[Product]:
        category_ids = [str(category_id) for category_id in category_ids]
        if not category_ids:
            return []
        return self._dao.query.filter(category_id__in=category_ids).order_by("created_at").all().items

    def fetch_many(self, product_ids) -> dict[str, Product]:
        product_ids = list({str(product_id) for product_id in product_ids})
        if not product_ids:
            return {}
        return {str(p.id): p for p in self._dao.query.filter(id__in=product_ids).all().items}
