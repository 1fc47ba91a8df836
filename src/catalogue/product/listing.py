"""Read-side product queries, each product paired with its category."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.product.product import Product


@dataclass
class ProductWithCategory:
    product: Product
    category: Category


def _pair(products, categories) -> list[ProductWithCategory]:
    by_id = {str(c.id): c for c in categories}
    return [
        ProductWithCategory(product, by_id[str(product.category_id)])
        for product in products
        if str(product.category_id) in by_id
    ]


def list_products() -> list[ProductWithCategory]:
    """All products whose category still exists."""
    categories = current_domain.repository_for(Category).list_all()
    products = current_domain.repository_for(Product).list_in(c.id for c in categories)
    return _pair(products, categories)


def get_product(product_id: str) -> ProductWithCategory:
    product = current_domain.repository_for(Product).get(product_id)
    category = current_domain.repository_for(Category)._dao.query.filter(id=str(product.category_id)).all().first
    if category is None:
        raise ObjectNotFoundError({"product": ["Product not found"]})
    return ProductWithCategory(product, category)


def list_products_by_category(category_id: str) -> list[ProductWithCategory]:
    category = current_domain.repository_for(Category)._dao.query.filter(id=str(category_id)).all().first
    if category is None:
        return []
    return _pair(current_domain.repository_for(Product).list_in([category.id]), [category])


def list_products_by_category_slug(slug: str) -> list[ProductWithCategory]:
    category = current_domain.repository_for(Category).find_by_slug(slug)
    if category is None:
        return []
    return _pair(current_domain.repository_for(Product).list_in([category.id]), [category])
