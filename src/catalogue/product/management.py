"""Product management: commands and handler for admin catalogue writes."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.product.product import Product
from shared.domain import storefront
from shared.errors import ConflictError
from shared.logging import get_logger
from shared.money import from_paise

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text()
    sku = String(required=True, max_length=64)
    price_paise = Integer(required=True, min_value=0)
    stock = Integer(default=0, min_value=0)
    images = Text(required=True)  # JSON: list of image URLs
    category_id = Identifier(required=True)
    variants = Text()  # JSON: list of {name, value}


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    sku = String(max_length=64)
    price_paise = Integer(min_value=0)
    stock = Integer(min_value=0)
    images = Text()
    category_id = Identifier()
    variants = Text()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def _check_category(category_id):
    try:
        current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise ValidationError({"category_id": ["Category does not exist"]}) from None


def _check_sku(repo, sku, exclude_id=None):
    existing = repo.find_by_sku(sku)
    if existing is not None and str(existing.id) != str(exclude_id):
        raise ConflictError({"sku": ["A product with this SKU already exists"]})


def _decode(payload):
    return json.loads(payload) if payload else None


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)
        _check_category(command.category_id)
        _check_sku(repo, command.sku)

        product = Product.create(
            name=command.name,
            description=command.description,
            sku=command.sku,
            price=from_paise(command.price_paise),
            stock=command.stock or 0,
            images=_decode(command.images),
            category_id=command.category_id,
            variants=_decode(command.variants),
        )
        repo.add(product)

        logger.info("product_created", product_id=str(product.id), sku=product.sku)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        if command.category_id is not None:
            _check_category(command.category_id)
        if command.sku is not None:
            _check_sku(repo, command.sku, exclude_id=product.id)

        product.update_details(
            name=command.name,
            description=command.description,
            sku=command.sku,
            price=from_paise(command.price_paise) if command.price_paise is not None else None,
            stock=command.stock,
            images=_decode(command.images),
            category_id=command.category_id,
            variants=_decode(command.variants),
        )
        repo.add(product)

        logger.info("product_updated", product_id=str(product.id))

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)

        logger.info("product_deleted", product_id=str(command.product_id))
