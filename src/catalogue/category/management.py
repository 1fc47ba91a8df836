"""Category management: commands, handler and lookups."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from shared.domain import storefront
from shared.errors import ConflictError
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=100)
    slug = String(required=True, max_length=100)
    description = Text()


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id = Identifier(required=True)
    name = String(max_length=100)
    slug = String(max_length=100)
    description = Text()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id = Identifier(required=True)


def _ensure_unique(repo, name, slug, exclude_id=None):
    if repo.find_clash(name=name, slug=slug, exclude_id=exclude_id) is not None:
        raise ConflictError({"category": ["A category with this name or slug already exists"]})


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        _ensure_unique(repo, command.name, command.slug)

        category = Category.create(name=command.name, slug=command.slug, description=command.description)
        repo.add(category)

        logger.info("category_created", category_id=str(category.id), slug=category.slug)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        _ensure_unique(repo, command.name, command.slug, exclude_id=category.id)

        category.update_details(name=command.name, slug=command.slug, description=command.description)
        repo.add(category)

        logger.info("category_updated", category_id=str(category.id))

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)

        logger.info("category_deleted", category_id=str(command.category_id))


def list_categories() -> list[Category]:
    return current_domain.repository_for(Category).list_all()


def get_category(category_id: str) -> Category:
    return current_domain.repository_for(Category).get(category_id)


def get_category_by_slug(slug: str) -> Category:
    category = current_domain.repository_for(Category).find_by_slug(slug)
    if category is None:
        raise ObjectNotFoundError({"category": ["Category not found"]})
    return category
