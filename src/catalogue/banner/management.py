"""Banner management and listing."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.banner.banner import Banner
from shared.domain import storefront
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Banner")
class CreateBanner:
    title = String(required=True, max_length=255)
    description = Text()
    image = Text(required=True)
    link = Text()
    type = String(required=True, max_length=50)
    active = Boolean(default=True)
    position = Integer(default=0)


@storefront.command(part_of="Banner")
class UpdateBanner:
    banner_id = Identifier(required=True)
    title = String(max_length=255)
    description = Text()
    image = Text()
    link = Text()
    type = String(max_length=50)
    active = Boolean()
    position = Integer()


@storefront.command(part_of="Banner")
class DeleteBanner:
    banner_id = Identifier(required=True)


@storefront.command_handler(part_of=Banner)
class ManageBannerHandler:
    @handle(CreateBanner)
    def create_banner(self, command):
        banner = Banner(
            title=command.title,
            description=command.description,
            image=command.image,
            link=command.link,
            type=command.type,
            active=command.active,
            position=command.position,
        )
        current_domain.repository_for(Banner).add(banner)

        logger.info("banner_created", banner_id=str(banner.id), type=banner.type)
        return str(banner.id)

    @handle(UpdateBanner)
    def update_banner(self, command):
        repo = current_domain.repository_for(Banner)
        banner = repo.get(command.banner_id)
        banner.update_details(
            title=command.title,
            description=command.description,
            image=command.image,
            link=command.link,
            type=command.type,
            active=command.active,
            position=command.position,
        )
        repo.add(banner)

        logger.info("banner_updated", banner_id=str(banner.id))

    @handle(DeleteBanner)
    def delete_banner(self, command):
        repo = current_domain.repository_for(Banner)
        repo._dao.delete(repo.get(command.banner_id))

        logger.info("banner_deleted", banner_id=str(command.banner_id))


def list_banners(banner_type: str | None = None) -> list[Banner]:
    return current_domain.repository_for(Banner).list_by_type(banner_type)


def get_banner(banner_id: str) -> Banner:
    return current_domain.repository_for(Banner).get(banner_id)
