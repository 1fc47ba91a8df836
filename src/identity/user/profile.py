"""Profile updates and the admin user directory."""

from protean import handle
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from identity.user.user import User
from shared.domain import storefront
from shared.errors import AuthorizationError
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class UpdateProfile:
    actor_id = Identifier(required=True)
    actor_is_admin = Boolean(default=False)
    user_id = Identifier(required=True)
    name = String(max_length=255)
    business_name = String(max_length=255)
    gstin = String(max_length=20)
    phone_number = String(max_length=20)
    address = Text()


@storefront.command_handler(part_of=User)
class ProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        if str(command.actor_id) != str(command.user_id) and not command.actor_is_admin:
            raise AuthorizationError("Forbidden: You can only update your own profile.")

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_profile(
            name=command.name,
            business_name=command.business_name,
            gstin=command.gstin,
            phone_number=command.phone_number,
            address=command.address,
        )
        repo.add(user)

        logger.info("profile_updated", user_id=str(command.user_id))


def get_user(user_id: str) -> User:
    return current_domain.repository_for(User).get(user_id)


def list_users() -> list[User]:
    return current_domain.repository_for(User).list_all()
