"""User registration: command and handler."""

from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from identity.security import hash_password
from identity.user.user import User, UserRole, validate_password
from shared.domain import storefront
from shared.errors import ConflictError
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new buyer account with business profile information."""

    name = String(required=True, max_length=255)
    business_name = String(required=True, max_length=255)
    gstin = String(max_length=20)
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=255)
    phone_number = String(required=True, max_length=20)
    address = Text(required=True)
    role = String(max_length=20, choices=UserRole, default=UserRole.USER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        validate_password(command.password)

        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ConflictError({"email": ["Email already registered"]})

        user = User.register(
            name=command.name,
            business_name=command.business_name,
            gstin=command.gstin,
            email=command.email,
            password_hash=hash_password(command.password),
            phone_number=command.phone_number,
            address=command.address,
            role=command.role,
        )
        repo.add(user)

        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)


def ensure_admin(email: str, password: str, name: str = "Admin User") -> User:
    """Create the admin account unless an account with that email already exists."""
    repo = current_domain.repository_for(User)
    existing = repo.find_by_email(email)
    if existing is not None:
        return existing

    user_id = current_domain.process(
        RegisterUser(
            name=name,
            business_name=f"{name} (admin)",
            email=email,
            password=password,
            phone_number="0000000000",
            address="Head office",
            role=UserRole.ADMIN.value,
        ),
        asynchronous=False,
    )
    return repo.get(user_id)
