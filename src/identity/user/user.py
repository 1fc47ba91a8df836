"""User aggregate: identity plus the wholesale business profile."""

from datetime import UTC, datetime, timedelta
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from identity.security import generate_token
from shared.clock import as_utc
from shared.domain import storefront


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


MIN_PASSWORD_LENGTH = 6


def validate_password(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters."]})


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@storefront.aggregate
class User:
    """A storefront account.

    Buyers register with their business details (name, GSTIN, address); the
    same aggregate holds admin accounts, distinguished by ``role``. Users are
    never hard-deleted.
    """

    name = String(required=True, max_length=255)
    business_name = String(required=True, max_length=255)
    gstin = String(max_length=20)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    phone_number = String(required=True, max_length=20)
    address = Text(required=True)
    role = String(max_length=20, choices=UserRole, default=UserRole.USER.value)
    created_at = DateTime()
    password_reset_token = String(max_length=128)
    password_reset_expires = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, business_name, email, password_hash, phone_number, address, gstin=None, role=None):
        return cls(
            name=name,
            business_name=business_name,
            gstin=gstin or None,
            email=normalize_email(email),
            password_hash=password_hash,
            phone_number=phone_number,
            address=address,
            role=role or UserRole.USER.value,
            created_at=datetime.now(UTC),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    # -------------------------------------------------------------------
    # Profile and credentials
    # -------------------------------------------------------------------
    def update_profile(self, name=None, business_name=None, gstin=None, phone_number=None, address=None):
        if name is not None:
            self.name = name
        if business_name is not None:
            self.business_name = business_name
        if gstin is not None:
            self.gstin = gstin or None
        if phone_number is not None:
            self.phone_number = phone_number
        if address is not None:
            self.address = address

    def change_password_hash(self, password_hash):
        self.password_hash = password_hash
        self.password_reset_token = None
        self.password_reset_expires = None

    def issue_password_reset(self, ttl_minutes):
        """Create a single-use reset token and return it."""
        token = generate_token()
        self.password_reset_token = token
        self.password_reset_expires = datetime.now(UTC) + timedelta(minutes=ttl_minutes)
        return token

    def reset_token_is_valid(self, token, now=None) -> bool:
        if not token or token != self.password_reset_token or self.password_reset_expires is None:
            return False
        return as_utc(self.password_reset_expires) > (now or datetime.now(UTC))


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=normalize_email(email)).all().first

    def find_by_login(self, identifier: str) -> User | None:
        """Look a user up by email address, falling back to phone number."""
        identifier = (identifier or "").strip()
        return self.find_by_email(identifier) or self._dao.query.filter(phone_number=identifier).all().first

    def find_by_reset_token(self, token: str) -> User | None:
        if not token:
            return None
        return self._dao.query.filter(password_reset_token=token).all().first

    def list_all(self) -> list[User]:
        return self._dao.query.order_by("created_at").all().items
