"""Password change and reset: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from identity.security import hash_password, verify_password
from identity.session.session import UserSession
from identity.user.user import User, validate_password
from notifications.channel import send_email
from notifications.templates.password_reset import PasswordResetTemplate
from shared.config import get_settings
from shared.domain import storefront
from shared.errors import AuthenticationError, AuthorizationError
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class ChangePassword:
    actor_id = Identifier(required=True)
    actor_is_admin = Boolean(default=False)
    user_id = Identifier(required=True)
    current_password = String(required=True, max_length=255)
    new_password = String(required=True, max_length=255)


@storefront.command(part_of="User")
class RequestPasswordReset:
    email = String(required=True, max_length=254)


@storefront.command(part_of="User")
class ResetPassword:
    token = String(required=True, max_length=128)
    new_password = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class PasswordHandler:
    @handle(ChangePassword)
    def change_password(self, command):
        if str(command.actor_id) != str(command.user_id) and not command.actor_is_admin:
            raise AuthorizationError("Forbidden: You can only change your own password.")
        validate_password(command.new_password)

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        if not verify_password(command.current_password, user.password_hash):
            raise AuthenticationError("Incorrect current password.")

        user.change_password_hash(hash_password(command.new_password))
        repo.add(user)

        logger.info(
            "password_changed",
            user_id=str(command.user_id),
            by_admin=str(command.actor_id) != str(command.user_id),
        )

    @handle(RequestPasswordReset)
    def request_reset(self, command):
        """Issue a reset token; returns the user id, or ``None`` for an unknown address."""
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)
        if user is None:
            logger.info("password_reset_unknown_email")
            return None

        user.issue_password_reset(get_settings().password_reset_ttl_minutes)
        repo.add(user)
        return str(user.id)

    @handle(ResetPassword)
    def reset_password(self, command):
        validate_password(command.new_password)

        repo = current_domain.repository_for(User)
        user = repo.find_by_reset_token(command.token)
        if user is None or not user.reset_token_is_valid(command.token):
            raise ValidationError({"token": ["Password reset token is invalid or has expired."]})

        user.change_password_hash(hash_password(command.new_password))
        repo.add(user)
        closed = current_domain.repository_for(UserSession).close_all_for(str(user.id))

        logger.info("password_reset_completed", user_id=str(user.id), sessions_closed=closed)


def request_password_reset(email: str) -> None:
    """Email a reset link. Unknown addresses are ignored silently."""
    user_id = current_domain.process(RequestPasswordReset(email=email), asynchronous=False)
    if user_id is None:
        return

    try:
        user = current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        return

    settings = get_settings()
    send_email(
        PasswordResetTemplate,
        to=user.email,
        context={
            "name": user.name,
            "reset_url": f"{settings.frontend_url.rstrip('/')}/reset-password?token={user.password_reset_token}",
            "ttl_minutes": settings.password_reset_ttl_minutes,
        },
    )
    logger.info("password_reset_requested", email=user.email)
