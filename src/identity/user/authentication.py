"""Login, logout and session resolution."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.security import verify_password
from identity.session.session import UserSession
from identity.user.user import User
from shared.config import get_settings
from shared.domain import storefront
from shared.errors import AuthenticationError
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="UserSession")
class LogIn:
    identifier = String(required=True, max_length=254)  # email or phone number
    password = String(required=True, max_length=255)


@storefront.command(part_of="UserSession")
class LogOut:
    sid = String(required=True, max_length=128)


@storefront.command_handler(part_of=UserSession)
class AuthenticationHandler:
    @handle(LogIn)
    def log_in(self, command):
        """Verify credentials and open a new session; returns its ``sid``."""
        user = current_domain.repository_for(User).find_by_login(command.identifier)
        if user is None or not verify_password(command.password, user.password_hash):
            logger.info("login_rejected")
            raise AuthenticationError("Incorrect email or password.")

        user_session = UserSession.open(str(user.id), get_settings().session_ttl_hours)
        current_domain.repository_for(UserSession).add(user_session)

        logger.info("user_logged_in", user_id=str(user.id))
        return user_session.sid

    @handle(LogOut)
    def log_out(self, command):
        repo = current_domain.repository_for(UserSession)
        user_session = repo.find(command.sid)
        if user_session is not None:
            repo._dao.delete(user_session)
            logger.info("user_logged_out", user_id=str(user_session.user_id))


def resolve_session(sid: str | None) -> User:
    """Return the user behind a session id, or raise ``AuthenticationError``.

    Expired sessions are deleted on sight.
    """
    if not sid:
        raise AuthenticationError()

    session_repo = current_domain.repository_for(UserSession)
    user_session = session_repo.find(sid)
    if user_session is None:
        raise AuthenticationError()

    if user_session.is_expired():
        session_repo._dao.delete(user_session)
        raise AuthenticationError("Session expired. Please log in again.")

    user = current_domain.repository_for(User)._dao.query.filter(id=user_session.user_id).all().first
    if user is None:
        raise AuthenticationError("Session expired. Please log in again.")
    return user
