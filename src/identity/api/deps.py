"""Request dependencies resolving the session cookie to a user."""

from fastapi import Depends, Request

from identity.user.authentication import resolve_session
from identity.user.user import User
from shared.config import get_settings
from shared.errors import AuthorizationError
from shared.logging import add_context


async def session_id(request: Request) -> str | None:
    return request.cookies.get(get_settings().session_cookie_name)


async def current_user(sid: str | None = Depends(session_id)) -> User:
    user = resolve_session(sid)
    add_context(user_id=str(user.id))
    return user


async def require_admin(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise AuthorizationError("Admin access required.")
    return user
