"""Server-side login sessions.

The browser only holds the opaque ``sid`` in an HTTP-only cookie; the
aggregate maps it to a user until it expires or the user logs out.
"""

from datetime import UTC, datetime, timedelta

from protean.fields import DateTime, Identifier, String

from identity.security import generate_token
from shared.clock import as_utc
from shared.domain import storefront


@storefront.aggregate
class UserSession:
    sid = String(identifier=True, max_length=128)
    user_id = Identifier(required=True)
    created_at = DateTime()
    expires_at = DateTime(required=True)

    @classmethod
    def open(cls, user_id, ttl_hours):
        now = datetime.now(UTC)
        return cls(
            sid=generate_token(),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(hours=ttl_hours),
        )

    def is_expired(self, now=None) -> bool:
        return as_utc(self.expires_at) <= (now or datetime.now(UTC))


@storefront.repository(part_of=UserSession)
class UserSessionRepository:
    def find(self, sid: str) -> UserSession | None:
        if not sid:
            return None
        return self._dao.query.filter(sid=sid).all().first

    def close_all_for(self, user_id: str) -> int:
        """Delete every session of ``user_id`` and return how many there were."""
        sessions = self._dao.query.filter(user_id=user_id).all().items
        for user_session in sessions:
            self._dao.delete(user_session)
        return len(sessions)
