"""Inquiry aggregate: a message a signed-in buyer sent to the store.

Support requests, wholesale applications and contact messages are relayed
by email to the store inbox. Each one is also kept here with the outcome of
that relay, so nothing is lost when the mail relay is down.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from shared.domain import storefront


class InquiryKind(Enum):
    SUPPORT = "support"
    WHOLESALE_APPLICATION = "wholesale_application"
    CONTACT = "contact"


class RelayStatus(Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


@storefront.aggregate
class Inquiry:
    user_id = Identifier(required=True)
    kind = String(max_length=30, choices=InquiryKind, required=True)
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    subject = String(max_length=255)
    message = Text()
    details = Text()  # JSON: kind specific fields
    relay_status = String(max_length=20, choices=RelayStatus, default=RelayStatus.PENDING.value)
    relay_error = String(max_length=500)
    created_at = DateTime()

    @classmethod
    def record(cls, user_id, kind: InquiryKind, name, email, subject=None, message=None, details=None):
        return cls(
            user_id=user_id,
            kind=kind.value,
            name=name.strip(),
            email=email.strip(),
            subject=subject,
            message=message,
            details=json.dumps(details) if details else None,
            relay_status=RelayStatus.PENDING.value,
            created_at=datetime.now(UTC),
        )

    @property
    def detail_fields(self) -> dict:
        return json.loads(self.details) if self.details else {}

    @property
    def relayed(self) -> bool:
        return self.relay_status == RelayStatus.SENT.value

    def mark_relayed(self, result: dict):
        if result.get("status") == "sent":
            self.relay_status = RelayStatus.SENT.value
            self.relay_error = None
        else:
            self.relay_status = RelayStatus.FAILED.value
            self.relay_error = (result.get("error") or "Unknown delivery error")[:500]


@storefront.repository(part_of=Inquiry)
class InquiryRepository:
    def failed_relays(self) -> list[Inquiry]:
        return self._dao.query.filter(relay_status=RelayStatus.FAILED.value).order_by("created_at").all().items
