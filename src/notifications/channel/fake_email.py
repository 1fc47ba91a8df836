"""Recording mailer: keeps outgoing storefront mail in memory.

Development and tests run against this adapter. Each message is kept with
the template that rendered it and the context it was rendered from, so a
test can ask for "the confirmation for order X" instead of parsing bodies.
"""

from contextlib import contextmanager
from uuid import uuid4

from notifications.channel.email_port import DeliveryResult, EmailPort, OutgoingEmail


class RecordingMailer(EmailPort):
    def __init__(self):
        self.outbox: list[OutgoingEmail] = []
        self._outage: str | None = None

    def deliver(self, email: OutgoingEmail) -> DeliveryResult:
        if self._outage is not None:
            return {"message_id": None, "status": "failed", "error": self._outage}

        self.outbox.append(email)
        return {"message_id": f"<{uuid4().hex}@storefront.local>", "status": "sent"}

    @contextmanager
    def relay_down(self, reason: str = "Mail relay unavailable"):
        """Fail every delivery attempted inside the block."""
        self._outage = reason
        try:
            yield self
        finally:
            self._outage = None

    def sent_to(self, address: str) -> list[OutgoingEmail]:
        return [email for email in self.outbox if email.to == address]

    def sent_with(self, template: str) -> list[OutgoingEmail]:
        return [email for email in self.outbox if email.template == template]

    def confirmation_for(self, order_id) -> OutgoingEmail | None:
        return next(
            (
                email
                for email in self.sent_with("OrderConfirmationTemplate")
                if email.context.get("order_id") == str(order_id)
            ),
            None,
        )

    def reset(self):
        self.outbox.clear()
        self._outage = None
