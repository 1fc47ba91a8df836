"""Email channel port: the interface every email adapter implements.

Adapters never raise on delivery problems. They report the outcome in a
``DeliveryResult`` and ``send_email`` logs it, so a dead mail relay cannot
undo an order or a password reset request.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import NotRequired, TypedDict


class DeliveryResult(TypedDict):
    message_id: str | None
    status: str  # "sent" or "failed"
    error: NotRequired[str]


@dataclass(frozen=True)
class OutgoingEmail:
    """A rendered message plus the template and context it came from."""

    to: str
    subject: str
    body: str
    template: str
    context: dict = field(default_factory=dict)
    reply_to: str | None = None
    html_body: str | None = None


class EmailPort(ABC):
    @abstractmethod
    def deliver(self, email: OutgoingEmail) -> DeliveryResult:
        """Hand one message to the transport."""
