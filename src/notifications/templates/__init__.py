"""Email templates.

Each template renders a ``{"subject", "body"}`` dict, optionally with an
``html_body``, from a context dict.
"""

from notifications.templates.contact_message import ContactMessageTemplate
from notifications.templates.order_confirmation import OrderConfirmationTemplate
from notifications.templates.password_reset import PasswordResetTemplate
from notifications.templates.support_request import SupportRequestTemplate
from notifications.templates.wholesale_application import WholesaleApplicationTemplate

__all__ = [
    "ContactMessageTemplate",
    "OrderConfirmationTemplate",
    "PasswordResetTemplate",
    "SupportRequestTemplate",
    "WholesaleApplicationTemplate",
]
