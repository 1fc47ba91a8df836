"""Email channel registry.

Provides singleton access to the configured email adapter. The recording
mailer is used by default; ``EMAIL_BACKEND=smtp`` switches to real SMTP
delivery.
"""

from notifications.channel.email_port import DeliveryResult, EmailPort, OutgoingEmail
from shared.config import get_settings
from shared.logging import get_logger

logger = get_logger(__name__)

_channel_instances: dict[str, EmailPort] = {}

EMAIL = "email"


def get_email_channel() -> EmailPort:
    """Return the configured email adapter (singleton)."""
    if EMAIL not in _channel_instances:
        backend = get_settings().email_backend
        if backend == "fake":
            from notifications.channel.fake_email import RecordingMailer

            _channel_instances[EMAIL] = RecordingMailer()
        elif backend == "smtp":
            from notifications.channel.smtp_email import SmtpEmailAdapter

            _channel_instances[EMAIL] = SmtpEmailAdapter.from_settings(get_settings())
        else:
            raise ValueError(f"Unknown email backend: {backend}")

    return _channel_instances[EMAIL]


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()


def send_email(template, to: str, context: dict, reply_to: str | None = None) -> DeliveryResult:
    """Render ``template`` with ``context`` and dispatch it to ``to``.

    Delivery problems are logged and reported in the returned dict, never raised.
    """
    content = template.render(context)
    email = OutgoingEmail(
        to=to,
        subject=content["subject"],
        body=content["body"],
        template=template.__name__,
        context=dict(context),
        reply_to=reply_to,
        html_body=content.get("html_body"),
    )
    result = get_email_channel().deliver(email)

    if result.get("status") == "sent":
        logger.info("email_sent", template=email.template, to=to, message_id=result.get("message_id"))
    else:
        logger.warning("email_failed", template=email.template, to=to, error=result.get("error"))
    return result
