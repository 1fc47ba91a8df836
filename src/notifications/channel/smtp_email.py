"""SMTP email adapter: delivers messages through an SMTP relay."""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from notifications.channel.email_port import DeliveryResult, EmailPort, OutgoingEmail


class SmtpEmailAdapter(EmailPort):
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        sender: str = "no-reply@storefront.local",
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings):
        if not settings.smtp_host:
            raise ValueError("SMTP_HOST must be set when EMAIL_BACKEND is smtp")
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password,
            sender=settings.mail_from,
        )

    def build_message(self, email: OutgoingEmail) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = email.to
        message["Subject"] = email.subject
        message["Message-ID"] = make_msgid(domain=self.sender.rpartition("@")[2] or None)
        if email.reply_to:
            message["Reply-To"] = email.reply_to
        message.set_content(email.body)
        if email.html_body:
            message.add_alternative(email.html_body, subtype="html")
        return message

    def deliver(self, email: OutgoingEmail) -> DeliveryResult:
        message = self.build_message(email)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
                client.starttls()
                if self.username:
                    client.login(self.username, self.password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}
