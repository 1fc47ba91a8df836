"""Support request template: a buyer's help request relayed to the store inbox."""

from html import escape


class SupportRequestTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context["name"]
        email = context["email"]
        subject = context["subject"]
        message = context["message"]
        return {
            "subject": f"Support Request: {subject}",
            "body": f"New Support Request\n\nFrom: {name} ({email})\nSubject: {subject}\n\nMessage:\n{message}\n",
            "html_body": (
                "<h2>New Support Request</h2>"
                f"<p><strong>From:</strong> {escape(name)} ({escape(email)})</p>"
                f"<p><strong>Subject:</strong> {escape(subject)}</p>"
                "<p><strong>Message:</strong></p>"
                f"<p>{escape(message)}</p>"
            ),
        }
