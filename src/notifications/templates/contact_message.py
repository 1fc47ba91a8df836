"""Contact form template."""

from html import escape


class ContactMessageTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context["name"]
        email = context["email"]
        subject = context["subject"]
        message = context["message"]
        return {
            "subject": f"Contact Form: {subject}",
            "body": (
                "New Contact Form Submission\n\n"
                f"Name: {name}\nEmail: {email}\nSubject: {subject}\n\nMessage:\n{message}\n"
            ),
            "html_body": (
                "<h2>New Contact Form Submission</h2>"
                f"<p><strong>Name:</strong> {escape(name)}</p>"
                f"<p><strong>Email:</strong> {escape(email)}</p>"
                f"<p><strong>Subject:</strong> {escape(subject)}</p>"
                "<p><strong>Message:</strong></p>"
                f"<p>{escape(message)}</p>"
            ),
        }
