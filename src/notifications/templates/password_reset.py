"""Password reset template: carries the single-use reset link."""


class PasswordResetTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name", "there")
        reset_url = context["reset_url"]
        ttl_minutes = context.get("ttl_minutes", 60)
        return {
            "subject": "Reset your password",
            "body": (
                f"Hi {name},\n\n"
                "We received a request to reset your password. "
                "Use the link below to choose a new one:\n\n"
                f"{reset_url}\n\n"
                f"The link expires in {ttl_minutes} minutes. "
                "If you didn't ask for this, you can ignore this email."
            ),
        }
