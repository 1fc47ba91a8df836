"""Order confirmation template: sent when an order is committed."""

from shared.money import quantize


class OrderConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total = quantize(context.get("total_amount", 0))
        item_count = context.get("item_count", 0)
        name = context.get("name", "there")
        return {
            "subject": f"Order #{order_id} Confirmed",
            "body": (
                f"Hi {name},\n\n"
                f"Your order #{order_id} has been placed.\n\n"
                f"Items: {item_count}\n"
                f"Order Total: INR {total}\n\n"
                "We'll let you know once it ships.\n\n"
                "Thank you for shopping with us!"
            ),
        }
