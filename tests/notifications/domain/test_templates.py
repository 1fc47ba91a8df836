from decimal import Decimal

from notifications.templates import (
    ContactMessageTemplate,
    OrderConfirmationTemplate,
    PasswordResetTemplate,
    SupportRequestTemplate,
    WholesaleApplicationTemplate,
)


def test_order_confirmation():
    content = OrderConfirmationTemplate.render(
        {"order_id": "ord-42", "total_amount": Decimal("1180"), "item_count": 3, "name": "Asha"}
    )

    assert content["subject"] == "Order #ord-42 Confirmed"
    assert "Hi Asha" in content["body"]
    assert "Items: 3" in content["body"]
    assert "INR 1180.00" in content["body"]


def test_password_reset_carries_link():
    content = PasswordResetTemplate.render(
        {"reset_url": "https://shop.example.com/reset-password?token=abc", "ttl_minutes": 30}
    )

    assert content["subject"] == "Reset your password"
    assert "https://shop.example.com/reset-password?token=abc" in content["body"]
    assert "30 minutes" in content["body"]


def test_support_request():
    content = SupportRequestTemplate.render(
        {"name": "Asha", "email": "asha@example.com", "subject": "Late parcel", "message": "Where is it?"}
    )

    assert content["subject"] == "Support Request: Late parcel"
    assert "From: Asha (asha@example.com)" in content["body"]
    assert "Where is it?" in content["body"]


def test_contact_message_escapes_html():
    content = ContactMessageTemplate.render(
        {"name": "<b>Ravi</b>", "email": "ravi@example.com", "subject": "Hi", "message": "<script>x</script>"}
    )

    assert content["subject"] == "Contact Form: Hi"
    assert "<script>" in content["body"]
    assert "<script>" not in content["html_body"]
    assert "&lt;b&gt;Ravi&lt;/b&gt;" in content["html_body"]


def test_wholesale_application_skips_missing_catalog():
    content = WholesaleApplicationTemplate.render(
        {
            "full_name": "Asha Patel",
            "business_email": "asha@patelgarments.in",
            "company_name": "Patel Garments",
            "gst_number": "24AAACP1234F1Z5",
            "product_types": "Cargo, Denim",
            "catalog_file": None,
        }
    )

    assert content["subject"] == "New Wholesale Application"
    assert "GST Number: 24AAACP1234F1Z5" in content["body"]
    assert "Catalog Link" not in content["body"]
