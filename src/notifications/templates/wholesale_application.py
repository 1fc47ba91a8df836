"""Wholesale application template: a retailer applying for a trade account."""

from html import escape

_FIELDS = (
    ("Full Name", "full_name"),
    ("Business Email", "business_email"),
    ("Company Name", "company_name"),
    ("GST Number", "gst_number"),
    ("Product Categories", "product_types"),
    ("Catalog Link", "catalog_file"),
)


class WholesaleApplicationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        rows = [(label, context.get(key)) for label, key in _FIELDS if context.get(key)]
        return {
            "subject": "New Wholesale Application",
            "body": "New Wholesale Application Received\n\n" + "\n".join(f"{label}: {value}" for label, value in rows),
            "html_body": "<h2>New Wholesale Application Received</h2>"
            + "".join(f"<p><strong>{label}:</strong> {escape(str(value))}</p>" for label, value in rows),
        }
