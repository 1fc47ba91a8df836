"""Pydantic request schemas for the store's inbound forms."""

from pydantic import Field

from shared.schemas import ApiModel


class SupportRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)


class WholesaleApplicationRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "fullName": "Asha Patel",
                    "businessEmail": "asha@patelgarments.in",
                    "companyName": "Patel Garments",
                    "gstNumber": "24AAACP1234F1Z5",
                    "productTypes": "Cargo, Denim",
                    "catalogFile": "https://drive.example.com/catalogue.pdf",
                }
            ]
        }
    }

    full_name: str = Field(..., min_length=1, max_length=255)
    business_email: str = Field(..., min_length=3, max_length=255)
    company_name: str = Field(..., min_length=1, max_length=255)
    gst_number: str = Field(..., min_length=1, max_length=20)
    product_types: str = Field(..., min_length=1)
    catalog_file: str | None = None


class ContactFormRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
