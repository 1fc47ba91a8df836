"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared.schemas import ApiModel

# --- Request Schemas ---


class RegisterRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Patel",
                    "businessName": "Patel Traders",
                    "gstin": "24ABCDE1234F1Z5",
                    "email": "asha@example.com",
                    "password": "s3cret!",
                    "phoneNumber": "9876543210",
                    "address": "12 Relief Road, Ahmedabad",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    business_name: str = Field(..., min_length=1, max_length=255)
    gstin: str | None = Field(None, max_length=20)
    email: str = Field(..., min_length=3, max_length=254)
    password: str
    phone_number: str = Field(..., min_length=1, max_length=20)
    address: str = Field(..., min_length=1)


class LoginRequest(ApiModel):
    email: str = Field(..., min_length=1, description="Email address or phone number")
    password: str


class ForgotPasswordRequest(ApiModel):
    email: str = Field(..., min_length=3, max_length=254)


class ResetPasswordRequest(ApiModel):
    token: str = Field(..., min_length=1)
    password: str


class ChangePasswordRequest(ApiModel):
    current_password: str
    new_password: str


class UpdateProfileRequest(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    business_name: str | None = Field(None, min_length=1, max_length=255)
    gstin: str | None = Field(None, max_length=20)
    phone_number: str | None = Field(None, min_length=1, max_length=20)
    address: str | None = Field(None, min_length=1)


# --- Response Schemas ---


class UserResponse(ApiModel):
    id: str
    name: str
    business_name: str
    gstin: str | None = None
    email: str
    phone_number: str
    address: str
    role: str
    created_at: datetime | None = None
