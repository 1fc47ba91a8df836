"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal

from pydantic import Field

from shared.money import to_paise
from shared.schemas import ApiModel

# --- Category Schemas ---


class CategoryRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Cargo", "slug": "cargo", "description": "Durable cargo pants"}]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class CategoryUpdateRequest(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


class CategoryResponse(ApiModel):
    id: str
    name: str
    slug: str
    description: str | None = None


# --- Product Schemas ---


class VariantSchema(ApiModel):
    name: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)


class ProductRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Relaxed Cargo Pant",
                    "description": "Six-pocket cotton twill cargo.",
                    "sku": "CARGO-OLV-32",
                    "price": "899.00",
                    "stock": 40,
                    "images": ["https://cdn.example.com/cargo-olive.jpg"],
                    "categoryId": "3f0c1a9e-5a43-4c1e-9d55-0b6f0e1f2a10",
                    "variants": [{"name": "size", "value": "32"}, {"name": "color", "value": "olive"}],
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    sku: str = Field(..., min_length=1, max_length=64)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    stock: int = Field(0, ge=0)
    images: list[str] = Field(..., min_length=1)
    category_id: str
    variants: list[VariantSchema] | None = None

    def command_fields(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "sku": self.sku,
            "price_paise": to_paise(self.price),
            "stock": self.stock,
            "images": json.dumps(self.images),
            "category_id": self.category_id,
            "variants": json.dumps([v.model_dump() for v in self.variants]) if self.variants else None,
        }


class ProductUpdateRequest(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    sku: str | None = Field(None, min_length=1, max_length=64)
    price: Decimal | None = Field(None, ge=0, decimal_places=2)
    stock: int | None = Field(None, ge=0)
    images: list[str] | None = Field(None, min_length=1)
    category_id: str | None = None
    variants: list[VariantSchema] | None = None

    def command_fields(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "sku": self.sku,
            "price_paise": to_paise(self.price) if self.price is not None else None,
            "stock": self.stock,
            "images": json.dumps(self.images) if self.images is not None else None,
            "category_id": self.category_id,
            "variants": json.dumps([v.model_dump() for v in self.variants]) if self.variants is not None else None,
        }


class ProductResponse(ApiModel):
    id: str
    name: str
    description: str | None = None
    sku: str
    price: Decimal
    stock: int
    images: list[str]
    category_id: str
    variants: list[VariantSchema] | None = None
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            sku=product.sku,
            price=product.price,
            stock=product.stock,
            images=product.image_list,
            category_id=str(product.category_id),
            variants=product.variant_list,
            created_at=product.created_at,
        )


class ProductDetailResponse(ProductResponse):
    category: CategoryResponse

    @classmethod
    def from_listing(cls, item) -> ProductDetailResponse:
        data = ProductResponse.from_product(item.product).model_dump()
        return cls(**data, category=CategoryResponse.model_validate(item.category))


# --- Banner Schemas ---


class BannerRequest(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    image: str = Field(..., min_length=1)
    link: str | None = None
    type: str = Field(..., min_length=1, max_length=50)
    active: bool = True
    position: int = 0


class BannerUpdateRequest(ApiModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    image: str | None = Field(None, min_length=1)
    link: str | None = None
    type: str | None = Field(None, min_length=1, max_length=50)
    active: bool | None = None
    position: int | None = None


class BannerResponse(ApiModel):
    id: str
    title: str
    description: str | None = None
    image: str
    link: str | None = None
    type: str
    active: bool
    position: int
