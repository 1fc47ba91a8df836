"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal

from pydantic import Field

from catalogue.api.schemas import ProductResponse
from shared.money import to_paise
from shared.schemas import ApiModel

# --- Request Schemas ---


class VariantInfo(ApiModel):
    name: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)


class AddToCartRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "productId": "3f0c1a9e-5a43-4c1e-9d55-0b6f0e1f2a10",
                    "quantity": 2,
                    "variantInfo": [{"name": "size", "value": "M"}],
                },
            ]
        }
    }

    product_id: str
    quantity: int = Field(1, ge=1)
    variant_info: list[VariantInfo] | None = None

    def variant_json(self) -> str | None:
        return json.dumps([v.model_dump() for v in self.variant_info]) if self.variant_info else None


class UpdateCartItemRequest(ApiModel):
    quantity: int = Field(..., ge=1)


class AddToWatchlistRequest(ApiModel):
    product_id: str


class OrderItemRequest(ApiModel):
    product_id: str
    quantity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    variant_info: list[VariantInfo] | None = None

    def as_line(self) -> dict:
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "price_paise": to_paise(self.price),
            "variant_info": [v.model_dump() for v in self.variant_info] if self.variant_info else None,
        }


class CreateOrderRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {"productId": "3f0c1a9e-5a43-4c1e-9d55-0b6f0e1f2a10", "quantity": 2, "price": "499.00"}
                    ],
                    "address": "12 Relief Road, Ahmedabad",
                    "total": "1177.64",
                    "paymentMethod": "cod",
                }
            ]
        }
    }

    items: list[OrderItemRequest]
    address: str = Field(..., min_length=1)
    total: Decimal = Field(..., ge=0, decimal_places=2)
    payment_method: str | None = None

    def items_json(self) -> str:
        return json.dumps([item.as_line() for item in self.items])


class CheckoutRequest(ApiModel):
    address: str | None = None
    payment_method: str | None = None


class UpdateOrderStatusRequest(ApiModel):
    status: str


# --- Response Schemas ---


class CartItemResponse(ApiModel):
    id: str
    user_id: str
    product_id: str
    quantity: int
    variant_info: list[VariantInfo] | None = None

    @classmethod
    def from_item(cls, item) -> CartItemResponse:
        return cls(
            id=str(item.id),
            user_id=str(item.user_id),
            product_id=str(item.product_id),
            quantity=item.quantity,
            variant_info=item.variant_list,
        )


class CartLineResponse(CartItemResponse):
    product: ProductResponse

    @classmethod
    def from_line(cls, line) -> CartLineResponse:
        data = CartItemResponse.from_item(line.item).model_dump()
        return cls(**data, product=ProductResponse.from_product(line.product))


class WatchlistItemResponse(ApiModel):
    id: str
    user_id: str
    product_id: str
    created_at: datetime | None = None

    @classmethod
    def from_item(cls, item) -> WatchlistItemResponse:
        return cls(
            id=str(item.id),
            user_id=str(item.user_id),
            product_id=str(item.product_id),
            created_at=item.created_at,
        )


class WatchlistEntryResponse(WatchlistItemResponse):
    product: ProductResponse

    @classmethod
    def from_entry(cls, entry) -> WatchlistEntryResponse:
        data = WatchlistItemResponse.from_item(entry.item).model_dump()
        return cls(**data, product=ProductResponse.from_product(entry.product))


class OrderItemResponse(ApiModel):
    id: str
    order_id: str
    product_id: str
    quantity: int
    price: Decimal
    variant_info: list[VariantInfo] | None = None


class OrderUserResponse(ApiModel):
    id: str
    name: str
    email: str


class OrderResponse(ApiModel):
    id: str
    user_id: str
    status: str
    total: Decimal
    address: str
    payment_method: str | None = None
    payment_intent_id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            status=order.status,
            total=order.total,
            address=order.address,
            payment_method=order.payment_method,
            payment_intent_id=order.payment_intent_id,
            created_at=order.created_at,
        )


class OrderDetailResponse(OrderResponse):
    items: list[OrderItemResponse]
    user: OrderUserResponse | None = None

    @classmethod
    def from_view(cls, view) -> OrderDetailResponse:
        order = view.order
        data = OrderResponse.from_order(order).model_dump()
        items = [
            OrderItemResponse(
                id=str(item.id),
                order_id=str(order.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                price=item.price,
                variant_info=item.variant_list,
            )
            for item in order.items
        ]
        user = None
        if view.user is not None:
            user = OrderUserResponse(id=str(view.user.id), name=view.user.name, email=view.user.email)
        return cls(**data, items=items, user=user)
