"""Pydantic request/response schemas for the Marketplace API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterAccountRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "asha",
                    "email": "asha@example.com",
                    "role": "Seller",
                }
            ]
        }
    }

    username: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    role: str = Field("Buyer", max_length=20)


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Hand-thrown Mug",
                    "price": 100.0,
                    "stock": 5,
                    "category_id": "cat-kitchen",
                    "image_urls": ["https://cdn.example.com/mug.jpg"],
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    price: float
    stock: int = 0
    category_id: str | None = None
    image_urls: list[str] = Field(default_factory=list)


class ChangePriceRequest(BaseModel):
    price: float


class AddToCartRequest(BaseModel):
    product_id: str
    # Left loose: missing or non-numeric quantities default to 1
    quantity: Any = None


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "quantity": 3,
                    "address": "12 Harbour Road, Kochi",
                    "payment_method": "Cash on Delivery",
                }
            ]
        }
    }

    product_id: str
    quantity: Any = None
    address: str | None = None
    payment_method: str | None = None


class UpdateStatusRequest(BaseModel):
    status: str = Field(..., max_length=20)


class ReviewRegistrationRequest(BaseModel):
    decision: str = Field(..., max_length=20)


# --- Response Schemas ---


class AccountResponse(BaseModel):
    id: str
    username: str
    email: str
    role: str


class ProductResponse(BaseModel):
    id: str
    seller_id: str
    seller_name: str | None = None
    category_id: str | None = None
    name: str
    price: float
    stock: int
    status: str
    image_urls: list[str] = Field(default_factory=list)


class CartLineResponse(BaseModel):
    id: str
    product_id: str
    product_name: str | None = None
    unit_price: float | None = None
    quantity: int
    subtotal: float | None = None
    available: bool


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    total: float


class CartEntryResponse(BaseModel):
    id: str
    product_id: str
    quantity: int


class OrderResponse(BaseModel):
    id: str
    buyer_id: str
    product_id: str
    seller_id: str
    quantity: int
    total_price: float
    address: str
    payment_method: str
    status: str
    cancelled_by: str | None = None
    product_name: str | None = None
    image_url: str | None = None
    buyer_name: str | None = None
    seller_name: str | None = None


class ApprovalResponse(BaseModel):
    seller_id: str
    status: str
    reviewer_id: str | None = None


class PendingRegistrationResponse(BaseModel):
    seller_id: str
    username: str | None = None
    email: str | None = None
    status: str
    requested_at: str | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str
