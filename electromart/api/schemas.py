"""
API Schemas for ElectroMart

Pydantic models for request binding and response serialization:
- Entity payloads (create and full-replacement update)
- Entity responses
- Authentication models
- Error and health models

Design Decisions:
1. Binding only: payloads check JSON types, field rules live in the setters
2. Every payload field is optional so missing fields reach the setters
3. Responses never carry the password hash
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from electromart.validation import MAX_RECORD_ID


def record_id_field():
    """Optional foreign-key field bounded to the id range."""
    return Field(None, ge=0, le=MAX_RECORD_ID)


# =============================================================================
# Base Schemas
# =============================================================================

class RecordResponse(BaseModel):
    """Bookkeeping fields shared by every response."""

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# User Schemas
# =============================================================================

class UserPayload(BaseModel):
    """User create/update request."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    mobile: Optional[str] = None
    role: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "username": "ada",
                "password": "Secur3!pass",
                "email": "ada@example.com",
                "address": "12 Analytical Row",
                "mobile": "0791234567",
            }
        }
    )


class UserResponse(RecordResponse):
    """User response model (no password)."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    mobile: Optional[str] = None
    role: Optional[str] = None


# =============================================================================
# Brand / Category Schemas
# =============================================================================

class BrandPayload(BaseModel):
    """Brand create/update request."""

    name: Optional[str] = None
    description: Optional[str] = None


class BrandResponse(RecordResponse):
    name: Optional[str] = None
    description: Optional[str] = None


class CategoryPayload(BaseModel):
    """Category create/update request."""

    name: Optional[str] = None
    description: Optional[str] = None


class CategoryResponse(RecordResponse):
    name: Optional[str] = None
    description: Optional[str] = None


# =============================================================================
# Product Schemas
# =============================================================================

class ProductPayload(BaseModel):
    """Product create/update request."""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock_quantity: Optional[int] = None
    brand_id: Optional[int] = record_id_field()
    category_id: Optional[int] = record_id_field()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Laptop Pro 14",
                "description": "14 inch, 16GB RAM",
                "price": 1299.99,
                "stock_quantity": 12,
                "brand_id": 3735928559,
                "category_id": 48879,
            }
        }
    )


class ProductResponse(RecordResponse):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock_quantity: Optional[int] = None
    brand_id: Optional[int] = None
    category_id: Optional[int] = None


# =============================================================================
# Order Schemas
# =============================================================================

class OrderPayload(BaseModel):
    """Order create/update request."""

    user_id: Optional[int] = record_id_field()
    order_date: Optional[str] = None
    total_amount: Optional[float] = None
    status: Optional[str] = None


class OrderResponse(RecordResponse):
    user_id: Optional[int] = None
    order_date: Optional[str] = None
    total_amount: Optional[float] = None
    status: Optional[str] = None


class OrderItemPayload(BaseModel):
    """Order item create/update request."""

    order_id: Optional[int] = record_id_field()
    product_id: Optional[int] = record_id_field()
    quantity: Optional[int] = None
    subtotal: Optional[float] = None


class OrderItemResponse(RecordResponse):
    order_id: Optional[int] = None
    product_id: Optional[int] = None
    quantity: Optional[int] = None
    subtotal: Optional[float] = None


# =============================================================================
# Payment / Shipping Schemas
# =============================================================================

class PaymentPayload(BaseModel):
    """Payment create/update request."""

    order_id: Optional[int] = record_id_field()
    payment_method: Optional[str] = None
    amount: Optional[float] = None
    payment_date: Optional[str] = None
    status: Optional[str] = None


class PaymentResponse(RecordResponse):
    order_id: Optional[int] = None
    payment_method: Optional[str] = None
    amount: Optional[float] = None
    payment_date: Optional[str] = None
    status: Optional[str] = None


class ShippingDetailsPayload(BaseModel):
    """Shipping details create/update request."""

    order_id: Optional[int] = record_id_field()
    address: Optional[str] = None
    shipping_date: Optional[str] = None
    estimated_arrival: Optional[str] = None
    status: Optional[str] = None


class ShippingDetailsResponse(RecordResponse):
    order_id: Optional[int] = None
    address: Optional[str] = None
    shipping_date: Optional[str] = None
    estimated_arrival: Optional[str] = None
    status: Optional[str] = None


# =============================================================================
# Review Schemas
# =============================================================================

class ReviewPayload(BaseModel):
    """Review create/update request."""

    product_id: Optional[int] = record_id_field()
    user_id: Optional[int] = record_id_field()
    rating: Optional[int] = None
    comment: Optional[str] = None
    review_date: Optional[str] = None


class ReviewResponse(RecordResponse):
    product_id: Optional[int] = None
    user_id: Optional[int] = None
    rating: Optional[int] = None
    comment: Optional[str] = None
    review_date: Optional[str] = None


# =============================================================================
# Authentication Schemas
# =============================================================================

class LoginRequest(BaseModel):
    """Login credentials."""

    username: str
    password: str


class TokenResponse(BaseModel):
    token: str


class ProtectedResponse(BaseModel):
    username: str
    message: str


# =============================================================================
# System Schemas
# =============================================================================

class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    details: Optional[str] = None
    errors: Optional[list[str]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Validation error",
                "details": "the rating must be between 0 and 5",
            }
        }
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)
