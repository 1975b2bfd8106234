"""
Order API Routes

Orders and everything hanging off one: items, payments and shipping.
"""

from electromart.api.routes.crud import build_crud_router
from electromart.api.schemas import (
    OrderPayload,
    OrderResponse,
    OrderItemPayload,
    OrderItemResponse,
    PaymentPayload,
    PaymentResponse,
    ShippingDetailsPayload,
    ShippingDetailsResponse,
)


orders_router = build_crud_router(
    key="order",
    prefix="/orders",
    payload_schema=OrderPayload,
    response_schema=OrderResponse,
)

order_items_router = build_crud_router(
    key="order_item",
    prefix="/order-items",
    payload_schema=OrderItemPayload,
    response_schema=OrderItemResponse,
)

payments_router = build_crud_router(
    key="payment",
    prefix="/payments",
    payload_schema=PaymentPayload,
    response_schema=PaymentResponse,
)

shipping_details_router = build_crud_router(
    key="shipping_details",
    prefix="/shipping-details",
    payload_schema=ShippingDetailsPayload,
    response_schema=ShippingDetailsResponse,
)
