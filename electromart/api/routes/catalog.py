"""
Catalog API Routes

Brands, categories, products and product reviews.
"""

from electromart.api.routes.crud import build_crud_router
from electromart.api.schemas import (
    BrandPayload,
    BrandResponse,
    CategoryPayload,
    CategoryResponse,
    ProductPayload,
    ProductResponse,
    ReviewPayload,
    ReviewResponse,
)


brands_router = build_crud_router(
    key="brand",
    prefix="/brands",
    payload_schema=BrandPayload,
    response_schema=BrandResponse,
)

categories_router = build_crud_router(
    key="category",
    prefix="/categories",
    payload_schema=CategoryPayload,
    response_schema=CategoryResponse,
)

products_router = build_crud_router(
    key="product",
    prefix="/products",
    payload_schema=ProductPayload,
    response_schema=ProductResponse,
)

reviews_router = build_crud_router(
    key="review",
    prefix="/reviews",
    payload_schema=ReviewPayload,
    response_schema=ReviewResponse,
)
