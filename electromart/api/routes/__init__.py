"""
API Routes for ElectroMart

Route modules:
- users: User accounts
- catalog: Brands, categories, products and reviews
- orders: Orders, order items, payments and shipping details
- auth: Login and the token-protected route
"""

from electromart.api.routes.users import router as users_router
from electromart.api.routes.catalog import (
    brands_router,
    categories_router,
    products_router,
    reviews_router,
)
from electromart.api.routes.orders import (
    orders_router,
    order_items_router,
    payments_router,
    shipping_details_router,
)
from electromart.api.routes.auth import router as auth_router

# Registration order for the application
ENTITY_ROUTERS = [
    users_router,
    brands_router,
    categories_router,
    products_router,
    orders_router,
    order_items_router,
    payments_router,
    shipping_details_router,
    reviews_router,
]

__all__ = [
    "users_router",
    "brands_router",
    "categories_router",
    "products_router",
    "reviews_router",
    "orders_router",
    "order_items_router",
    "payments_router",
    "shipping_details_router",
    "auth_router",
    "ENTITY_ROUTERS",
]
