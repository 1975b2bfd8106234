"""
User API Routes

CRUD and search for user accounts. Passwords are hashed on the way in
and never serialized on the way out.
"""

from electromart.api.routes.crud import build_crud_router
from electromart.api.schemas import UserPayload, UserResponse


router = build_crud_router(
    key="user",
    prefix="/users",
    payload_schema=UserPayload,
    response_schema=UserResponse,
)
