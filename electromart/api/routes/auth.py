"""
Authentication API Routes for ElectroMart.

Handles:
- User login (token issuance)
- A token-protected greeting route
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from electromart.api.dependencies import get_token_service, repository_dependency
from electromart.api.middleware import (
    AuthenticationError,
    ElectroMartException,
    StoreError,
)
from electromart.api.schemas import (
    ErrorResponse,
    LoginRequest,
    ProtectedResponse,
    TokenResponse,
)
from electromart.security import TokenError, TokenService, verify_password
from electromart.storage import EntityRepository


router = APIRouter(tags=["auth"])

get_user_repository = repository_dependency("user")

BEARER_PREFIX = "BEARER "


def get_current_username(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """
    Dependency to resolve the username carried by a bearer token.

    The "Bearer " prefix is optional.
    """
    token = (authorization or "").strip()
    if token[:len(BEARER_PREFIX)].upper() == BEARER_PREFIX:
        token = token[len(BEARER_PREFIX):].strip()

    if not token:
        raise AuthenticationError("Invalid token", detail="missing token")

    try:
        claims = tokens.decode_access_token(token)
    except TokenError as e:
        raise AuthenticationError("Invalid token", detail=str(e))

    username = claims.get("username")
    if not isinstance(username, str) or not username:
        raise AuthenticationError("Invalid token", detail="token carries no username")

    return username


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Bad credentials"},
        500: {"model": ErrorResponse, "description": "Token could not be issued"},
    },
)
def login(
    credentials: LoginRequest,
    users: EntityRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Login endpoint.
    Returns a signed token if the credentials are valid.
    """
    try:
        user = users.first_by(username=credentials.username)
    except SQLAlchemyError as e:
        logger.error(f"Failed to look up user for login: {e}")
        raise StoreError("server error")

    if user is None:
        raise AuthenticationError("authentication failed", detail="user not found")

    if not verify_password(credentials.password, user.password):
        raise AuthenticationError("authentication failed", detail="incorrect password")

    try:
        token = tokens.create_access_token(user.username, user.role)
    except TokenError as e:
        logger.error(f"Failed to issue token for {user.username}: {e}")
        raise ElectroMartException("could not generate token")

    logger.info(f"Issued token for {user.username}")
    return TokenResponse(token=token)


@router.get(
    "/protected",
    response_model=ProtectedResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
def protected(username: str = Depends(get_current_username)):
    """Greet the holder of a valid token."""
    return ProtectedResponse(
        username=username,
        message="Welcome to the protected route!",
    )
