"""
ElectroMart - FastAPI Backend.

REST API over the e-commerce catalog.
"""

from .main import app, create_app, main
from .dependencies import (
    Settings,
    get_settings,
    get_db,
    get_service_container,
    ServiceContainer,
)
from .schemas import (
    ErrorResponse,
    HealthResponse,
    LoginRequest,
    TokenResponse,
)

__all__ = [
    # Application
    "app",
    "create_app",
    "main",
    # Dependencies
    "Settings",
    "get_settings",
    "get_db",
    "get_service_container",
    "ServiceContainer",
    # Schemas
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "TokenResponse",
]
