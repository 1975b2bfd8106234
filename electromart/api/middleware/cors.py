"""
CORS Configuration

Configures Cross-Origin Resource Sharing settings per environment.
"""

from typing import List, Optional
from dataclasses import dataclass, field, replace
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


@dataclass
class CORSConfig:
    """CORS configuration settings."""

    allowed_origins: List[str] = field(default_factory=list)

    allow_credentials: bool = False

    allowed_methods: List[str] = field(default_factory=lambda: [
        "GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"
    ])

    allowed_headers: List[str] = field(default_factory=lambda: [
        "Origin",
        "Content-Length",
        "Content-Type",
        "Authorization",
        "X-Request-ID",
    ])

    expose_headers: List[str] = field(default_factory=lambda: [
        "Access-Control-Allow-Origin",
        "X-Request-ID",
    ])

    # Preflight cache (seconds)
    max_age: int = 3600

    # Development only
    allow_all_origins: bool = False


CORS_CONFIGS = {
    "development": CORSConfig(allow_all_origins=True),
    "staging": CORSConfig(
        allowed_origins=["https://staging.electromart.example.com"],
        allow_credentials=True,
    ),
    "production": CORSConfig(
        allowed_origins=[
            "https://electromart.example.com",
            "https://www.electromart.example.com",
        ],
        allow_credentials=True,
        max_age=7200,
    ),
}


def get_cors_config(
    environment: Optional[str] = None,
    extra_origins: str = "",
) -> CORSConfig:
    """
    Get CORS configuration for the environment.

    Args:
        environment: Deployment environment name.
        extra_origins: Comma-separated origins appended to the preset.
    """
    preset = CORS_CONFIGS.get(environment or "development", CORS_CONFIGS["development"])

    origins = list(preset.allowed_origins)
    origins.extend(origin.strip() for origin in extra_origins.split(",") if origin.strip())

    return replace(preset, allowed_origins=origins)


def setup_cors(app: FastAPI, config: Optional[CORSConfig] = None) -> None:
    """
    Configure CORS middleware for the FastAPI application.

    Args:
        app: FastAPI application instance.
        config: CORS configuration. If None, uses the development preset.
    """
    if config is None:
        config = get_cors_config()

    if config.allow_all_origins:
        allow_origins = ["*"]
    else:
        allow_origins = config.allowed_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=config.allow_credentials if not config.allow_all_origins else False,
        allow_methods=config.allowed_methods,
        allow_headers=config.allowed_headers,
        expose_headers=config.expose_headers,
        max_age=config.max_age,
    )
