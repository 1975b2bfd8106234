"""
ElectroMart API

FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from .schemas import HealthResponse, MessageResponse
from .routes import ENTITY_ROUTERS, auth_router
from .middleware import (
    setup_cors,
    setup_logging,
    setup_exception_handlers,
    LoggingConfig,
    get_cors_config,
)
from .dependencies import (
    get_settings,
    init_database,
    create_tables,
    check_database,
    init_services,
    Settings,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"
WELCOME_MESSAGE = "Welcome to ElectroMart API"


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown tasks:
    - Initialize the database engine and create tables
    - Build the service container (entity specs, token service)
    """
    settings = app.state.settings
    logger.info(f"Starting ElectroMart in {settings.environment} mode")

    try:
        logger.info("Initializing database...")
        init_database(settings)
        create_tables()

        logger.info("Initializing services...")
        app.state.services = init_services(settings)

        logger.info("ElectroMart started successfully")

        yield

    finally:
        logger.info("Shutdown complete")


# =============================================================================
# Application Factory
# =============================================================================

def create_app(settings: Settings = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="ElectroMart",
        description="E-commerce catalog backend.",
        version=VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ==========================================================================
    # Middleware (order matters - first added = outermost)
    # ==========================================================================

    # 1. Logging
    setup_logging(
        app,
        config=LoggingConfig(
            enabled=True,
            log_request_body=settings.debug,
        ),
        structured=settings.environment != "development",
    )

    # 2. Exception handling
    setup_exception_handlers(app)

    # 3. CORS
    setup_cors(
        app,
        config=get_cors_config(settings.environment, settings.cors_allowed_origins),
    )

    # ==========================================================================
    # Routers
    # ==========================================================================

    app.include_router(auth_router)

    for router in ENTITY_ROUTERS:
        app.include_router(router)

    # ==========================================================================
    # Root Routes
    # ==========================================================================

    @app.get("/", response_model=MessageResponse, include_in_schema=False)
    def root():
        """Root endpoint."""
        return MessageResponse(message=WELCOME_MESSAGE)

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    def health_check() -> HealthResponse:
        """
        Health check endpoint.

        Reports whether the relational store answers a trivial query.
        """
        components = {}
        overall_healthy = True

        try:
            if check_database():
                components["database"] = "healthy"
            else:
                components["database"] = "not_initialized"
                overall_healthy = False
        except SQLAlchemyError as e:
            components["database"] = f"unhealthy: {str(e)}"
            overall_healthy = False

        return HealthResponse(
            status="healthy" if overall_healthy else "degraded",
            version=VERSION,
            components=components,
        )

    return app


# =============================================================================
# Application Instance
# =============================================================================

app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

def main():
    """Run the application using uvicorn."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "electromart.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else 4,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
