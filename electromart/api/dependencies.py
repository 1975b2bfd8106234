"""
Dependency injection for FastAPI routes.

Provides injectable dependencies for:
- Configuration
- Database sessions (one per request)
- Entity specs, repositories and the token service
"""

import os
from functools import lru_cache
from dataclasses import dataclass
from typing import Callable, Generator, Optional

from fastapi import Depends
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from electromart.validation import (
    DEFAULT_STATUSES,
    DEFAULT_PAYMENT_METHODS,
    DEFAULT_ROLES,
    Vocabulary,
)


# =============================================================================
# Configuration
# =============================================================================

def _split(value: Optional[str], default: tuple[str, ...]) -> tuple[str, ...]:
    """Parse a comma-separated environment value into a tuple."""
    if not value:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class Settings:
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./electromart.db"
    database_echo: bool = False

    # Tokens
    secret_key: str = "secret"
    jwt_algorithm: str = "HS256"
    token_expire_hours: int = 72

    # Literal vocabularies
    order_statuses: tuple[str, ...] = DEFAULT_STATUSES
    payment_statuses: tuple[str, ...] = DEFAULT_STATUSES
    shipping_statuses: tuple[str, ...] = DEFAULT_STATUSES
    payment_methods: tuple[str, ...] = DEFAULT_PAYMENT_METHODS
    user_roles: tuple[str, ...] = DEFAULT_ROLES

    # Validation
    collect_all_errors: bool = False

    # Server
    port: int = 8080
    cors_allowed_origins: str = ""

    # Environment
    environment: str = "development"
    debug: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            database_echo=_flag("DATABASE_ECHO", "false"),
            secret_key=os.getenv("SECRET_KEY", cls.secret_key),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", cls.jwt_algorithm),
            token_expire_hours=int(os.getenv("TOKEN_EXPIRE_HOURS", cls.token_expire_hours)),
            order_statuses=_split(os.getenv("ORDER_STATUSES"), cls.order_statuses),
            payment_statuses=_split(os.getenv("PAYMENT_STATUSES"), cls.payment_statuses),
            shipping_statuses=_split(os.getenv("SHIPPING_STATUSES"), cls.shipping_statuses),
            payment_methods=_split(os.getenv("PAYMENT_METHODS"), cls.payment_methods),
            user_roles=_split(os.getenv("USER_ROLES"), cls.user_roles),
            collect_all_errors=_flag("COLLECT_ALL_ERRORS", "false"),
            port=int(os.getenv("PORT", cls.port)),
            cors_allowed_origins=os.getenv("CORS_ALLOWED_ORIGINS", cls.cors_allowed_origins),
            environment=os.getenv("ELECTROMART_ENV", cls.environment),
            debug=_flag("DEBUG", "true"),
        )

    def vocabulary(self) -> Vocabulary:
        """Literal sets for the enumerated fields."""
        return Vocabulary(
            order_statuses=self.order_statuses,
            payment_statuses=self.payment_statuses,
            shipping_statuses=self.shipping_statuses,
            payment_methods=self.payment_methods,
            user_roles=self.user_roles,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings.from_env()


# =============================================================================
# Database
# =============================================================================

# Global engine and session factory (initialized in lifespan)
_engine = None
_session_factory = None


def init_database(settings: Settings) -> None:
    """Initialize database engine and session factory."""
    global _engine, _session_factory

    url = settings.database_url
    engine_kwargs = {}

    if url.startswith("sqlite"):
        # Requests run in the threadpool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool

    _engine = create_engine(
        url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        **engine_kwargs,
    )

    _session_factory = sessionmaker(
        bind=_engine,
        expire_on_commit=False,
    )


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Yields:
        Session for database operations.
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_database first.")

    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create database tables."""
    from ..storage.models import Base
    if _engine is None:
        raise RuntimeError("Database not initialized.")

    Base.metadata.create_all(_engine)


def check_database() -> bool:
    """Run a trivial query to confirm the store is reachable."""
    if _engine is None:
        return False

    with _engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return True


# =============================================================================
# Service Dependencies (Lazy Loading)
# =============================================================================

class ServiceContainer:
    """
    Container for lazy-loaded service instances.

    Services are initialized on first access and shared across requests.
    Sessions are not: repositories are built per request around one.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._entity_specs = None
        self._token_service = None

    @property
    def entity_specs(self):
        """Get the entity spec registry."""
        if self._entity_specs is None:
            from ..security import get_password_hash
            from ..storage.specs import build_entity_specs
            self._entity_specs = build_entity_specs(
                vocabulary=self.settings.vocabulary(),
                hash_password=get_password_hash,
            )
        return self._entity_specs

    @property
    def token_service(self):
        """Get token service instance."""
        if self._token_service is None:
            from ..security import TokenService
            self._token_service = TokenService(
                secret_key=self.settings.secret_key,
                algorithm=self.settings.jwt_algorithm,
                expire_hours=self.settings.token_expire_hours,
            )
        return self._token_service

    def repository(self, key: str, session: Session):
        """Build a repository for one entity around a request session."""
        from ..storage.repository import EntityRepository
        return EntityRepository(
            session,
            self.entity_specs[key],
            collect_all_errors=self.settings.collect_all_errors,
        )


# Global service container
_service_container: Optional[ServiceContainer] = None


def init_services(settings: Settings) -> ServiceContainer:
    """Initialize service container."""
    global _service_container
    _service_container = ServiceContainer(settings)
    return _service_container


def get_service_container() -> ServiceContainer:
    """Get service container instance."""
    if _service_container is None:
        # Auto-initialize with default settings if not explicitly initialized
        return init_services(get_settings())
    return _service_container


# =============================================================================
# Individual Service Dependencies
# =============================================================================

def get_token_service(
    container: ServiceContainer = Depends(get_service_container),
):
    """Dependency for token service."""
    return container.token_service


def repository_dependency(key: str) -> Callable:
    """
    Build a dependency that yields the repository for one entity.

    Args:
        key: Entity spec key (e.g. "product")
    """

    def get_repository(
        db: Session = Depends(get_db),
        container: ServiceContainer = Depends(get_service_container),
    ):
        return container.repository(key, db)

    get_repository.__name__ = f"get_{key}_repository"
    return get_repository
