"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Schema creation on startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from cryptofund.core.config import settings
from cryptofund.infrastructure.database import create_tables
from cryptofund.interfaces.admin.router import router as admin_router
from cryptofund.interfaces.advisor.router import router as advisor_router
from cryptofund.interfaces.dependencies import get_engine
from cryptofund.interfaces.funding.router import router as funding_router
from cryptofund.interfaces.health import router as health_router
from cryptofund.shared.errors.handlers import register_error_handlers
from cryptofund.shared.logging import configure_logging
from cryptofund.shared.security.headers import SecurityHeadersMiddleware
from cryptofund.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: make sure the schema exists before serving."""
    engine_provider = app.dependency_overrides.get(get_engine, get_engine)
    create_tables(engine_provider())
    logger.info("Database schema ready")
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(advisor_router, prefix="/api/v1")
    app.include_router(funding_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    return app


app = create_app()
