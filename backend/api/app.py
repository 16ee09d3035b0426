"""
FastAPI application factory.

Builds the app: CORS, request logging, the error normalizer and every
resource router mounted under the configured API prefix.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.database import close_client, ensure_indexes
from modules.auth.routes import router as auth_router
from modules.bootcamps.routes import router as bootcamps_router
from modules.courses.routes import router as courses_router
from modules.reviews.routes import router as reviews_router
from modules.users.routes import router as users_router

from .errors import register_exception_handlers
from .middleware.logging import RequestLoggingMiddleware
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ensure MongoDB indexes on startup and close the client on shutdown.

    Index creation is skipped when no MONGO_URI is configured.
    """
    # Startup
    settings = get_settings()
    logger.info(
        "Starting %s in %s mode on %s:%s",
        settings.app_name,
        settings.environment,
        settings.host,
        settings.port,
    )
    if settings.mongo_uri:
        await ensure_indexes()
    yield
    # Shutdown
    await close_client()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Directory of coding bootcamps, their courses and reviews",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    # Register routes
    prefix = settings.api_prefix
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(bootcamps_router, prefix=prefix, tags=["bootcamps"])
    app.include_router(courses_router, prefix=prefix, tags=["courses"])
    app.include_router(reviews_router, prefix=prefix, tags=["reviews"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["users"])

    return app


# Application instance for uvicorn
app = create_app()
