"""FastAPI application factory.

create_app() returns a configured FastAPI instance. Lifespan handles
startup/shutdown; middleware, CORS, exception handlers and routers are
all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from immy import __version__
from immy.api import api_router
from immy.api.handlers import register_exception_handlers
from immy.config import settings
from immy.log_config import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "immy.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from immy.db.engine import engine

    if settings.auto_create_schema:
        from immy.db.models import Base

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("immy.schema_created")

    yield

    logger.info("immy.shutdown")
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="Immy API",
        description="Accounts, profiles and coach data for the Immy parenting app",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler

    from immy.middleware.request_id import RequestIdMiddleware
    from immy.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: immy.main:app)
app = create_app()
