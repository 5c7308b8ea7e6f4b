"""
Recipe API - FastAPI Application

A recipe catalogue with RS256 bearer-token auth, role based access control
and a creation webhook for admins.
"""
import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipe_api.config import Settings, get_settings
from recipe_api.container import Services, build_services
from recipe_api.core.logging import configure_logging
from recipe_api.database.connections import close_connections, get_database, get_redis_client
from recipe_api.database.databases.recipes_db import create_indexes
from recipe_api.errors import AppError, AuthError, ValidationError, serialize_error
from recipe_api.routers import health, recipes, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Configure logging
    - Connect MongoDB (and Redis when enabled)
    - Create indexes and build the services

    Shutdown:
    - Close the webhook client and all database connections
    """
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    logger.info("Starting up Recipe API (%s)...", settings.environment)

    owns_services = app.state.services is None
    if owns_services:
        db = await get_database(settings)
        await create_indexes(db)
        redis = await get_redis_client(settings)
        app.state.services = build_services(settings, db, redis=redis)
        logger.info("Database indexes created and services ready")

    yield

    logger.info("Shutting down Recipe API...")
    await app.state.services.close()
    if owns_services:
        await close_connections()
        logger.info("Database connections closed")


def _error_body(settings: Settings, error: AppError) -> dict:
    if settings.is_production:
        return {"status": error.status_code, "message": error.message}
    return serialize_error(error)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map application errors to JSON responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if isinstance(exc, AuthError):
            logger.warning(
                "%s %s rejected (%s): %s",
                request.method, request.url.path, exc.kind.value, exc.message,
                exc_info=exc,
            )
        else:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc.message,
                exc_info=exc,
            )
        return JSONResponse(status_code=exc.status_code, content=_error_body(settings, exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError("Invalid request body.", cause=exc)
        logger.error("%s %s invalid request: %s", request.method, request.url.path, exc.errors())
        body = _error_body(settings, error)
        if not settings.is_production:
            body["errors"] = [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()
            ]
        return JSONResponse(status_code=error.status_code, content=body)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("%s %s crashed", request.method, request.url.path, exc_info=exc)
        status_code = HTTPStatus.INTERNAL_SERVER_ERROR
        if settings.is_production:
            body = {"status": status_code.value, "message": status_code.phrase}
        else:
            body = serialize_error(exc)
        return JSONResponse(status_code=status_code.value, content=body)


def create_app(services: Optional[Services] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        services: Pre-built services (tests); built at startup when omitted
        settings: Settings override; defaults to the services' or the environment's
    """
    if settings is None:
        settings = services.settings if services is not None else get_settings()

    app = FastAPI(
        title="Recipe API",
        description="""
## Recipe Catalogue API

### Features
- **Users**: Register, login, logout and webhook registration
- **Recipes**: Create, read, replace, update and delete recipes (admin)
- **Listing**: Paginated listing with `Link` and `X-*` pagination headers
- **Search**: Case-insensitive search on title and category

### Authentication
Protected endpoints require an RS256 JWT in the Authorization header:
```
Authorization: Bearer <token>
```

Obtain a token via `POST /user/login`.
        """,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    app.include_router(health.router)
    app.include_router(users.router, prefix=settings.api_prefix)
    app.include_router(recipes.router, prefix=settings.api_prefix)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Recipe API",
            "version": "0.1.0",
            "docs": "/docs",
            "health": "/health",
            "api": settings.api_prefix,
        }

    return app


app = create_app()
