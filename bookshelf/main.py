"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() builds a configured app from a Settings object
   - The PasswordHasher and TokenService are built here, once, and stored
     on app.state for the request dependencies to use

2. Lifespan Events
   - startup/shutdown logging

3. Exception Handlers
   - Every failure is returned as {"success": false, "message": "..."}
   - Internal error details are logged, never sent to the client
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.config import Settings, get_settings
from bookshelf.database import ping
from bookshelf.dependencies import DbSession
from bookshelf.exceptions import BookshelfError
from bookshelf.routers import auth_router, books_router, reviews_router, users_router
from bookshelf.services.rate_limiter import limiter, rate_limit_exceeded_handler
from bookshelf.services.security import PasswordHasher, TokenService

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def failure(status_code: int, message: str) -> JSONResponse:
    """Build the standard failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def first_validation_message(exc: RequestValidationError) -> str:
    """
    Pick a readable message from the first request validation error.

    Messages raised by our own validators are used verbatim; Pydantic's
    built-in ones get the field name prepended.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    raised = error.get("ctx", {}).get("error")
    if isinstance(raised, ValueError):
        return str(raised)

    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ----- STARTUP -----
    logger.info(f"Starting {app.title}...")
    logger.info(f"Environment: {app.state.settings.environment}")
    logger.info(f"Token lifetime: {app.state.token_service.expires_in}")

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {app.title}...")


# =============================================================================
# Application Factory
# =============================================================================
def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the app from; defaults to the
            cached settings read from the environment

    Returns:
        Configured FastAPI application instance
    """
    app_settings = app_settings or get_settings()

    app = FastAPI(
        title=app_settings.app_name,
        description="""
## BookShelf API

Backend for a social book-review platform.

### Features
- **Auth**: Register, login, bearer tokens
- **Books**: Community-contributed catalog
- **Reviews**: Ratings, likes and comments

### Authentication
Send `Authorization: Bearer <token>` with the token from register or login.
        """,
        version="1.0.0",
        # Interactive docs are not published in production
        docs_url=None if app_settings.is_production else "/docs",
        redoc_url=None if app_settings.is_production else "/redoc",
        openapi_url=None if app_settings.is_production else "/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Shared Services
    # -------------------------------------------------------------------------
    app.state.settings = app_settings
    app.state.password_hasher = PasswordHasher(rounds=app_settings.bcrypt_rounds)
    app.state.token_service = TokenService.from_settings(app_settings)

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(BookshelfError)
    async def bookshelf_exception_handler(
        request: Request,
        exc: BookshelfError,
    ) -> JSONResponse:
        return failure(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed bodies and query parameters are a 400, not a 422."""
        return failure(status.HTTP_400_BAD_REQUEST, first_validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        return failure(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Database errors, including unique-constraint violations from a
        registration that lost a race with an identical one.
        """
        logger.error(f"Database error: {exc}", exc_info=True)
        return failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "A database error occurred. Please try again later.",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    api_prefix = "/api"

    app.include_router(auth_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(books_router, prefix=api_prefix)
    app.include_router(reviews_router, prefix=api_prefix)

    # -------------------------------------------------------------------------
    # Health Check / Root
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
    )
    def health_check(db: DbSession) -> dict:
        """Report whether the API and its database are reachable."""
        try:
            database_ok = ping(db)
        except SQLAlchemyError as e:
            logger.warning(f"Health check: database unreachable ({e})")
            database_ok = False

        return {
            "status": "healthy" if database_ok else "degraded",
            "app": app_settings.app_name,
            "database": database_ok,
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
    )
    def root() -> dict:
        return {
            "message": f"{app_settings.app_name} is running",
            "docs": app.docs_url,
            "health": "/health",
        }

    return app


# This is what uvicorn imports: uvicorn bookshelf.main:app
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
