"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: log configuration, check the database is reachable
   - shutdown: dispose of the connection pool

3. Middleware Stack
   - Sessions: a signed cookie that carries flash messages across a
     redirect (Starlette SessionMiddleware, signed with itsdangerous)

4. Exception Handlers
   - Convert domain and database errors to HTML error pages
   - Log errors for debugging
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from catalog.config import get_settings
from catalog.database import SessionLocal, engine
from catalog.exceptions import DomainConstraintError, NotFoundError
from catalog.routers import authors_router, books_router, categories_router
from catalog.templating import templates
from catalog.utils.messages import Message, consume_flash

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def database_is_healthy() -> bool:
    """Run SELECT 1 on a fresh session; any database error counts as unhealthy."""
    try:
        with SessionLocal() as session:
            session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as exc:
        logger.warning(f"Database health check failed: {exc}")
        return False


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name} {settings.app_version}...")
    logger.info(f"Environment: {settings.environment}, debug mode: {settings.debug}")

    if not database_is_healthy():
        logger.warning("Database unreachable at startup - pages will fail until it is up")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


def error_page(request: Request, status_code: int, title: str, detail: str):
    """
    Render the shared error template.

    An error page is the render that follows a redirect too, so a pending
    flash is consumed and shown next to the error. The catch-all handler
    runs outside the session middleware and has no session to read.
    """
    message = Message(error=detail)
    if "session" in request.scope:
        message = consume_flash(request).model_copy(update={"error": detail})
    return templates.TemplateResponse(
        request,
        "errors/error.html",
        {"status_code": status_code, "title": title, "message": message},
        status_code=status_code,
    )


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Library Catalog

Server-rendered pages for managing a library catalog.

### Features
- **Books**: Full CRUD, each book linked to its authors and categories
- **Authors**: Manage authors and browse their books
- **Categories**: Manage categories and the books filed under them
        """,
        version=settings.app_version,
        lifespan=lifespan,
        # OpenAPI docs only in debug mode
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
    )

    # -------------------------------------------------------------------------
    # Session Middleware
    # -------------------------------------------------------------------------
    # Flash messages live in the session between a POST and the page it
    # redirects to. The cookie is signed, not encrypted: keep it to UI text.
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie,
        same_site="lax",
        https_only=settings.is_production,
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        """Unknown ids on any page render a 404 page."""
        logger.info(f"Not found: {exc}")
        return error_page(request, 404, "Not Found", str(exc))

    @app.exception_handler(DomainConstraintError)
    async def domain_constraint_handler(request: Request, exc: DomainConstraintError):
        """Association rule violations no router recovered from."""
        logger.warning(f"Domain constraint violated: {exc}")
        return error_page(request, 400, "Bad Request", str(exc))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return error_page(
            request, 500, "Server Error", "A database error occurred. Please try again later."
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        detail = str(exc) if settings.debug else "An internal error occurred."
        return error_page(request, 500, "Server Error", detail)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router)
    app.include_router(authors_router)
    app.include_router(categories_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the application and its database are reachable.",
    )
    def health_check() -> dict:
        """
        Health check endpoint.

        Used by load balancers, container probes and monitoring systems.
        """
        database_ok = database_is_healthy()
        return {
            "status": "healthy" if database_ok else "degraded",
            "app": settings.app_name,
            "version": settings.app_version,
            "database": database_ok,
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn catalog.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m catalog.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,  # Auto-reload on code changes
    )
