"""Bookstore API: FastAPI entry point.

Registers middleware, routers, exception handlers and lifecycle hooks.
Startup runs connect → seed, then uvicorn binds and listens.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.middleware import RequestLoggingMiddleware
from core.database import DatabaseNotInitialized, close_db, connect_db
from core.lifecycle import StartupLifecycle
from patterns.domain_config import BookstoreConfig, SeedMode
from verticals.bookstore.config import config as default_config
from verticals.bookstore.router import router as bookstore_router
from verticals.bookstore.seed import seed_database

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

async def run_startup(app: FastAPI) -> None:
    """Connect, then seed. Failures are recorded, never raised."""
    config: BookstoreConfig = app.state.config
    lifecycle: StartupLifecycle = app.state.lifecycle

    connection = await connect_db(config.database)
    app.state.connection = connection
    app.state.database = connection.database
    if connection.verified:
        lifecycle.mark_ok("connect")
    else:
        lifecycle.mark_failed("connect", connection.error or "unknown error")

    if config.seed_mode is SeedMode.OFF:
        lifecycle.mark_skipped("seed", "seeding disabled")
    elif not connection.verified:
        lifecycle.mark_skipped("seed", "no database connection")
    else:
        try:
            await seed_database(connection.database, config.seed_mode)
        except PyMongoError as exc:
            logger.error("Error seeding database: %s", exc)
            lifecycle.mark_failed("seed", str(exc))
        else:
            lifecycle.mark_ok("seed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    await run_startup(app)
    logger.info("Bookstore API started (healthy=%s)", app.state.lifecycle.healthy)
    yield
    logger.info("Bookstore API shutting down")
    await close_db(app.state.connection)


# ---------------------------------------------------------------------------
# Exception handlers, every error body is {"message": ...}
# ---------------------------------------------------------------------------

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"message": str(exc.detail)}, status_code=exc.status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )
    return JSONResponse(
        {"message": f"Validation failed: {details or 'invalid request body'}"},
        status_code=400,
    )


async def database_unavailable_handler(request: Request, exc: DatabaseNotInitialized):
    return JSONResponse({"message": str(exc)}, status_code=500)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

def create_app(config: BookstoreConfig | None = None) -> FastAPI:
    """Build the application for ``config`` (environment-derived by default)."""
    config = config or default_config
    configure_logging(config.server.log_level)

    app = FastAPI(
        title="Bookstore",
        description="Bookstore inventory and order service backed by MongoDB",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.lifecycle = StartupLifecycle(stages=["connect", "seed"])

    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DatabaseNotInitialized, database_unavailable_handler)

    app.include_router(bookstore_router, tags=["Bookstore"])

    # -----------------------------------------------------------------------
    # Health & root
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health(request: Request):
        lifecycle: StartupLifecycle = request.app.state.lifecycle
        body = {
            "status": "healthy" if lifecycle.healthy else "degraded",
            "version": VERSION,
            "stages": lifecycle.to_dict(),
        }
        return JSONResponse(body, status_code=200 if lifecycle.healthy else 503)

    @app.get("/")
    async def root():
        return {
            "name": "Bookstore",
            "version": VERSION,
            "docs": "/docs",
            "resources": ["books", "customers", "orders"],
        }

    return app


app = create_app()


def run() -> None:
    """Serve ``app`` on the configured host and port (3000 by default)."""
    server = app.state.config.server
    logger.info("Server is running on port %d", server.port)
    uvicorn.run(app, host=server.host, port=server.port, log_level=server.log_level.lower())


if __name__ == "__main__":
    run()
