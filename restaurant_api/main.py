"""
Restaurant API - FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, exception handlers, route
       mounting and the store gateway in one place.
How:   create_app() returns a configured FastAPI instance; run() serves it
       with uvicorn on the configured port.
Who:   uvicorn (`uvicorn restaurant_api.main:app`) or the `restaurant-api` script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────────────────┐ │
    │  │  Req ID  │→│  Logging    │→│  CORS            │ │
    │  └──────────┘ └─────────────┘ └──────────────────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────┐ ┌──────────────┐ ┌───────────────────┐ │
    │  │ GET /  │ │ /restaurant* │ │ GET /health       │ │
    │  └────────┘ └──────────────┘ └───────────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ ValidationError→400 │ NotFound→404 │ DB→500  │  │
    │  └──────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from restaurant_api import __version__
from restaurant_api.config import Settings, settings
from restaurant_api.database import RestaurantStore
from restaurant_api.exceptions import (
    DatabaseError,
    NotFoundError,
    RestaurantAPIError,
    ValidationError,
)
from restaurant_api.middleware.logging import RequestLoggingMiddleware
from restaurant_api.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from restaurant_api.routes import health, restaurants, root
from restaurant_api.services.validation import violations_from_request_errors

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    Called once during startup, before anything else logs. The handler's
    RequestIDLogFilter fills %(request_id)s for every logger, so service
    and driver errors carry the ID of the request that raised them.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # RequestLoggingMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup and shutdown logging.

    There is nothing to dispose on shutdown: store connections never outlive
    the request that opened them.
    """
    config: Settings = app.state.settings
    setup_logging(config.log_level)
    logger.info("Restaurant API starting up...")
    store: RestaurantStore = app.state.store
    logger.info("Document store collection: %s", store.collection_name)
    logger.info("Server is running on port %d.", config.port)

    yield

    logger.info("Restaurant API shut down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        ValidationError         → 400 (every violated rule listed)
        RequestValidationError  → 400 (body was not a JSON object)
        NotFoundError           → 404
        DatabaseError           → 500 (generic message; cause logged)
        RestaurantAPIError      → 500
        Exception (fallback)    → 500

    Handlers NEVER expose driver messages or stack traces in the body.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("Validation error: %s %s", exc.message, exc.context)
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder({
                "error": "validation_error",
                "message": exc.message,
                "errors": exc.errors,
                "request_id": rid,
            }),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        violations = violations_from_request_errors(exc.errors())
        logger.warning("Malformed request: %d violation(s)", len(violations))
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder({
                "error": "validation_error",
                "message": "Validation failed",
                "errors": violations,
                "request_id": rid,
            }),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "Internal server error",
                "request_id": rid,
            },
        )

    @app.exception_handler(RestaurantAPIError)
    async def handle_app_error(request: Request, exc: RestaurantAPIError):
        rid = request_id_var.get("")
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "Internal server error",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, a generic 500 to the client."""
        rid = request_id_var.get("")
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "Internal server error",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to build the store gateway from; defaults to the
                module-level singleton. Tests pass their own.
    """
    config = config or settings

    app = FastAPI(
        title="Restaurant API",
        description="CRUD service for the restaurants collection of the food delivery app.",
        version=__version__,
        lifespan=lifespan,
    )

    # The gateway gets its connection target here, once
    app.state.settings = config
    app.state.store = RestaurantStore(config)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(restaurants.router)

    return app


# uvicorn expects `restaurant_api.main:app` to be importable
app = create_app()


def run() -> None:
    """Serve the module-level app on settings.host:settings.port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
