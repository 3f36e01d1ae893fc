"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wedplan.api.routers import budget, categories, costs, payments
from wedplan.config import Settings, get_settings
from wedplan.database.base import Database
from wedplan.database.factories import create_configured_database
from wedplan.domain.errors import (
    CategoryInUseError,
    ConflictError,
    DomainError,
    ExceedsRemainingError,
    NotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        if isinstance(exc, ExceedsRemainingError):
            return _error(400, str(exc), remaining=float(exc.remaining))
        return _error(400, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        if isinstance(exc, CategoryInUseError):
            return _error(409, str(exc), count=exc.count)
        return _error(409, str(exc))

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "Database error, the operation was not applied")

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return _error(400, str(exc))


def create_app(db: Optional[Database] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API application.

    Args:
        db: Database to serve; defaults to the configured database
        settings: Settings; defaults to the process-wide settings
    """
    settings = settings or get_settings()
    if db is None:
        db = create_configured_database(settings=settings)
        db.connect()
        db.initialize_schema()

    app = FastAPI(title=settings.PROJECT_NAME)
    app.state.db = db
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(costs.router, prefix="/costs", tags=["costs"])
    app.include_router(payments.router, prefix="/payments", tags=["payments"])
    app.include_router(categories.router, prefix="/categories", tags=["categories"])
    app.include_router(budget.router, prefix="/budget", tags=["budget"])
    return app
