"""Storefront FastAPI application.

Usage:
    uvicorn storefront.infrastructure.api.app:create_app --factory
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ForbiddenError,
    StorageError,
    ValidationError,
)
from storefront.infrastructure.api.routes import order_router, product_router
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.logging_config import (
    bind_request_context,
    clear_request_context,
    configure_logging,
)

logger = structlog.get_logger(__name__)

_STATUS_BY_EXCEPTION: list[tuple[type[DomainException], int]] = [
    (AuthorizationError, 401),
    (ForbiddenError, 403),
    (EntityNotFoundError, 404),
    (ValidationError, 400),
    (ConflictError, 400),
]


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _register_exception_handlers(app: FastAPI) -> None:
    for exc_class, status_code in _STATUS_BY_EXCEPTION:

        async def handler(request: Request, exc: Exception, _code: int = status_code):
            return _message(_code, str(exc))

        app.add_exception_handler(exc_class, handler)

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        logger.error("Storage failure", path=request.url.path, exc_info=exc)
        return _message(500, "Internal storage error")

    @app.exception_handler(DomainException)
    async def domain_error(request: Request, exc: DomainException):
        return _message(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        return _message(400, f"Invalid request: {problems}")


def create_app(settings: Settings | None = None) -> FastAPI:
    overridden = settings is not None
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title=settings.api_title,
        description="Multi-vendor storefront orders and catalog",
    )
    if overridden:
        app.dependency_overrides[get_settings] = lambda: settings

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        clear_request_context()
        bind_request_context(
            request_id=request.headers.get("x-request-id") or uuid.uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        try:
            return await call_next(request)
        finally:
            clear_request_context()

    _register_exception_handlers(app)
    app.include_router(order_router)
    app.include_router(product_router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": "storefront"}

    return app
