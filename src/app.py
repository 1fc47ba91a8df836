"""Storefront FastAPI application.

Wires the routers of every bounded context into a single web server. Each
request runs inside the storefront domain context, so handlers reach
repositories through ``current_domain``.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay of ``domain.toml`` is applied:
#   - "test"       → the throwaway test database
#   - "production" → PostgreSQL, unless DATABASE_URL says otherwise
from shared.domain import init_domain, storefront  # noqa: E402

init_domain()

import time  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from uuid import uuid4  # noqa: E402

import pydantic  # noqa: E402
from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError  # noqa: E402

from identity.user.registration import ensure_admin  # noqa: E402
from shared.config import get_settings  # noqa: E402
from shared.database import setup_db  # noqa: E402
from shared.errors import (  # noqa: E402
    AuthenticationError,
    AuthorizationError,
    DeliveryFailedError,
    first_message,
)
from shared.logging import add_context, clear_context, get_logger  # noqa: E402

logger = get_logger(__name__)


def _field_errors(errors) -> dict:
    """Collapse pydantic error entries into ``{field: [messages]}``."""
    collapsed: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        collapsed.setdefault(".".join(loc) or "body", []).append(error.get("msg", "Invalid value"))
    return collapsed


def _error_response(status_code: int, errors) -> JSONResponse:
    if not isinstance(errors, dict):
        errors = {"_entity": [str(errors)]}
    return JSONResponse(status_code=status_code, content={"message": first_message(errors), "errors": errors})


# Most specific first; the first matching family decides the status code
_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ObjectNotFoundError, 404),
    (ValidationError, 400),
    (InvalidOperationError, 409),
    (DeliveryFailedError, 502),
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    if settings.auto_create_schema:
        setup_db(storefront)
        logger.info("schema_ensured")
    if settings.admin_email and settings.admin_password:
        with storefront.domain_context():
            ensure_admin(settings.admin_email, settings.admin_password)
        logger.info("admin_ensured", email=settings.admin_email)
    yield


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Storefront API",
        description="Wholesale storefront: identity, catalogue, cart, orders and reviews",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        with storefront.domain_context():
            response = await call_next(request)
        return response

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a request id to every log line emitted while serving the request."""
        clear_context()
        request_id = request.headers.get("x-request-id") or uuid4().hex
        add_context(request_id=request_id, method=request.method, path=request.url.path)
        started = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["x-request-id"] = request_id
            return response
        finally:
            logger.info(
                "request_completed",
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

    def _domain_error_handler(error_cls, status_code):
        async def handler(_request: Request, exc):
            if status_code >= 500:
                logger.error("request_failed", error=first_message(exc.messages), exc_info=exc)
            return _error_response(status_code, exc.messages)

        app.add_exception_handler(error_cls, handler)

    for error_cls, status_code in _STATUS_BY_ERROR:
        _domain_error_handler(error_cls, status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_request: Request, exc: RequestValidationError):
        return _error_response(400, _field_errors(exc.errors()))

    @app.exception_handler(pydantic.ValidationError)
    async def schema_validation_handler(_request: Request, exc: pydantic.ValidationError):
        return _error_response(400, _field_errors(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(_request: Request, exc: Exception):
        logger.error("request_failed", error=str(exc), exc_info=exc)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    from catalogue.api import banner_router, category_router, product_router
    from identity.api.routes import auth_router, users_router
    from notifications.api import inquiry_router
    from ordering.api import cart_router, order_router, watchlist_router
    from reviews.api.routes import review_router

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(category_router)
    app.include_router(product_router)
    app.include_router(banner_router)
    app.include_router(cart_router)
    app.include_router(watchlist_router)
    app.include_router(order_router)
    app.include_router(review_router)
    app.include_router(inquiry_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "env": settings.env, "domain": storefront.name})

    return app


app = create_app()
