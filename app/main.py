"""ASGI application for the Open Payments demo backend."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import db
from app.config import DEV_ENVIRONMENTS, AppInfo, Settings, get_settings
from app.core.logging import setup_logging
import app.models  # noqa: F401  (enregistre les tables)
from app.routers import get_api_router
from app.utils.errors import ValidationError, error_response

logger = logging.getLogger(__name__)


def _prepare_database(settings: Settings) -> None:
    db.init_engine()
    if settings.ALLOW_DB_CREATE_ALL and settings.app_env.lower() in DEV_ENVIRONMENTS:
        logger.warning("Creating missing tables with create_all()", extra={"env": settings.app_env})
        db.create_all()
    else:
        logger.info("Schema left to Alembic migrations", extra={"env": settings.app_env})


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    if not settings.OPEN_PAYMENTS_BASE:
        logger.warning("OPEN_PAYMENTS_BASE is not set; /status only accepts absolute resource URLs")

    _prepare_database(settings)
    logger.info("Payment service started", extra={"env": settings.app_env, "port": settings.PORT})
    try:
        yield
    finally:
        db.close_engine()
        logger.info("Payment service stopped", extra={"env": settings.app_env})


def _install_observability(application: FastAPI, settings: Settings) -> None:
    if settings.PROMETHEUS_ENABLED:
        from starlette_exporter import PrometheusMiddleware, handle_metrics

        application.add_middleware(PrometheusMiddleware, app_name=AppInfo().name)
        application.add_route("/metrics", handle_metrics)

    if settings.SENTRY_DSN:
        import sentry_sdk

        sentry_sdk.init(dsn=settings.SENTRY_DSN, environment=settings.app_env, traces_sample_rate=0.2)


def _install_error_handlers(application: FastAPI) -> None:
    @application.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=error_response(str(exc)))

    @application.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(
            "Request rejected before reaching the handler",
            extra={"path": request.url.path, "errors": [error["type"] for error in exc.errors()]},
        )
        return JSONResponse(status_code=400, content=error_response("invalid request body"))

    @application.exception_handler(HTTPException)
    async def _http_error(request: Request, exc: HTTPException) -> JSONResponse:
        # Routes hand over a ready error_response() dict as the detail.
        content = exc.detail if isinstance(exc.detail, dict) else error_response(str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @application.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception", extra={"path": request.url.path}, exc_info=exc)
        return JSONResponse(status_code=500, content=error_response(str(exc)))


def create_app() -> FastAPI:
    settings = get_settings()
    info = AppInfo()

    application = FastAPI(title=info.name, version=info.version, lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    _install_observability(application, settings)
    _install_error_handlers(application)
    application.include_router(get_api_router())
    return application


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on ``PORT``."""

    import uvicorn

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, log_config=None)


__all__ = ["app", "create_app", "run"]
