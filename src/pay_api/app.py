"""Main FastAPI application module."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from pay_api import __version__
from pay_api.api import api_router
from pay_api.api.health import router as health_router
from pay_api.database import dispose_db
from pay_api.exception_handlers import register_exception_handlers
from pay_api.logging import setup_logging, setup_sqlalchemy_logging
from pay_api.settings import Settings, get_settings


def _log_server_endpoints_summary(settings: Settings) -> None:
    """Log the server URL and the endpoints it serves.

    Args:
        settings: Application settings containing host and port
    """
    server_url = f"http://{settings.host}:{settings.port}"
    logger.info(f"Server running at: {server_url}")

    endpoints = [
        ("Health Check", "/health"),
        ("Pay Transaction", "/api/patients/pay-transaction"),
        ("OpenAPI Schema", "/openapi.json"),
        ("API Docs", "/docs"),
    ]

    logger.info("Available endpoints:")
    for name, path in endpoints:
        logger.info(f"   {name}: {server_url}{path}")


@asynccontextmanager
async def app_lifespan(_app: FastAPI):
    """Handle startup and shutdown events for the main application."""
    settings = get_settings()
    _app.state.settings = settings  # type: ignore[attr-defined]

    setup_logging(log_level=settings.log_level, json_logs=settings.log_json)
    setup_sqlalchemy_logging()

    logger.info("Pay API starting up")
    _log_server_endpoints_summary(settings)

    yield

    logger.info("Pay API shutting down")
    dispose_db()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to configure middleware from; defaults to the global settings

    Returns:
        The configured application
    """
    settings = settings or get_settings()

    application = FastAPI(
        lifespan=app_lifespan,
        title="Patient pay API",
        description="Records pay transactions for patients after validating age and record type",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)

    application.include_router(health_router, prefix="")
    application.include_router(api_router, prefix="/api")

    return application


app = create_app()
