"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from decision_table import __version__
from decision_table.api.routes import compute, health
from decision_table.api.routes import help as help_routes
from decision_table.api.routes import metrics as metrics_routes
from decision_table.core.config import get_settings
from decision_table.core.errors import install_exception_handlers
from decision_table.core.logging_config import LoggingConfig
from decision_table.core.metrics import record_app_info
from decision_table.core.middleware import LoggingContextMiddleware
from decision_table.core.middleware_metrics import MetricsMiddleware

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


def create_app() -> FastAPI:
    """Build the application from the current settings"""
    settings = get_settings()
    application = FastAPI(
        title=settings.app_name,
        description="Decision table evaluation service",
        version=__version__,
        lifespan=lifespan,
    )

    # Metrics middleware runs inside the logging context middleware
    if settings.enable_metrics:
        application.add_middleware(MetricsMiddleware)
    application.add_middleware(LoggingContextMiddleware)

    install_exception_handlers(application)

    application.include_router(compute.router)
    application.include_router(help_routes.router)
    application.include_router(health.router)
    if settings.enable_metrics:
        record_app_info(settings.app_name, settings.app_env, __version__)
        application.include_router(metrics_routes.router)

    return application


app = create_app()
