"""
Main FastAPI application bootstrap.
Wires the handler container, configures middleware and includes routers.
"""
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pricing_calculator.api.pricing import router as pricing_router
from pricing_calculator.api.static import register_spa
from pricing_calculator.core.config import Config, config
from pricing_calculator.core.container import Container, build_container
from pricing_calculator.middleware.request_logging import RequestLoggingMiddleware


logger = logging.getLogger(__name__)


def create_app(
    app_config: Optional[Config] = None,
    container: Optional[Container] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        app_config: Configuration (defaults to the environment-loaded config)
        container: Pre-wired handlers, e.g. with test doubles

    Raises:
        RuntimeError: If the configuration is invalid
    """
    app_config = app_config or config
    try:
        app_config.validate()
    except ValueError as error:
        # Fail fast with a clear message
        raise RuntimeError(f"Configuration error: {error}") from error

    app = FastAPI(
        title="Pricing Calculator",
        description="Monthly hosting cost estimation for Clever Cloud runtimes and addons",
    )
    app.state.config = app_config
    app.state.container = container or build_container(app_config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.CORS_ALLOWED_ORIGINS,
        allow_methods=app_config.CORS_ALLOWED_METHODS,
        allow_headers=app_config.CORS_ALLOWED_HEADERS,
        max_age=86400,
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(pricing_router)

    @app.get("/api/health")
    async def health() -> dict:
        return {"status": "ok"}

    # Catch-all SPA route goes last so API routes win
    register_spa(app, Path(app_config.STATIC_DIR))

    logger.info("Pricing calculator configured for %s (catalog: %s)",
                app_config.APP_ENV, app_config.CLEVER_CLOUD_API_URL)
    return app
