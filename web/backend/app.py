#!/usr/bin/env python3
"""
SmartScreen Web API - FastAPI Application

Applicant screening API with automatic documentation.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException

from core.app_context import AppContext
from core.config_loader import AppConfig
from core.exceptions import ScreeningError

from .config import get_config
from .exceptions import (
    screening_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import (
    auth_router,
    jobs_router,
    candidates_router,
    dashboard_router,
    settings_router,
    assistant_router,
    resume_builder_router,
)
from .routers.jobs import add_rate_limit_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        context: Pre-built application context (tests). When omitted the
            context is built from config.yaml at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "context", None) is None:
            app.state.context = AppContext.build(get_config())
            logger.info("Application context built")
        yield

    app = FastAPI(
        title="SmartScreen API",
        description="AI-assisted applicant screening: requisitions, candidate scoring, pipelines and reports",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.context = context

    # Configure rate limiting
    add_rate_limit_handlers(app)

    # Register exception handlers
    app.add_exception_handler(ScreeningError, screening_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(auth_router)
    app.include_router(jobs_router)
    app.include_router(candidates_router)
    app.include_router(dashboard_router)
    app.include_router(settings_router)
    app.include_router(assistant_router)
    app.include_router(resume_builder_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "smartscreen-web"}

    return app


app = create_app()


def main(config: Optional[AppConfig] = None):
    """Run the web server.

    Args:
        config: Configuration to serve with; defaults to the project config.yaml.
    """
    import uvicorn

    target = "web.backend.app:app"
    if config is None:
        config = get_config()
    else:
        target = create_app(AppContext.build(config))
    logger.info(f"Starting SmartScreen Web Server on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        target,
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
