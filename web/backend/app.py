#!/usr/bin/env python3
"""
ATS Scoring Service - FastAPI Application

Scores candidate assessments, advances applications through the pipeline,
and ingests webhooks from integrated systems and the email provider.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from core.app_context import AppContext
from core.config_loader import get_config
from core.exceptions import ServiceException
from .dependencies import get_context
from .exceptions import (
    service_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .models.responses import HealthResponse
from .routers import (
    assessments_router,
    webhooks_router,
    jobs_router,
    applications_router
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(ctx: Optional[AppContext] = None) -> FastAPI:
    """
    Build the FastAPI app.

    ``ctx`` is the wired collaborator set; when omitted it is built from
    config on the first request that needs it.
    """
    app = FastAPI(
        title="ATS Scoring API",
        description="Assessment scoring, pipeline progression and webhook ingestion",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ctx = ctx

    # Register exception handlers
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(assessments_router)
    app.include_router(webhooks_router)
    app.include_router(jobs_router)
    app.include_router(applications_router)

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/health/redis", response_model=HealthResponse)
    def redis_health_check(ctx: AppContext = Depends(get_context)):
        """Cache reachability. Degraded, not failing: the cache is optional."""
        if ctx.cache.is_available:
            return HealthResponse(status="healthy", details=ctx.cache.get_cache_stats())
        return HealthResponse(status="degraded", details={"available": False})

    return app


app = create_app()


def main():
    """Run the web server."""
    import uvicorn

    config = get_config()
    logger.info(f"Starting ATS Scoring Server on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
