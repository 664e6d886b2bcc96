"""
FastAPI application entry point for Review Insight.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from review_insight.api.dependencies import get_controller, get_event_logger, get_requester
from review_insight.api.error_handlers import EXCEPTION_HANDLERS
from review_insight.api.middleware import RequestTracingMiddleware
from review_insight.api.routes import router
from review_insight.config import settings
from review_insight.logging_config import configure_logging

# Configure structured logging before anything logs
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Review Insight",
    description="Random product review sentiment and noun-density tagging via a hosted inference API",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router)


@app.on_event("startup")
async def startup():
    """Load the review dataset and log the effective configuration."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        inference_url=settings.INFERENCE_URL,
        require_auth_token=settings.REQUIRE_AUTH_TOKEN,
        dataset=settings.DATASET_PATH,
    )
    # Resolve through dependency_overrides so a swapped-in controller is the one loaded
    controller = app.dependency_overrides.get(get_controller, get_controller)()
    logger.info("Application startup complete", reviews=len(controller.state.reviews))


@app.on_event("shutdown")
async def shutdown():
    """Close pooled HTTP clients."""
    await get_requester().close()
    await get_event_logger().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "review_insight.main:app",
        host="0.0.0.0",
        port=8000,
    )
