"""
FastAPI API routes and endpoints.

- routes.py: analyzer actions (random review, analyses, config, events, health)
- dependencies.py: singletons for requester, event logger, state store, controller
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: request id tracing
"""

from review_insight.api import dependencies, error_handlers, models
from review_insight.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
