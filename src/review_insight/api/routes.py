"""
API routes for the review analyzer.

Each route maps one user action of the analyzer UI onto the controller.
Analysis failures (rate limits, warming model, missing token, ...) are
domain results: they come back with status 200 and an ``error`` line in the
view, the way the UI shows them in its status area.
"""

import time
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram

from review_insight.api.dependencies import get_controller, get_settings
from review_insight.api.models import (
    AnalyzeRequest,
    EndpointURLRequest,
    EventRequest,
    HealthResponse,
)
from review_insight.config import Settings
from review_insight.controller import ReviewAnalyzerController
from review_insight.models.view_models import AnalysisView, StatusView

logger = structlog.get_logger(__name__)

# Prometheus metrics
analysis_requests_total = Counter(
    "analysis_requests_total",
    "Total analysis requests",
    ["endpoint", "status"]
)

analysis_duration_seconds = Histogram(
    "analysis_duration_seconds",
    "Analysis request duration in seconds",
    ["endpoint"]
)

router = APIRouter()


def _client_meta(request: Request, extra: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Page path and user agent, the base meta sent with every event."""
    meta = {"page": request.url.path, "ua": request.headers.get("user-agent", "")}
    meta.update(extra or {})
    return meta


def _track(endpoint: str, view: AnalysisView, start_time: float) -> AnalysisView:
    analysis_requests_total.labels(
        endpoint=endpoint, status="error" if view.error else "success"
    ).inc()
    analysis_duration_seconds.labels(endpoint=endpoint).observe(time.time() - start_time)
    return view


@router.get(
    "/reviews/random",
    response_model=AnalysisView,
    summary="Show a random review from the loaded dataset",
)
async def random_review(
    controller: ReviewAnalyzerController = Depends(get_controller),
) -> AnalysisView:
    return controller.pick_random()


@router.post(
    "/analyze/sentiment",
    response_model=AnalysisView,
    summary="Classify review sentiment (positive / negative / neutral)",
    description="""
    Sends a sentiment instruction for the review to the text-generation model
    and maps the first line of its answer to an icon. Answers that contain
    none of the expected keywords yield the ``unknown`` category.
    """,
)
async def analyze_sentiment(
    body: AnalyzeRequest,
    controller: ReviewAnalyzerController = Depends(get_controller),
) -> AnalysisView:
    start_time = time.time()
    view = await controller.analyze_sentiment(body.review_text, body.auth_token)
    return _track("sentiment", view, start_time)


@router.post(
    "/analyze/nouns",
    response_model=AnalysisView,
    summary="Classify noun density (high / medium / low)",
)
async def analyze_nouns(
    body: AnalyzeRequest,
    controller: ReviewAnalyzerController = Depends(get_controller),
) -> AnalysisView:
    start_time = time.time()
    view = await controller.analyze_nouns(body.review_text, body.auth_token)
    return _track("nouns", view, start_time)


@router.post(
    "/analyze/score",
    response_model=AnalysisView,
    summary="Score sentiment with the label/score classifier model",
    description="""
    Uses the classification model endpoint that answers with label/score
    pairs. Picks a random review when none is given and none is shown.
    """,
)
async def score_sentiment(
    body: AnalyzeRequest,
    controller: ReviewAnalyzerController = Depends(get_controller),
) -> AnalysisView:
    start_time = time.time()
    view = await controller.score_sentiment(body.review_text, body.auth_token)
    return _track("score", view, start_time)


@router.put(
    "/config/endpoint-url",
    response_model=StatusView,
    summary="Save the logging endpoint URL",
    responses={
        200: {"description": "URL saved"},
        400: {"description": "Blank or malformed URL"},
    },
)
async def save_endpoint_url(
    body: EndpointURLRequest,
    controller: ReviewAnalyzerController = Depends(get_controller),
):
    view = controller.save_endpoint_url(body.url)
    if not view.ok:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=view.model_dump(mode="json"),
        )
    return view


@router.post(
    "/events/cta/{variant}",
    response_model=StatusView,
    summary="Log a call-to-action click (variant A or B)",
)
async def log_cta(
    variant: str,
    request: Request,
    body: Optional[EventRequest] = None,
    controller: ReviewAnalyzerController = Depends(get_controller),
) -> StatusView:
    body = body or EventRequest()
    return await controller.log_cta(variant, _client_meta(request, body.meta), url=body.url)


@router.post(
    "/events/heartbeat",
    response_model=StatusView,
    summary="Log a heartbeat event",
)
async def log_heartbeat(
    request: Request,
    body: Optional[EventRequest] = None,
    controller: ReviewAnalyzerController = Depends(get_controller),
) -> StatusView:
    body = body or EventRequest()
    return await controller.log_heartbeat(_client_meta(request, body.meta), url=body.url)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="""
    Reports whether the review dataset is loaded and a logging endpoint is
    saved. The inference API is not called.
    """,
)
async def health_check(
    settings: Settings = Depends(get_settings),
    controller: ReviewAnalyzerController = Depends(get_controller),
) -> HealthResponse:
    services = {}
    reviews = len(controller.state.reviews)
    services["dataset"] = f"ok ({reviews} reviews)" if reviews else "not_loaded"
    services["logging_endpoint"] = (
        "configured" if controller.state_store.get_endpoint_url() else "not_configured"
    )
    services["auth_policy"] = "strict" if settings.REQUIRE_AUTH_TOKEN else "permissive"

    health_status = "healthy" if reviews else "degraded"
    logger.info("Health check", status=health_status, services=services)

    return HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services=services,
    )
