"""
FastAPI dependency injection for Review Insight.

Expensive or stateful objects (HTTP clients, the controller with its UI
state) are process-wide singletons via @lru_cache.
"""

import random
from functools import lru_cache
from pathlib import Path

import structlog

from review_insight.config import Settings, settings
from review_insight.controller import ReviewAnalyzerController
from review_insight.events.event_logger import EventLogger
from review_insight.llm.inference_client import InferenceRequester
from review_insight.llm.prompt_builder import PromptBuilder
from review_insight.persistence.state_store import LocalStateStore

logger = structlog.get_logger(__name__)


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.
    
    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_requester() -> InferenceRequester:
    """
    Get singleton inference requester with a pooled HTTP client.
    
    Returns:
        InferenceRequester configured from settings
    """
    current = get_settings()
    return InferenceRequester(
        inference_url=current.INFERENCE_URL,
        scoring_url=current.SCORING_URL,
        timeout=current.REQUEST_TIMEOUT,
        warmup_retry_delay=current.WARMUP_RETRY_DELAY_SECONDS,
        error_body_limit=current.ERROR_BODY_CAPTURE_LIMIT,
        require_auth_token=current.REQUIRE_AUTH_TOKEN,
    )


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """Get singleton prompt builder (templates loaded once)."""
    return PromptBuilder()


@lru_cache()
def get_state_store() -> LocalStateStore:
    """Get the local state store at STATE_FILE."""
    return LocalStateStore(Path(get_settings().STATE_FILE))


@lru_cache()
def get_event_logger() -> EventLogger:
    """Get singleton event logger."""
    return EventLogger(timeout=get_settings().REQUEST_TIMEOUT)


@lru_cache()
def get_controller() -> ReviewAnalyzerController:
    """
    Get the controller singleton and load the review dataset into it.
    
    Loading happens once, on first use; a failed load leaves the controller
    usable with an empty review list.
    
    Returns:
        ReviewAnalyzerController
    """
    current = get_settings()
    controller = ReviewAnalyzerController(
        requester=get_requester(),
        prompt_builder=get_prompt_builder(),
        state_store=get_state_store(),
        event_logger=get_event_logger(),
        default_auth_token=current.HF_API_TOKEN,
        rng=random.Random(),
    )
    result = controller.load_dataset(current.DATASET_PATH)
    logger.info("Controller ready", dataset=current.DATASET_PATH, loaded=result.ok)
    return controller
