"""Integration test fixtures.

The app is exercised through TestClient with the controller dependency
overridden. Real requester and event logger instances are used; their
outbound calls are mocked with respx, so no external service is needed.
"""

import random
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from review_insight.api.dependencies import get_controller
from review_insight.controller import ReviewAnalyzerController
from review_insight.data.review_dataset import ReviewDataset
from review_insight.events.event_logger import EventLogger
from review_insight.llm.inference_client import InferenceRequester
from review_insight.llm.prompt_builder import PromptBuilder
from review_insight.main import app

INFERENCE_URL = "https://inference.test/models/falcon-7b-instruct"
SCORING_URL = "https://inference.test/models/sentiment-roberta"
LOGGING_URL = "https://script.test/macros/s/abc123/exec"


@pytest.fixture
def retry_sleep():
    return AsyncMock(return_value=None)


@pytest.fixture
def app_controller(state_store, sample_tsv_path, retry_sleep):
    """Controller wired like production, pointed at fake endpoints."""
    controller = ReviewAnalyzerController(
        requester=InferenceRequester(
            inference_url=INFERENCE_URL,
            scoring_url=SCORING_URL,
            sleep=retry_sleep,
        ),
        prompt_builder=PromptBuilder(),
        state_store=state_store,
        event_logger=EventLogger(),
        rng=random.Random(3),
    )
    controller.load_dataset(sample_tsv_path)
    return controller


@pytest.fixture
def empty_controller(state_store, retry_sleep):
    """Controller whose dataset failed to load."""
    controller = ReviewAnalyzerController(
        requester=InferenceRequester(inference_url=INFERENCE_URL, sleep=retry_sleep),
        prompt_builder=PromptBuilder(),
        state_store=state_store,
        event_logger=EventLogger(),
    )
    controller.load_dataset(ReviewDataset([], source="memory"))
    return controller


@pytest.fixture
def client(app_controller):
    """TestClient with the controller dependency overridden."""
    app.dependency_overrides[get_controller] = lambda: app_controller
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def empty_client(empty_controller):
    app.dependency_overrides[get_controller] = lambda: empty_controller
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
