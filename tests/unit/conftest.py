"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

import random
from unittest.mock import AsyncMock, Mock

import pytest

from review_insight.controller import ReviewAnalyzerController
from review_insight.data.review_dataset import ReviewDataset
from review_insight.llm.prompt_builder import PromptBuilder
from review_insight.models.enums import EventLogStatus
from review_insight.models.event_models import EventLogResult
from review_insight.models.inference_models import ClassificationSuccess, ScoringSuccess

SAMPLE_REVIEWS = [
    "The battery lasts forever and the screen is gorgeous.",
    "Broke after two days. Support never answered.",
    "It is okay, nothing special.",
]


@pytest.fixture
def fake_sleep():
    """Stand-in for asyncio.sleep that records the retry delay."""
    return AsyncMock(return_value=None)


@pytest.fixture
def mock_requester():
    """Mock InferenceRequester answering "positive" / POSITIVE 0.97."""
    mock = Mock()
    mock.classify = AsyncMock(return_value=ClassificationSuccess(normalized_label="positive"))
    mock.score = AsyncMock(return_value=ScoringSuccess(label="POSITIVE", score=0.97))
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def mock_event_logger():
    """Mock EventLogger that always reports success."""
    mock = Mock()
    mock.send = AsyncMock(return_value=EventLogResult(status=EventLogStatus.LOGGED, detail="ok"))
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def sample_dataset() -> ReviewDataset:
    return ReviewDataset(SAMPLE_REVIEWS, source="memory")


@pytest.fixture
def controller(mock_requester, mock_event_logger, state_store, sample_dataset):
    """Controller with mocked network collaborators and loaded reviews."""
    ctrl = ReviewAnalyzerController(
        requester=mock_requester,
        prompt_builder=PromptBuilder(),
        state_store=state_store,
        event_logger=mock_event_logger,
        rng=random.Random(7),
    )
    ctrl.load_dataset(sample_dataset)
    return ctrl
