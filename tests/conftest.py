"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

from pathlib import Path

import pytest

from review_insight.config import Settings
from review_insight.persistence.state_store import LocalStateStore

INFERENCE_URL = "https://inference.test/models/falcon-7b-instruct"
SCORING_URL = "https://inference.test/models/sentiment-roberta"
LOGGING_URL = "https://script.test/macros/s/abc123/exec"


@pytest.fixture
def test_settings(tmp_path: Path, fixtures_dir: Path) -> Settings:
    """Test settings pointing at fake endpoints and temporary files.
    
    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.REQUIRE_AUTH_TOKEN = True
    """
    return Settings(
        APP_NAME="Review Insight (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        INFERENCE_URL=INFERENCE_URL,
        SCORING_URL=SCORING_URL,
        HF_API_TOKEN=None,
        REQUIRE_AUTH_TOKEN=False,
        WARMUP_RETRY_DELAY_SECONDS=1.2,
        ERROR_BODY_CAPTURE_LIMIT=800,
        DATASET_PATH=str(fixtures_dir / "reviews_sample.tsv"),
        STATE_FILE=str(tmp_path / "state.json"),
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_tsv_path(fixtures_dir: Path) -> Path:
    """TSV with three usable reviews and two blank ones."""
    return fixtures_dir / "reviews_sample.tsv"


@pytest.fixture
def state_store(tmp_path: Path) -> LocalStateStore:
    """Empty state store in a temporary directory."""
    return LocalStateStore(tmp_path / "state.json")
