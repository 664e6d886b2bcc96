"""Unit tests for EventLogger (respx-mocked endpoint)."""

import json
from urllib.parse import parse_qs

import httpx
import pytest
from respx import MockRouter

from review_insight.events.event_logger import MISSING_URL_MESSAGE, EventLogger
from review_insight.models.enums import EventLogStatus
from review_insight.models.event_models import LogEvent

LOG_URL = "https://script.test/macros/s/abc123/exec"


@pytest.fixture
def sample_event() -> LogEvent:
    return LogEvent(
        event="cta_click",
        variant="A",
        user_id="user-1",
        ts=1700000000000,
        meta={"page": "/", "ua": "pytest"},
    )


class TestSend:
    """Simple-request POST."""

    @pytest.mark.asyncio
    async def test_form_encoded_without_custom_headers(self, sample_event, respx_mock: MockRouter):
        route = respx_mock.post(LOG_URL).mock(return_value=httpx.Response(200, text="OK row 12"))
        logger = EventLogger()

        result = await logger.send(LOG_URL, sample_event)

        assert result.status == EventLogStatus.LOGGED
        assert result.detail == "OK row 12"

        request = route.calls.last.request
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert "authorization" not in request.headers
        assert not [h for h in request.headers if h.lower().startswith("x-")]

        form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
        assert form["event"] == "cta_click"
        assert form["variant"] == "A"
        assert form["userId"] == "user-1"
        assert form["ts"] == "1700000000000"
        assert json.loads(form["meta"]) == {"page": "/", "ua": "pytest"}
        await logger.close()

    @pytest.mark.asyncio
    async def test_missing_url_short_circuits(self, sample_event, respx_mock: MockRouter):
        result = await EventLogger().send("  ", sample_event)

        assert result.status == EventLogStatus.MISSING_URL
        assert result.detail == MISSING_URL_MESSAGE
        assert len(respx_mock.calls) == 0

    @pytest.mark.asyncio
    async def test_http_error_status(self, sample_event, respx_mock: MockRouter):
        respx_mock.post(LOG_URL).mock(return_value=httpx.Response(403, text="Forbidden"))

        result = await EventLogger().send(LOG_URL, sample_event)

        assert result.status == EventLogStatus.ERROR
        assert result.detail == "Log failed: HTTP 403: Forbidden"

    @pytest.mark.asyncio
    async def test_transport_error(self, sample_event, respx_mock: MockRouter):
        respx_mock.post(LOG_URL).mock(side_effect=httpx.ConnectError("dns failure"))

        result = await EventLogger().send(LOG_URL, sample_event)

        assert result.status == EventLogStatus.ERROR
        assert "dns failure" in result.detail


class TestLogEvent:
    """Form flattening."""

    def test_heartbeat_has_empty_variant(self):
        form = LogEvent(event="heartbeat", user_id="u").to_form()
        assert form["variant"] == ""
        assert form["meta"] == "{}"
        assert form["ts"].isdigit()
