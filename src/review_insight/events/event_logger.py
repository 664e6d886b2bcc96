"""
Event logger for a spreadsheet-backed web app endpoint.

Events go out as CORS "simple requests": method POST, body
application/x-www-form-urlencoded, and no custom headers, so a browser-side
caller would not trigger a preflight. The response body is opaque text.
"""

from typing import Optional

import httpx
import structlog

from review_insight.models.enums import EventLogStatus
from review_insight.models.event_models import EventLogResult, LogEvent
from review_insight.monitoring.metrics import events_logged_total

logger = structlog.get_logger(__name__)

MISSING_URL_MESSAGE = "Missing Web App URL. Paste it and click Save URL first."


class EventLogger:
    """
    Posts LogEvents to a configured endpoint.

    The endpoint URL is passed per call because it is user-configurable at
    runtime (saved in the local state store).
    """

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            # Redirects matter: Apps Script answers /exec with a 302
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    def _finish(self, event: LogEvent, result: EventLogResult) -> EventLogResult:
        events_logged_total.labels(event=event.event or "unknown", status=result.status.value).inc()
        return result

    async def send(self, url: Optional[str], event: LogEvent) -> EventLogResult:
        """
        Post one event.

        Args:
            url: Logging endpoint; blank means not configured
            event: Event to send

        Returns:
            EventLogResult; LOGGED carries the raw response text. Never raises.
        """
        url = (url or "").strip()
        if not url:
            logger.warning("Event not logged, endpoint URL missing", log_event=event.event)
            return self._finish(
                event,
                EventLogResult(status=EventLogStatus.MISSING_URL, detail=MISSING_URL_MESSAGE),
            )

        try:
            client = await self._get_client()
            # data= yields a form-encoded body; headers stay at client defaults
            response = await client.post(url, data=event.to_form())
            text = response.text
        except httpx.HTTPError as e:
            logger.warning("Event log request failed", log_event=event.event, error=str(e))
            return self._finish(
                event,
                EventLogResult(status=EventLogStatus.ERROR, detail=f"Log failed: {e}"),
            )

        if not response.is_success:
            logger.warning(
                "Event log endpoint returned error",
                log_event=event.event,
                status_code=response.status_code,
            )
            return self._finish(
                event,
                EventLogResult(
                    status=EventLogStatus.ERROR,
                    detail=f"Log failed: HTTP {response.status_code}: {text}",
                ),
            )

        logger.info("Event logged", log_event=event.event, variant=event.variant)
        return self._finish(event, EventLogResult(status=EventLogStatus.LOGGED, detail=text))

    async def close(self):
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
