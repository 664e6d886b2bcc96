"""
Presentation-layer controller.

Owns all UI state (loaded reviews, data-ready flag, busy flag, current
review, last displays) and calls into the stateless InferenceRequester.
Every action returns a view; failures become status messages and nothing
is raised to the caller.
"""

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

import structlog

from review_insight.data.review_dataset import DatasetError, ReviewDataset
from review_insight.events.event_logger import EventLogger
from review_insight.llm.inference_client import InferenceRequester
from review_insight.llm.label_matching import (
    match_noun_density,
    match_scored_sentiment,
    match_sentiment,
)
from review_insight.llm.prompt_builder import PromptBuilder
from review_insight.models.enums import ErrorKind, EventLogStatus
from review_insight.models.event_models import LogEvent
from review_insight.models.inference_models import DisplayLabel
from review_insight.models.view_models import AnalysisView, StatusView
from review_insight.monitoring.metrics import label_matches_total
from review_insight.persistence.state_store import InvalidEndpointURL, LocalStateStore

logger = structlog.get_logger(__name__)

BUSY_MESSAGE = "Analysis already in progress."
NOT_LOADED_MESSAGE = "Data not loaded."
CTA_VARIANTS = ("A", "B")


@dataclass
class AnalyzerState:
    """Mutable UI state. Only the controller touches it."""
    dataset: ReviewDataset = field(default_factory=lambda: ReviewDataset([]))
    ready: bool = False
    busy: bool = False
    current_review: str = ""
    sentiment: Optional[DisplayLabel] = None
    noun_density: Optional[DisplayLabel] = None
    status_message: str = ""

    @property
    def reviews(self) -> list[str]:
        return self.dataset.reviews


class ReviewAnalyzerController:
    """
    User actions of the review analyzer.

    The busy flag stands in for disabling the trigger buttons while a call
    is in flight; a second analysis started meanwhile is turned away.
    """

    def __init__(
        self,
        requester: InferenceRequester,
        prompt_builder: PromptBuilder,
        state_store: LocalStateStore,
        event_logger: EventLogger,
        default_auth_token: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        self.requester = requester
        self.prompt_builder = prompt_builder
        self.state_store = state_store
        self.event_logger = event_logger
        self.default_auth_token = default_auth_token
        self.rng = rng or random.Random()
        self.state = AnalyzerState()

    # === Views ===

    def _view(self, error: Optional[str] = None, error_kind: Optional[ErrorKind] = None,
              model_answer: Optional[str] = None) -> AnalysisView:
        self.state.status_message = error or ""
        return AnalysisView(
            review=self.state.current_review,
            sentiment=self.state.sentiment,
            noun_density=self.state.noun_density,
            model_answer=model_answer,
            error=error,
            error_kind=error_kind,
        )

    def _reset_displays(self) -> None:
        self.state.sentiment = None
        self.state.noun_density = None

    # === Dataset ===

    def load_dataset(self, source: Union[str, Path, ReviewDataset]) -> StatusView:
        """
        Load reviews once at startup.

        The data-ready flag is set whether or not loading worked, so later
        actions report "Data not loaded." instead of waiting forever.
        """
        try:
            dataset = source if isinstance(source, ReviewDataset) else ReviewDataset.from_tsv(source)
            self.state.dataset = dataset
            message = f"Loaded {len(dataset)} reviews."
            ok = True
        except DatasetError as e:
            self.state.dataset = ReviewDataset([])
            message = f"Failed to load TSV.\n{e}"
            ok = False
            logger.error("Review dataset load failed", error=str(e))
        finally:
            self.state.ready = True

        self.state.status_message = "" if ok else message
        return StatusView(ok=ok, message=message)

    def pick_random(self) -> AnalysisView:
        """Show a random review; previous displays stay as they are."""
        if not self.state.ready:
            return self._view(error=NOT_LOADED_MESSAGE, error_kind=ErrorKind.MISSING_CONFIGURATION)
        try:
            self.state.current_review = self.state.dataset.random_review(self.rng)
        except DatasetError as e:
            return self._view(error=str(e), error_kind=ErrorKind.MISSING_CONFIGURATION)
        return self._view()

    # === Analysis ===

    def _token(self, auth_token: Optional[str]) -> Optional[str]:
        return (auth_token or "").strip() or self.default_auth_token

    async def _exclusive(self, action: Callable[[], Awaitable[AnalysisView]]) -> AnalysisView:
        if self.state.busy:
            logger.info("Analysis rejected, another one is running")
            return AnalysisView(
                review=self.state.current_review,
                sentiment=self.state.sentiment,
                noun_density=self.state.noun_density,
                error=BUSY_MESSAGE,
            )
        self.state.busy = True
        try:
            return await action()
        finally:
            self.state.busy = False

    def _take_review(self, review_text: Optional[str]) -> str:
        if review_text is not None:
            self.state.current_review = review_text.strip()
        return self.state.current_review

    async def _classify(
        self,
        task: str,
        review_text: Optional[str],
        auth_token: Optional[str],
        build_prompt: Callable[[str], str],
        match: Callable[[str], DisplayLabel],
        assign: Callable[[DisplayLabel], Any],
    ) -> AnalysisView:
        self._reset_displays()
        text = self._take_review(review_text)
        try:
            request = self.prompt_builder.build_request(build_prompt(text), self._token(auth_token))
        except ValueError as e:
            return self._view(error=str(e), error_kind=ErrorKind.MISSING_CONFIGURATION)

        outcome = await self.requester.classify(request.prompt_text, request.auth_token)
        if not outcome.ok:
            return self._view(error=outcome.message, error_kind=outcome.kind)

        label = match(outcome.normalized_label)
        label_matches_total.labels(task=task, category=label.category.value).inc()
        assign(label)
        logger.info(
            "Review classified",
            task=task,
            category=label.category.value,
            matched=label.matched,
        )
        return self._view(model_answer=outcome.normalized_label)

    async def analyze_sentiment(
        self,
        review_text: Optional[str] = None,
        auth_token: Optional[str] = None,
    ) -> AnalysisView:
        """Ask the model for positive/negative/neutral and pick an icon."""
        def assign(label: DisplayLabel) -> None:
            self.state.sentiment = label

        return await self._exclusive(lambda: self._classify(
            "sentiment", review_text, auth_token,
            self.prompt_builder.build_sentiment_prompt, match_sentiment, assign,
        ))

    async def analyze_nouns(
        self,
        review_text: Optional[str] = None,
        auth_token: Optional[str] = None,
    ) -> AnalysisView:
        """Ask the model for the noun-density bucket and pick a badge."""
        def assign(label: DisplayLabel) -> None:
            self.state.noun_density = label

        return await self._exclusive(lambda: self._classify(
            "noun_density", review_text, auth_token,
            self.prompt_builder.build_noun_density_prompt, match_noun_density, assign,
        ))

    async def score_sentiment(
        self,
        review_text: Optional[str] = None,
        auth_token: Optional[str] = None,
    ) -> AnalysisView:
        """Pick a random review when none is given and score it with the classifier model."""
        async def run() -> AnalysisView:
            self._reset_displays()
            if review_text is None and not self.state.current_review:
                try:
                    self.state.current_review = self.state.dataset.random_review(self.rng)
                except DatasetError as e:
                    return self._view(error=str(e), error_kind=ErrorKind.MISSING_CONFIGURATION)
            text = self._take_review(review_text)

            outcome = await self.requester.score(text, self._token(auth_token))
            if not outcome.ok:
                return self._view(error=outcome.message, error_kind=outcome.kind)

            label = match_scored_sentiment(outcome.label, outcome.score)
            label_matches_total.labels(task="scored_sentiment", category=label.category.value).inc()
            self.state.sentiment = label
            return self._view(model_answer=outcome.label.lower())

        return await self._exclusive(run)

    # === Event logging ===

    def save_endpoint_url(self, url: str) -> StatusView:
        try:
            self.state_store.save_endpoint_url(url)
        except InvalidEndpointURL as e:
            self.state.status_message = str(e)
            return StatusView(ok=False, message=str(e))
        self.state.status_message = "Saved Web App URL."
        return StatusView(ok=True, message="Saved Web App URL.")

    async def _log(self, event: str, variant: str, meta: Optional[dict[str, Any]],
                   url: Optional[str]) -> StatusView:
        log_event = LogEvent(
            event=event,
            variant=variant,
            user_id=self.state_store.get_or_create_user_id(),
            meta=meta or {},
        )
        result = await self.event_logger.send(url or self.state_store.get_endpoint_url(), log_event)
        message = "Logged ✅" if result.ok else result.detail
        self.state.status_message = message
        return StatusView(ok=result.ok, message=message, event_status=result.status)

    async def log_cta(self, variant: str, meta: Optional[dict[str, Any]] = None,
                      url: Optional[str] = None) -> StatusView:
        """Log a call-to-action click for variant A or B."""
        variant = (variant or "").upper()
        if variant not in CTA_VARIANTS:
            return StatusView(
                ok=False,
                message=f"Unknown variant: {variant or '(empty)'}",
                event_status=EventLogStatus.ERROR,
            )
        return await self._log("cta_click", variant, meta, url)

    async def log_heartbeat(self, meta: Optional[dict[str, Any]] = None,
                            url: Optional[str] = None) -> StatusView:
        return await self._log("heartbeat", "", meta, url)
