"""
Inference requester for the hosted text-inference API.

Sends one prompt per call with httpx AsyncClient and always resolves to an
outcome model; no exception leaves ``classify`` or ``score``.

Per call:
1. POST {"inputs": <text>} with an optional Bearer token
2. Classify the HTTP status (402, 429, 401 fatal; 404/503 warming up)
3. On warming up, sleep a fixed delay once and repeat steps 1-2 exactly once
4. Extract and normalize the generated text
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

import httpx
import structlog

from review_insight.llm.exceptions import (
    InferenceError,
    InferenceNetworkError,
    MalformedResponseError,
    ModelWarmingUpError,
    PaymentRequiredError,
    RateLimitedError,
    UnauthorizedError,
)
from review_insight.llm.text_utils import normalize_generated_text, truncate_body
from review_insight.models.enums import ErrorKind
from review_insight.models.inference_models import (
    ClassificationFailure,
    ClassificationOutcome,
    ClassificationSuccess,
    ScoringOutcome,
    ScoringSuccess,
)
from review_insight.monitoring.metrics import (
    inference_latency_seconds,
    inference_outcomes_total,
    warmup_retries_total,
)


logger = structlog.get_logger(__name__)

WARMUP_STATUSES = frozenset({404, 503})

TOKEN_REQUIRED_MESSAGE = (
    "Hugging Face token is required for this endpoint. "
    "Create one at hf.co/settings/tokens and paste here."
)
INVALID_TOKEN_MESSAGE = "Invalid API token: tokens contain only ASCII characters."
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected API response."
INVALID_SCORE_RESPONSE_MESSAGE = "Invalid response from API"


class InferenceRequester:
    """
    Stateless client for a hosted text-generation/classification endpoint.

    Holds configuration and a pooled HTTP client only; results are never
    cached and no state survives between calls.

    Auth policy:
    - permissive (default): a missing token just omits the Authorization header
    - strict (``require_auth_token=True``): a missing token resolves to an
      UNAUTHORIZED failure before any network call
    """

    def __init__(
        self,
        inference_url: str,
        scoring_url: Optional[str] = None,
        timeout: float = 60.0,
        warmup_retry_delay: float = 1.2,
        error_body_limit: int = 800,
        require_auth_token: bool = False,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the requester.

        Args:
            inference_url: Text-generation endpoint used by ``classify``
            scoring_url: Label/score classifier endpoint used by ``score``
            timeout: HTTP timeout in seconds (the only timeout applied)
            warmup_retry_delay: Seconds to wait before the single warmup retry
            error_body_limit: Max characters of an error body kept in messages
            require_auth_token: Strict auth policy, see class docstring
            client: Shared AsyncClient; created lazily when omitted
            sleep: Awaitable used for the retry delay
        """
        self.inference_url = inference_url
        self.scoring_url = scoring_url
        self.timeout = timeout
        self.warmup_retry_delay = warmup_retry_delay
        self.error_body_limit = error_body_limit
        self.require_auth_token = require_auth_token
        self._client = client
        self._owns_client = client is None
        self._sleep = sleep

        logger.info(
            "Inference requester initialized",
            inference_url=inference_url,
            scoring_url=scoring_url,
            timeout=timeout,
            warmup_retry_delay=warmup_retry_delay,
            require_auth_token=require_auth_token,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
            self._owns_client = True
            logger.debug("Created new httpx AsyncClient")
        return self._client

    @staticmethod
    def _headers(auth_token: Optional[str]) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        return headers

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        Map a non-2xx response to the matching InferenceError.

        Only a bounded prefix of the body is kept.
        """
        status = response.status_code
        if 200 <= status < 300:
            return

        body = truncate_body(response.text, self.error_body_limit)
        details = {"status": status, "body": body}

        if status == 402:
            raise PaymentRequiredError(
                "Payment required (402). Provide a valid HF token or try later.\n" + body,
                details=details,
            )
        if status == 429:
            raise RateLimitedError(
                "Rate limited (429). Please slow down and try again.\n" + body,
                details=details,
            )
        if status == 401:
            raise UnauthorizedError(
                "Invalid API token provided (401).\n" + body,
                details=details,
            )
        if status in WARMUP_STATUSES:
            raise ModelWarmingUpError(
                f"Model is warming up or temporarily unavailable. API error {status}. {body}",
                details=details,
            )
        raise InferenceNetworkError(f"API error {status}. {body}", details=details)

    async def _post_once(self, url: str, inputs: str, auth_token: Optional[str]) -> Any:
        """
        Issue a single POST and return the decoded JSON body.

        Raises:
            InferenceError subclass for every failure mode
        """
        try:
            client = await self._get_client()
            response = await client.post(
                url,
                json={"inputs": inputs},
                headers=self._headers(auth_token),
            )
        except httpx.TimeoutException as e:
            raise InferenceNetworkError(
                f"Request timeout after {self.timeout}s",
                details={"error_type": type(e).__name__},
            )
        except httpx.HTTPError as e:
            raise InferenceNetworkError(
                f"Network error: {e}",
                details={"error_type": type(e).__name__},
            )

        self._raise_for_status(response)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                UNEXPECTED_RESPONSE_MESSAGE,
                details={"parse_error": str(e)},
            )

    async def _post_with_warmup_retry(
        self,
        url: str,
        inputs: str,
        auth_token: Optional[str],
        operation: str,
    ) -> Any:
        """
        POST once; on a warmup failure wait and POST exactly one more time.

        Whatever the second attempt produces is final, and the first
        attempt's failure is dropped.
        """
        try:
            return await self._post_once(url, inputs, auth_token)
        except InferenceError as e:
            if not e.retryable:
                raise
            logger.warning(
                "Model warming up, retrying once",
                operation=operation,
                status=e.details.get("status"),
                delay_seconds=self.warmup_retry_delay,
            )
            warmup_retries_total.labels(operation=operation).inc()

        await self._sleep(self.warmup_retry_delay)
        return await self._post_once(url, inputs, auth_token)

    @staticmethod
    def extract_generated_text(data: Any) -> str:
        """
        Pull ``generated_text`` out of a success body.

        Accepted shapes: ``[{"generated_text": ...}, ...]`` or
        ``{"generated_text": ...}``. A body with an ``error`` field raises
        with the embedded error text as message.

        Raises:
            MalformedResponseError: no usable text in the body
        """
        if isinstance(data, list) and data and isinstance(data[0], dict) and data[0].get("generated_text"):
            return str(data[0]["generated_text"])
        if isinstance(data, dict) and data.get("generated_text"):
            return str(data["generated_text"])
        if isinstance(data, dict) and data.get("error"):
            raise MalformedResponseError(str(data["error"]), details={"embedded_error": True})
        raise MalformedResponseError(UNEXPECTED_RESPONSE_MESSAGE)

    @staticmethod
    def extract_top_score(data: Any) -> tuple[str, float]:
        """
        Pull the first ``{label, score}`` pair from ``[[{...}, ...]]``.

        Raises:
            MalformedResponseError: body is not a non-empty list of non-empty lists
        """
        if isinstance(data, dict) and data.get("error"):
            raise MalformedResponseError(str(data["error"]), details={"embedded_error": True})
        if (
            not isinstance(data, list)
            or not data
            or not isinstance(data[0], list)
            or not data[0]
            or not isinstance(data[0][0], dict)
        ):
            raise MalformedResponseError(INVALID_SCORE_RESPONSE_MESSAGE)

        top = data[0][0]
        try:
            return str(top["label"]), float(top["score"])
        except (KeyError, TypeError, ValueError):
            raise MalformedResponseError(INVALID_SCORE_RESPONSE_MESSAGE, details={"result": top})

    def _precheck(self, inputs: str, auth_token: Optional[str]) -> Optional[ClassificationFailure]:
        """Failures detectable without touching the network."""
        if not (inputs or "").strip():
            return ClassificationFailure(
                kind=ErrorKind.MISSING_CONFIGURATION,
                message="Please provide review text.",
            )
        if self.require_auth_token and not auth_token:
            return ClassificationFailure(kind=ErrorKind.UNAUTHORIZED, message=TOKEN_REQUIRED_MESSAGE)
        if auth_token and not auth_token.isascii():
            return ClassificationFailure(kind=ErrorKind.UNAUTHORIZED, message=INVALID_TOKEN_MESSAGE)
        return None

    def _record(self, operation: str, outcome: Any, started: float) -> None:
        success = outcome.ok
        label = "success" if success else outcome.kind.value
        inference_outcomes_total.labels(operation=operation, outcome=label).inc()
        inference_latency_seconds.labels(
            operation=operation, success=str(success).lower()
        ).observe(time.perf_counter() - started)

        if success:
            logger.info("Inference call succeeded", operation=operation)
        else:
            logger.warning(
                "Inference call failed",
                operation=operation,
                kind=outcome.kind.value,
                message=outcome.message,
            )

    async def classify(
        self,
        prompt_text: str,
        auth_token: Optional[str] = None,
    ) -> ClassificationOutcome:
        """
        Classify a prompt with the text-generation endpoint.

        Args:
            prompt_text: Instruction plus subject text
            auth_token: Optional bearer token

        Returns:
            ClassificationSuccess with the normalized first line, or
            ClassificationFailure. Never raises.
        """
        auth_token = (auth_token or "").strip() or None
        failure = self._precheck(prompt_text, auth_token)
        if failure is not None:
            self._record("classify", failure, time.perf_counter())
            return failure

        logger.info(
            "Sending classification request",
            prompt_length=len(prompt_text),
            has_token=bool(auth_token),
        )

        started = time.perf_counter()
        outcome: ClassificationOutcome
        try:
            data = await self._post_with_warmup_retry(
                self.inference_url, prompt_text, auth_token, "classify"
            )
            text = self.extract_generated_text(data)
        except InferenceError as e:
            outcome = ClassificationFailure(kind=e.kind, message=e.message)
        else:
            outcome = ClassificationSuccess(normalized_label=normalize_generated_text(text))

        self._record("classify", outcome, started)
        return outcome

    async def score(
        self,
        text: str,
        auth_token: Optional[str] = None,
    ) -> ScoringOutcome:
        """
        Score a review with the label/score classifier endpoint.

        Same request, status handling and warmup retry as ``classify``; the
        success body is ``[[{"label": ..., "score": ...}, ...]]``.

        Returns:
            ScoringSuccess with the top label, or ClassificationFailure.
            Never raises.
        """
        auth_token = (auth_token or "").strip() or None
        if not self.scoring_url:
            failure = ClassificationFailure(
                kind=ErrorKind.MISSING_CONFIGURATION,
                message="No scoring endpoint configured.",
            )
            self._record("score", failure, time.perf_counter())
            return failure

        failure = self._precheck(text, auth_token)
        if failure is not None:
            self._record("score", failure, time.perf_counter())
            return failure

        started = time.perf_counter()
        outcome: ScoringOutcome
        try:
            data = await self._post_with_warmup_retry(self.scoring_url, text, auth_token, "score")
            label, value = self.extract_top_score(data)
        except InferenceError as e:
            outcome = ClassificationFailure(kind=e.kind, message=e.message)
        else:
            outcome = ScoringSuccess(label=label, score=value)

        self._record("score", outcome, started)
        return outcome

    async def close(self):
        """Close the HTTP client if this requester created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed inference client connection")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"inference_url={self.inference_url}, "
            f"timeout={self.timeout}s)"
        )
