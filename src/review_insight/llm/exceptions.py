"""
Exceptions raised inside the inference requester for a single attempt.

The requester converts every one of these into a ClassificationFailure at
its boundary, so they never reach callers. Each class carries the ErrorKind
it maps to; ModelWarmingUpError is the only retryable one.
"""

from review_insight.models.enums import ErrorKind


class InferenceError(Exception):
    """
    Base exception for all inference-call errors.

    Attributes:
        kind: ErrorKind reported to callers
        message: Human-readable message shown as a status line
        details: Extra context for logs (status code, body prefix, ...)
    """
    kind: ErrorKind = ErrorKind.NETWORK_ERROR
    retryable: bool = False

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PaymentRequiredError(InferenceError):
    """HTTP 402: the hosted endpoint wants a paid/valid token."""
    kind = ErrorKind.PAYMENT_REQUIRED


class RateLimitedError(InferenceError):
    """HTTP 429."""
    kind = ErrorKind.RATE_LIMITED


class UnauthorizedError(InferenceError):
    """
    HTTP 401, or no token while the strict auth policy is active.
    """
    kind = ErrorKind.UNAUTHORIZED


class ModelWarmingUpError(InferenceError):
    """
    HTTP 404 or 503 while the hosted model is loading.

    Triggers the single delayed retry.
    """
    kind = ErrorKind.MODEL_WARMING_UP
    retryable = True


class MalformedResponseError(InferenceError):
    """
    2xx response without a usable generated text.

    Also raised when a 2xx body carries an explicit ``error`` field; the
    message is then the embedded error text.
    """
    kind = ErrorKind.MALFORMED_RESPONSE


class InferenceNetworkError(InferenceError):
    """
    Transport failure (timeout, DNS, reset) or an unclassified non-2xx status.
    """
    kind = ErrorKind.NETWORK_ERROR
