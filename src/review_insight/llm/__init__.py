"""
Inference client and prompt/label helpers.

Components:
- InferenceRequester: POST to the hosted inference API with one warmup retry
- PromptBuilder: renders the sentiment and noun-density prompts
- label_matching: best-effort keyword matching to icons/badges
- text_utils: first-line normalization, error body capping
- exceptions: per-attempt errors, each mapped to an ErrorKind
"""

from review_insight.llm.inference_client import InferenceRequester
from review_insight.llm.prompt_builder import PromptBuilder
from review_insight.llm.exceptions import (
    InferenceError,
    InferenceNetworkError,
    MalformedResponseError,
    ModelWarmingUpError,
    PaymentRequiredError,
    RateLimitedError,
    UnauthorizedError,
)

__all__ = [
    "InferenceRequester",
    "PromptBuilder",
    "InferenceError",
    "InferenceNetworkError",
    "MalformedResponseError",
    "ModelWarmingUpError",
    "PaymentRequiredError",
    "RateLimitedError",
    "UnauthorizedError",
]
