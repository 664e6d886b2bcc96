"""
Enumerations for Review Insight data models.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """
    Failure taxonomy for inference calls and the surrounding glue.
    
    MODEL_WARMING_UP is the only retryable kind; it surfaces to callers only
    when the single warmup retry also hits a warming-up model.
    MISSING_CONFIGURATION is detected before any network call.
    """
    
    PAYMENT_REQUIRED = "payment_required"
    RATE_LIMITED = "rate_limited"
    MODEL_WARMING_UP = "model_warming_up"
    UNAUTHORIZED = "unauthorized"
    MALFORMED_RESPONSE = "malformed_response"
    NETWORK_ERROR = "network_error"
    MISSING_CONFIGURATION = "missing_configuration"


class SentimentEnum(str, Enum):
    """Review sentiment display categories."""
    
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    UNKNOWN = "unknown"


class NounDensityEnum(str, Enum):
    """
    Noun density buckets.
    
    High (>15 nouns), Medium (6-15), Low (<6). UNKNOWN when the model
    answered with none of the keywords.
    """
    
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class EventLogStatus(str, Enum):
    """Result of posting one event to the logging endpoint."""
    
    LOGGED = "logged"
    MISSING_URL = "missing_url"
    ERROR = "error"
