"""
Data models for Review Insight.

- enums: error taxonomy and display categories
- inference_models: classification request/outcome union, display labels
- event_models: logged events and their results
"""

from review_insight.models.enums import (
    ErrorKind,
    EventLogStatus,
    NounDensityEnum,
    SentimentEnum,
)
from review_insight.models.event_models import EventLogResult, LogEvent
from review_insight.models.inference_models import (
    ClassificationFailure,
    ClassificationOutcome,
    ClassificationRequest,
    ClassificationSuccess,
    DisplayLabel,
    ScoringOutcome,
    ScoringSuccess,
)

__all__ = [
    "ErrorKind",
    "EventLogStatus",
    "NounDensityEnum",
    "SentimentEnum",
    "EventLogResult",
    "LogEvent",
    "ClassificationFailure",
    "ClassificationOutcome",
    "ClassificationRequest",
    "ClassificationSuccess",
    "DisplayLabel",
    "ScoringOutcome",
    "ScoringSuccess",
]
