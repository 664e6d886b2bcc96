"""
Presentation-layer views returned by the controller.

These replace the DOM updates of a browser UI: the review shown, the
icon/badge chosen, and a status or error line.
"""

from typing import Optional

from pydantic import BaseModel, Field

from review_insight.models.enums import ErrorKind, EventLogStatus
from review_insight.models.inference_models import DisplayLabel


class AnalysisView(BaseModel):
    """State of the analysis panel after an action."""
    
    review: str = Field(default="", description="Review currently displayed")
    sentiment: Optional[DisplayLabel] = None
    noun_density: Optional[DisplayLabel] = None
    model_answer: Optional[str] = Field(
        default=None,
        description="Normalized model answer the label was matched from",
    )
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None


class StatusView(BaseModel):
    """Single status line, used by configuration and event actions."""
    
    ok: bool
    message: str
    event_status: Optional[EventLogStatus] = None
