"""
API-specific request and response models for FastAPI endpoints.

Analysis and event endpoints answer with the controller views
(AnalysisView, StatusView) directly.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Body for the /analyze endpoints."""
    
    review_text: Optional[str] = Field(
        default=None,
        description="Review to analyze; omit to reuse the review currently shown",
    )
    auth_token: Optional[str] = Field(
        default=None,
        description="Hugging Face token, sent as Bearer header when present",
    )


class EndpointURLRequest(BaseModel):
    """Body for saving the logging endpoint URL."""
    
    url: str = Field(
        description="Apps Script Web App URL ending with /exec",
        examples=["https://script.google.com/macros/s/XXXX/exec"],
    )


class EventRequest(BaseModel):
    """Optional body for event endpoints."""
    
    url: Optional[str] = Field(
        default=None,
        description="Logging endpoint for this call only; defaults to the saved URL",
    )
    meta: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded"]
    )
    version: str = Field(
        description="Application version",
        examples=["0.1.0"]
    )
    services: dict[str, str] = Field(
        description="Component status",
        examples=[{"dataset": "ok (120 reviews)", "logging_endpoint": "configured"}]
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp (UTC)"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""
    
    error: str = Field(
        description="Error code or type",
        examples=["invalid_request", "internal_error"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[list | dict] = Field(
        default=None,
        description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Error timestamp (UTC)"
    )
