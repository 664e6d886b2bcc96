"""
Request/outcome models for the inference requester.

ClassificationOutcome is a tagged union discriminated on ``status``.
Callers never receive exceptions from the requester, only one of these.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from review_insight.models.enums import ErrorKind, NounDensityEnum, SentimentEnum


class ClassificationRequest(BaseModel):
    """One classification call, created per user action."""
    model_config = ConfigDict(frozen=True)
    
    prompt_text: str = Field(..., min_length=1, description="Instruction plus subject text")
    auth_token: Optional[str] = Field(default=None, description="Bearer token, passed through as-is")


class ClassificationSuccess(BaseModel):
    """Normalized first line of the generated text."""
    model_config = ConfigDict(frozen=True)
    
    status: Literal["success"] = "success"
    normalized_label: str = Field(..., description="First line, lowercased and trimmed")
    
    @property
    def ok(self) -> bool:
        return True


class ClassificationFailure(BaseModel):
    """Terminal failure for the current action."""
    model_config = ConfigDict(frozen=True)
    
    status: Literal["failure"] = "failure"
    kind: ErrorKind
    message: str
    
    @property
    def ok(self) -> bool:
        return False


class ScoringSuccess(BaseModel):
    """Top label from a classification-model endpoint, e.g. POSITIVE / 0.98."""
    model_config = ConfigDict(frozen=True)
    
    status: Literal["success"] = "success"
    label: str
    score: float
    
    @property
    def ok(self) -> bool:
        return True


ClassificationOutcome = Annotated[
    Union[ClassificationSuccess, ClassificationFailure],
    Field(discriminator="status"),
]

ScoringOutcome = Annotated[
    Union[ScoringSuccess, ClassificationFailure],
    Field(discriminator="status"),
]


class DisplayLabel(BaseModel):
    """Icon/badge rendered for a classification result."""
    model_config = ConfigDict(frozen=True)
    
    category: Union[SentimentEnum, NounDensityEnum]
    icon: str
    text: str = Field(default="", description="Optional caption, e.g. confidence")
    
    @property
    def matched(self) -> bool:
        return self.category.value != "unknown"
