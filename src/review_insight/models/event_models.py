"""
Models for click/heartbeat events posted to the logging endpoint.
"""

import json
import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from review_insight.models.enums import EventLogStatus


def _now_ms() -> int:
    return int(time.time() * 1000)


class LogEvent(BaseModel):
    """One logged event. Serialized as flat form fields."""
    model_config = ConfigDict(frozen=True)
    
    event: str = Field(..., description="Event name, e.g. cta_click or heartbeat")
    variant: str = Field(default="", description="A/B variant, empty for heartbeat")
    user_id: str = Field(default="", description="Pseudo-anonymous user id")
    ts: int = Field(default_factory=_now_ms, description="Epoch milliseconds")
    meta: dict[str, Any] = Field(default_factory=dict)
    
    def to_form(self) -> dict[str, str]:
        """Flatten to form fields; meta travels as a JSON string."""
        return {
            "event": self.event,
            "variant": self.variant,
            "userId": self.user_id,
            "ts": str(self.ts),
            "meta": json.dumps(self.meta, separators=(",", ":")),
        }


class EventLogResult(BaseModel):
    """Opaque outcome of a logging POST."""
    
    status: EventLogStatus
    detail: str = ""
    
    @property
    def ok(self) -> bool:
        return self.status == EventLogStatus.LOGGED
