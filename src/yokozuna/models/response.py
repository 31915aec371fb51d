"""Response metadata passed as the third callback argument."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ResponseMeta(BaseModel):
    """Transport-level facts about a completed request."""

    method: str = Field(description="HTTP method that was sent")
    url: str = Field(description="Absolute request URL")
    status_code: int | None = Field(default=None, description="HTTP status, None if no response arrived")
    headers: dict[str, str] = Field(default_factory=dict, description="Response headers")
    took_ms: int = Field(default=0, description="Round-trip time in ms")
