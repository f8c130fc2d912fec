"""Health check response schema."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    environment: Literal["dev", "test", "prod"]
    database: Literal["connected", "disconnected"]
    uptime_seconds: float = Field(ge=0, description="Seconds since the process started")
