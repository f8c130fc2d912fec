"""Schemas for the API-key protected external endpoint."""

from pydantic import BaseModel, Field


class ExternalRequest(BaseModel):
    data: str = Field(..., min_length=1, description="data field is required")


class ExternalResponse(BaseModel):
    received: str
