"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LinkCreateRequest(BaseModel):
    """Request to register a short code."""

    short_code: str = Field(..., description="Short code, already lowercased by the caller if desired")
    target_url: str = Field(..., description="Target URL; https:// is added when no scheme is given")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"short_code": "vibe", "target_url": "example.com"},
                {"short_code": "docs", "target_url": "https://docs.python.org/3/"},
            ]
        }
    }


class LinkResponse(BaseModel):
    """A stored link."""

    id: int
    short_code: str
    target_url: str
    clicks: int
    created_at: datetime
    updated_at: datetime
    short_url: Optional[str] = Field(None, description="Public URL that redirects to target_url")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "short_code": "vibe",
                    "target_url": "https://example.com",
                    "clicks": 0,
                    "created_at": "2024-01-01T12:00:00Z",
                    "updated_at": "2024-01-01T12:00:00Z",
                    "short_url": "https://sho.rt/vibe",
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error name: InvalidInput, CodeConflict, NotFound or StoreUnavailable")
    detail: Optional[str] = Field(None, description="Human readable message")
