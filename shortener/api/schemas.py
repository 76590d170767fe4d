"""
API Request and Response Schemas

Pydantic models for the JSON API. URL validation is left to the service
layer so the JSON and HTML endpoints reject the same inputs the same way.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request model for the JSON shorten endpoint."""
    # Any, so a missing or non-text url reaches the service and is reported as 400
    url: Any = Field(default=None, description="The long URL to shorten")
    title: Optional[str] = Field(default=None, description="Preview title")
    description: Optional[str] = Field(default=None, description="Preview description")
    image: Optional[str] = Field(default=None, description="Preview image URL")
    quote: Optional[str] = Field(default=None, description="Quote shown on the preview page")


class ShortenResponse(BaseModel):
    """Response model for the JSON shorten endpoint."""
    code: str = Field(..., description="The generated short code")
    short_url: str = Field(..., description="The complete short URL")
    url: str = Field(..., description="The original long URL")


class LinkResponse(BaseModel):
    """A stored link as returned by the metadata endpoint."""
    code: str
    url: str
    title: str
    description: str
    image: str
    quote: str
    created_at: Optional[datetime]
    short_url: str
