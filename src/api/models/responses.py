"""Response models for the API."""

from typing import Dict, Any
from pydantic import BaseModel
from datetime import datetime


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    default_upstream_configured: bool


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = False
    error: Dict[str, Any]
    timestamp: datetime
