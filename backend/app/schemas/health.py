"""
Health check response schemas.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response schema."""
    status: str
    uptime: float
    timestamp: datetime
    environment: str
    checks: Dict[str, Any] = {}
