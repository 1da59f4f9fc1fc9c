"""
Common schema types used across the API.
"""

from typing import Optional, Union
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    kind: Optional[str] = None
    operation: Optional[str] = None
    subject: Union[int, str, None] = None
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    database: str = "connected"
    course_count: int = 0
    next_course_id: int = 0
