"""
Pydantic schemas for API request/response validation.
"""

from catalog.schemas.access import (
    AddressRequest,
    AccessControlResponse,
)
from catalog.schemas.course import (
    CourseCreate,
    CourseUpdate,
    CourseFilter,
    CourseResponse,
    CourseListResponse,
)
from catalog.schemas.common import (
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    # Access control
    "AddressRequest",
    "AccessControlResponse",
    # Course
    "CourseCreate",
    "CourseUpdate",
    "CourseFilter",
    "CourseResponse",
    "CourseListResponse",
    # Common
    "ErrorResponse",
    "HealthResponse",
]
