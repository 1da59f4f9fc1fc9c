"""
Course schemas.
"""

from typing import List

from pydantic import BaseModel

from catalog.kernel.types import Course, CoursePayload, CourseUpdatePayload, FilterPayload


class CourseCreate(CoursePayload):
    """Course creation request. Emptiness is checked by the service."""


class CourseUpdate(CourseUpdatePayload):
    """Course update request; omitted fields are left unchanged."""


class CourseFilter(FilterPayload):
    """Filter request; at least one criterion is required."""


class CourseResponse(Course):
    """Course response."""


class CourseListResponse(BaseModel):
    """Several courses, in store order."""

    items: List[CourseResponse]
    total: int

    @classmethod
    def from_courses(cls, courses: List[Course]) -> "CourseListResponse":
        return cls(
            items=[CourseResponse.model_validate(c.model_dump()) for c in courses],
            total=len(courses),
        )
