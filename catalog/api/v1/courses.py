"""
Course endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Path, status

from catalog.api.deps import Caller, Catalog
from catalog.schemas.common import ErrorResponse
from catalog.schemas.course import (
    CourseCreate,
    CourseFilter,
    CourseListResponse,
    CourseResponse,
    CourseUpdate,
)

router = APIRouter()

# Unsigned 64-bit course id
CourseId = Annotated[int, Path(ge=0, le=2**64 - 1)]

_ERRORS = {
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


def _response(course) -> CourseResponse:
    return CourseResponse.model_validate(course.model_dump())


@router.post(
    "",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def add_course(data: CourseCreate, caller: Caller, catalog: Catalog):
    """Create a course owned by the caller."""
    return _response(await catalog.add_record(data, caller))


@router.post("/filter/and", response_model=CourseListResponse, responses=_ERRORS)
async def filter_courses_and(data: CourseFilter, catalog: Catalog):
    """Courses matching every provided criterion."""
    return CourseListResponse.from_courses(await catalog.filter_records_and(data))


@router.post("/filter/or", response_model=CourseListResponse, responses=_ERRORS)
async def filter_courses_or(data: CourseFilter, catalog: Catalog):
    """Courses matching at least one provided criterion."""
    return CourseListResponse.from_courses(await catalog.filter_records_or(data))


# Declared before /{course_id} so "mine" is not parsed as an id
@router.delete("/mine", response_model=CourseListResponse, responses=_ERRORS)
async def delete_my_courses(caller: Caller, catalog: Catalog):
    """Delete every course the caller created."""
    return CourseListResponse.from_courses(await catalog.delete_my_records(caller))


@router.delete("/by-creator/{address}", response_model=CourseListResponse, responses=_ERRORS)
async def delete_courses_by_creator(address: str, caller: Caller, catalog: Catalog):
    """Delete every course created by ``address``."""
    return CourseListResponse.from_courses(
        await catalog.delete_records_by_creator(address, caller)
    )


@router.get("/{course_id}", response_model=CourseResponse, responses=_ERRORS)
async def get_course(course_id: CourseId, catalog: Catalog):
    """Get a course by id."""
    return _response(await catalog.get_record(course_id))


@router.patch("/{course_id}", response_model=CourseResponse, responses=_ERRORS)
async def update_course(course_id: CourseId, data: CourseUpdate, caller: Caller, catalog: Catalog):
    """Update the provided fields of a course."""
    return _response(await catalog.update_record(course_id, data, caller))


@router.delete("/{course_id}", response_model=CourseResponse, responses=_ERRORS)
async def delete_course(course_id: CourseId, caller: Caller, catalog: Catalog):
    """Delete a course."""
    return _response(await catalog.delete_record(course_id, caller))
