"""
Access control endpoints: admin, moderators, bans.
"""

from fastapi import APIRouter, status

from catalog.api.deps import Caller, Catalog
from catalog.schemas.access import AccessControlResponse, AddressRequest
from catalog.schemas.common import ErrorResponse
from catalog.schemas.course import CourseListResponse

router = APIRouter()

_ERRORS = {
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.get("", response_model=AccessControlResponse)
async def get_access_control(catalog: Catalog):
    """Current admin, moderators and banned addresses."""
    return AccessControlResponse.from_snapshot(await catalog.get_access_control())


@router.put("/admin", response_model=AccessControlResponse, responses=_ERRORS)
async def set_admin(data: AddressRequest, caller: Caller, catalog: Catalog):
    """Name the first admin, or hand the role over (current admin only)."""
    return AccessControlResponse.from_snapshot(await catalog.set_admin(data.address, caller))


@router.post(
    "/moderators",
    response_model=AccessControlResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def add_moderator(data: AddressRequest, caller: Caller, catalog: Catalog):
    """Add a moderator (admin only)."""
    return AccessControlResponse.from_snapshot(await catalog.add_moderator(data.address, caller))


@router.delete("/moderators/{address}", response_model=AccessControlResponse, responses=_ERRORS)
async def remove_moderator(address: str, caller: Caller, catalog: Catalog):
    """Remove a moderator (admin only)."""
    return AccessControlResponse.from_snapshot(await catalog.remove_moderator(address, caller))


@router.post("/banned", response_model=CourseListResponse, responses=_ERRORS)
async def ban_creator(data: AddressRequest, caller: Caller, catalog: Catalog):
    """Ban a creator and delete their courses. Returns the deleted courses."""
    return CourseListResponse.from_courses(await catalog.ban_creator(data.address, caller))


@router.delete("/banned/{address}", response_model=AccessControlResponse, responses=_ERRORS)
async def unban_creator(address: str, caller: Caller, catalog: Catalog):
    """Lift a ban."""
    return AccessControlResponse.from_snapshot(await catalog.unban_creator(address, caller))
