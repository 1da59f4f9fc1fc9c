"""
API v1 routes.
"""

from fastapi import APIRouter

from catalog.api.v1 import access, courses

router = APIRouter()

router.include_router(access.router, prefix="/access", tags=["Access Control"])
router.include_router(courses.router, prefix="/courses", tags=["Courses"])
