"""
Kernel Data Models

SQLAlchemy tables backing the course catalog: the id counter cell, the
course table and the three access control ledger cells.
"""

from catalog.kernel.models.base import Base, now_ns
from catalog.kernel.models.counter import IdCounter
from catalog.kernel.models.course import CourseRecord
from catalog.kernel.models.ledger import (
    ADMIN_SLOT,
    AdminCell,
    ModeratorEntry,
    BannedEntry,
)

__all__ = [
    "Base",
    "now_ns",
    "IdCounter",
    "CourseRecord",
    "ADMIN_SLOT",
    "AdminCell",
    "ModeratorEntry",
    "BannedEntry",
]
