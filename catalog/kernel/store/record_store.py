"""
Record store over the ``courses`` table.

All reads return detached ``Course`` copies; the ORM rows never leave
this module.
"""

from typing import AsyncIterator, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.kernel.models.course import CourseRecord
from catalog.kernel.store.id_generator import MAX_ID
from catalog.kernel.types import Course

_COLUMNS = tuple(Course.model_fields)


def _to_course(row: CourseRecord) -> Course:
    return Course.model_validate(row)


def _issuable(course_id: int) -> bool:
    """Only ids in 0..MAX_ID can have been issued or fit the id column."""
    return 0 <= course_id <= MAX_ID


class RecordStore:
    """
    Get/insert/remove/iterate over persisted courses.

    No row-level locking is done here; the service facade serializes
    whole operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, course_id: int) -> Optional[Course]:
        if not _issuable(course_id):
            return None
        row = await self.session.get(CourseRecord, course_id)
        return _to_course(row) if row is not None else None

    async def insert(self, course: Course) -> None:
        """Upsert by id: overwrite any existing course with the same id."""
        row = await self.session.get(CourseRecord, course.id)
        if row is None:
            row = CourseRecord(id=course.id)
            self.session.add(row)
        for column in _COLUMNS:
            if column != "id":
                setattr(row, column, getattr(course, column))
        await self.session.flush()

    async def remove(self, course_id: int) -> Optional[Course]:
        """Delete a course and return its prior value."""
        if not _issuable(course_id):
            return None
        row = await self.session.get(CourseRecord, course_id)
        if row is None:
            return None
        previous = _to_course(row)
        await self.session.delete(row)
        await self.session.flush()
        return previous

    async def iterate(self) -> AsyncIterator[Course]:
        """Yield every course in ascending id order."""
        result = await self.session.execute(select(CourseRecord).order_by(CourseRecord.id))
        for row in result.scalars():
            yield _to_course(row)

    async def remove_by_creator(self, address: str) -> List[Course]:
        """Delete every course created by ``address``; return them in store order."""
        removed = [course async for course in self.iterate() if course.creator_address == address]
        for course in removed:
            await self.remove(course.id)
        return removed

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(CourseRecord.id)))
        return result.scalar() or 0
