"""
Course catalog service facade.

Every exported operation runs as one atomic step:

    acquire lock -> open transaction -> check policy -> mutate -> commit

The lock is held for the whole operation (reads included), so operations
never interleave and each one sees a consistent snapshot. Any failure
rolls the transaction back, leaving no partial effects.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Callable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.config import Settings
from catalog.kernel.errors import (
    BannedError,
    CatalogError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)
from catalog.kernel.models.base import now_ns
from catalog.kernel.permissions import policy
from catalog.kernel.permissions.ledger_service import AccessControlLedger, DEFAULT_MAX_MODERATORS
from catalog.kernel.query.filter_engine import filter_courses
from catalog.kernel.store.id_generator import IdGenerator
from catalog.kernel.store.record_store import RecordStore
from catalog.kernel.types import (
    Course,
    CoursePayload,
    CourseUpdatePayload,
    FilterMode,
    FilterPayload,
    LedgerSnapshot,
)
from catalog.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class _Unit:
    """Kernel components bound to one transaction."""
    session: AsyncSession
    store: RecordStore
    ledger: AccessControlLedger
    ids: IdGenerator


@dataclass
class CatalogStats:
    """Counts reported by the health endpoint."""
    course_count: int
    next_course_id: int
    moderator_count: int
    banned_count: int
    admin_set: bool


class CatalogService:
    """
    The exported catalog operations.

    One instance owns all catalog state for a process. ``caller`` is the
    identity supplied by the host for each invocation.

    Usage:
        service = CatalogService(async_session_maker)
        course = await service.add_record(payload, caller="alice")
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        *,
        max_moderators: int = DEFAULT_MAX_MODERATORS,
        ban_requires_existing_records: bool = False,
        clock: Callable[[], int] = now_ns,
    ):
        self._session_maker = session_maker
        self._lock = asyncio.Lock()
        self.max_moderators = max_moderators
        self.ban_requires_existing_records = ban_requires_existing_records
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        session_maker: async_sessionmaker[AsyncSession],
        settings: Settings,
    ) -> "CatalogService":
        return cls(
            session_maker,
            max_moderators=settings.max_moderators,
            ban_requires_existing_records=settings.ban_requires_existing_records,
        )

    @asynccontextmanager
    async def _unit(self, operation: str, caller: Optional[str] = None) -> AsyncIterator[_Unit]:
        async with self._lock:
            try:
                async with self._session_maker() as session:
                    async with session.begin():
                        yield _Unit(
                            session=session,
                            store=RecordStore(session),
                            ledger=AccessControlLedger(session, self.max_moderators),
                            ids=IdGenerator(session),
                        )
            except CatalogError as exc:
                logger.warning(
                    "%s rejected: %s",
                    operation,
                    exc.message,
                    extra={"operation": operation, "caller": caller, "kind": exc.kind.value},
                )
                raise

    # ── Access control ────────────────────────────────────────────────────

    async def set_admin(self, address: str, caller: str) -> LedgerSnapshot:
        async with self._unit("set_admin", caller) as unit:
            await unit.ledger.set_admin(address, caller)
            snapshot = await unit.ledger.snapshot()
        logger.info("Admin set", extra={"address": address, "caller": caller})
        return snapshot

    async def add_moderator(self, address: str, caller: str) -> LedgerSnapshot:
        async with self._unit("add_moderator", caller) as unit:
            await unit.ledger.add_moderator(address, caller)
            snapshot = await unit.ledger.snapshot()
        logger.info("Moderator added", extra={"address": address, "caller": caller})
        return snapshot

    async def remove_moderator(self, address: str, caller: str) -> LedgerSnapshot:
        async with self._unit("remove_moderator", caller) as unit:
            await unit.ledger.remove_moderator(address, caller)
            snapshot = await unit.ledger.snapshot()
        logger.info("Moderator removed", extra={"address": address, "caller": caller})
        return snapshot

    async def get_access_control(self) -> LedgerSnapshot:
        async with self._unit("get_access_control") as unit:
            return await unit.ledger.snapshot()

    async def ban_creator(self, address: str, caller: str) -> List[Course]:
        """Ban ``address`` and delete its courses. Returns the deleted courses."""
        async with self._unit("ban_creator", caller) as unit:
            removed = await unit.ledger.ban(
                address,
                caller,
                unit.store,
                require_existing_records=self.ban_requires_existing_records,
            )
        logger.info(
            "Creator banned",
            extra={"address": address, "caller": caller, "deleted": len(removed)},
        )
        return removed

    async def unban_creator(self, address: str, caller: str) -> LedgerSnapshot:
        async with self._unit("unban_creator", caller) as unit:
            await unit.ledger.unban(address, caller)
            snapshot = await unit.ledger.snapshot()
        logger.info("Creator unbanned", extra={"address": address, "caller": caller})
        return snapshot

    # ── Courses ───────────────────────────────────────────────────────────

    async def add_record(self, payload: CoursePayload, caller: str) -> Course:
        """
        Create a course owned by ``caller``.

        The ban check and field validation happen before an id is issued,
        so a rejected call consumes no id.
        """
        async with self._unit("add_record", caller) as unit:
            ledger = await unit.ledger.snapshot()
            if not policy.can_create(caller, ledger):
                raise BannedError(
                    "User is banned. Cannot add course",
                    operation="add_record",
                    subject=caller,
                )

            missing = payload.empty_fields()
            if missing:
                raise InvalidArgumentError(
                    "Please fill in all the required fields to create a course: "
                    + ", ".join(missing),
                    operation="add_record",
                    subject=caller,
                )

            course = Course(
                id=await unit.ids.next_id(),
                creator_address=caller,
                created_at=self._clock(),
                updated_at=None,
                **payload.model_dump(),
            )
            await unit.store.insert(course)
        logger.info("Course created", extra={"course_id": course.id, "caller": caller})
        return course

    async def get_record(self, course_id: int) -> Course:
        async with self._unit("get_record") as unit:
            course = await unit.store.get(course_id)
            if course is None:
                raise NotFoundError(
                    f"A course with id={course_id} not found",
                    operation="get_record",
                    subject=course_id,
                )
            return course

    async def _owned_or_managed(
        self, unit: _Unit, course_id: int, caller: str, operation: str, verb: str,
    ) -> Tuple[Course, str]:
        """Load ``course_id`` and check ``caller`` may change it; returns the course and caller role."""
        course = await unit.store.get(course_id)
        if course is None:
            raise NotFoundError(
                f"Couldn't {verb} a course with id={course_id}. Course not found",
                operation=operation,
                subject=course_id,
            )
        ledger = await unit.ledger.snapshot()
        if not policy.can_mutate(course, caller, ledger):
            raise UnauthorizedError(
                f"You are not authorized to {verb} course with id={course_id}",
                operation=operation,
                subject=course_id,
            )
        return course, policy.role_of(caller, ledger, course)

    async def update_record(self, course_id: int, patch: CourseUpdatePayload, caller: str) -> Course:
        """Apply the present fields of ``patch``; the creator, admin or a moderator only."""
        async with self._unit("update_record", caller) as unit:
            course, role = await self._owned_or_managed(
                unit, course_id, caller, "update_record", "update"
            )
            updated = patch.apply_to(course, updated_at=self._clock())
            await unit.store.insert(updated)
        logger.info(
            "Course updated",
            extra={
                "course_id": course_id,
                "caller": caller,
                "role": role,
                "fields": sorted(patch.model_dump(exclude_none=True)),
            },
        )
        return updated

    async def delete_record(self, course_id: int, caller: str) -> Course:
        async with self._unit("delete_record", caller) as unit:
            _, role = await self._owned_or_managed(
                unit, course_id, caller, "delete_record", "delete"
            )
            removed = await unit.store.remove(course_id)
        logger.info(
            "Course deleted",
            extra={"course_id": course_id, "caller": caller, "role": role},
        )
        return removed

    async def delete_my_records(self, caller: str) -> List[Course]:
        async with self._unit("delete_my_records", caller) as unit:
            removed = await unit.store.remove_by_creator(caller)
            if not removed:
                raise NotFoundError(
                    "No courses found for the caller. Nothing to delete.",
                    operation="delete_my_records",
                    subject=caller,
                )
        logger.info("Own courses deleted", extra={"caller": caller, "deleted": len(removed)})
        return removed

    async def delete_records_by_creator(self, address: str, caller: str) -> List[Course]:
        """Delete all of ``address``'s courses; admin, moderators or ``address`` itself."""
        async with self._unit("delete_records_by_creator", caller) as unit:
            ledger = await unit.ledger.snapshot()
            if not policy.can_delete_by_creator(address, caller, ledger):
                raise UnauthorizedError(
                    "You are not authorized to delete this creator's courses",
                    operation="delete_records_by_creator",
                    subject=address,
                )
            removed = await unit.store.remove_by_creator(address)
            if not removed:
                raise NotFoundError(
                    f"No courses found for {address}. Nothing to delete.",
                    operation="delete_records_by_creator",
                    subject=address,
                )
        logger.info(
            "Creator courses deleted",
            extra={"address": address, "caller": caller, "deleted": len(removed)},
        )
        return removed

    async def _filter(self, payload: FilterPayload, mode: FilterMode) -> List[Course]:
        async with self._unit(f"filter_records_{mode.value}") as unit:
            return await filter_courses(unit.store.iterate(), payload, mode)

    async def filter_records_and(self, payload: FilterPayload) -> List[Course]:
        """Courses satisfying every present criterion."""
        return await self._filter(payload, FilterMode.ALL)

    async def filter_records_or(self, payload: FilterPayload) -> List[Course]:
        """Courses satisfying at least one present criterion."""
        return await self._filter(payload, FilterMode.ANY)

    async def stats(self) -> CatalogStats:
        async with self._unit("stats") as unit:
            ledger = await unit.ledger.snapshot()
            return CatalogStats(
                course_count=await unit.store.count(),
                next_course_id=await unit.ids.peek(),
                moderator_count=len(ledger.moderators),
                banned_count=len(ledger.banned),
                admin_set=ledger.admin is not None,
            )
