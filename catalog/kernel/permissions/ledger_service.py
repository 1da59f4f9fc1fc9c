"""
Access control ledger: the admin cell, the moderator set and the banned set.
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.kernel.errors import (
    CapacityExceededError,
    DuplicateError,
    NotFoundError,
    UnauthorizedError,
)
from catalog.kernel.models.ledger import ADMIN_SLOT, AdminCell, BannedEntry, ModeratorEntry
from catalog.kernel.permissions import policy
from catalog.kernel.store.record_store import RecordStore
from catalog.kernel.types import Course, LedgerSnapshot

DEFAULT_MAX_MODERATORS = 5


class AccessControlLedger:
    """
    Service for reading and mutating the access control ledger.

    Role rules:
    - The first ``set_admin`` call names the admin; afterwards only the
      admin may hand the role over
    - Only the admin manages moderators, up to ``max_moderators``
    - Admin or moderators ban and unban; they cannot ban each other

    Mutations flush into the caller's session and are committed (or
    rolled back) together with the rest of the operation.
    """

    def __init__(self, session: AsyncSession, max_moderators: int = DEFAULT_MAX_MODERATORS):
        self.session = session
        self.max_moderators = max_moderators

    async def get_admin(self) -> Optional[str]:
        cell = await self.session.get(AdminCell, ADMIN_SLOT)
        return cell.address if cell is not None else None

    async def list_moderators(self) -> List[str]:
        result = await self.session.execute(
            select(ModeratorEntry.address).order_by(ModeratorEntry.id)
        )
        return list(result.scalars())

    async def list_banned(self) -> List[str]:
        result = await self.session.execute(
            select(BannedEntry.address).order_by(BannedEntry.id)
        )
        return list(result.scalars())

    async def snapshot(self) -> LedgerSnapshot:
        """Read all three cells."""
        return LedgerSnapshot(
            admin=await self.get_admin(),
            moderators=await self.list_moderators(),
            banned=await self.list_banned(),
        )

    async def set_admin(self, address: str, caller: str) -> None:
        """
        Set or rotate the admin address.

        Args:
            address: The new admin
            caller: Identity of the invoking principal

        Raises:
            UnauthorizedError: An admin is set and the caller is not it
        """
        cell = await self.session.get(AdminCell, ADMIN_SLOT)
        current = LedgerSnapshot(admin=cell.address if cell is not None else None)
        if not policy.can_set_admin(caller, current):
            raise UnauthorizedError(
                "Only the current admin can change the admin",
                operation="set_admin",
                subject=address,
            )

        if cell is None:
            self.session.add(AdminCell(slot=ADMIN_SLOT, address=address))
        else:
            cell.address = address
        await self.session.flush()

    async def add_moderator(self, address: str, caller: str) -> None:
        """
        Add a moderator.

        Raises:
            UnauthorizedError: Caller is not the admin
            CapacityExceededError: The moderator set is full
            DuplicateError: ``address`` is already a moderator
        """
        if not policy.is_admin(caller, LedgerSnapshot(admin=await self.get_admin())):
            raise UnauthorizedError(
                "Only the admin can add moderators",
                operation="add_moderator",
                subject=address,
            )

        moderators = await self.list_moderators()
        if len(moderators) >= self.max_moderators:
            raise CapacityExceededError(
                f"Maximum number of moderators ({self.max_moderators}) reached",
                operation="add_moderator",
                subject=address,
            )
        if address in moderators:
            raise DuplicateError(
                f"{address} is already a moderator",
                operation="add_moderator",
                subject=address,
            )

        self.session.add(ModeratorEntry(address=address))
        await self.session.flush()

    async def remove_moderator(self, address: str, caller: str) -> None:
        """
        Remove a moderator.

        Raises:
            UnauthorizedError: Caller is not the admin
            NotFoundError: ``address`` is not a moderator
        """
        if not policy.is_admin(caller, LedgerSnapshot(admin=await self.get_admin())):
            raise UnauthorizedError(
                "Only the admin can remove moderators",
                operation="remove_moderator",
                subject=address,
            )

        result = await self.session.execute(
            delete(ModeratorEntry).where(ModeratorEntry.address == address)
        )
        if result.rowcount == 0:
            raise NotFoundError(
                f"{address} is not a moderator",
                operation="remove_moderator",
                subject=address,
            )

    async def ban(
        self,
        address: str,
        caller: str,
        store: RecordStore,
        require_existing_records: bool = False,
    ) -> List[Course]:
        """
        Ban ``address`` and delete every course it created.

        Args:
            address: The creator to ban
            caller: Identity of the invoking principal
            store: Record store sharing this ledger's session
            require_existing_records: Fail with NotFound, without banning,
                when ``address`` owns no courses

        Returns:
            The deleted courses, in store order

        Raises:
            UnauthorizedError: Caller is not privileged, or ``address`` is
                the admin or a moderator
            NotFoundError: Strict mode and nothing to delete
        """
        ledger = await self.snapshot()
        if not policy.is_privileged(caller, ledger):
            raise UnauthorizedError(
                "Only the admin or a moderator can ban a creator",
                operation="ban_creator",
                subject=address,
            )
        if not policy.can_be_banned(address, ledger):
            raise UnauthorizedError(
                "The admin and moderators cannot be banned",
                operation="ban_creator",
                subject=address,
            )

        removed = await store.remove_by_creator(address)
        if not removed and require_existing_records:
            raise NotFoundError(
                f"No courses found for {address}, cannot ban the user",
                operation="ban_creator",
                subject=address,
            )

        if not policy.is_banned(address, ledger):
            self.session.add(BannedEntry(address=address))
            await self.session.flush()
        return removed

    async def unban(self, address: str, caller: str) -> None:
        """
        Lift a ban.

        Raises:
            UnauthorizedError: Caller is not privileged
            NotFoundError: ``address`` is not banned
        """
        ledger = await self.snapshot()
        if not policy.is_privileged(caller, ledger):
            raise UnauthorizedError(
                "Only the admin or a moderator can unban a creator",
                operation="unban_creator",
                subject=address,
            )

        result = await self.session.execute(
            delete(BannedEntry).where(BannedEntry.address == address)
        )
        if result.rowcount == 0:
            raise NotFoundError(
                f"{address} is not in the banned list",
                operation="unban_creator",
                subject=address,
            )
