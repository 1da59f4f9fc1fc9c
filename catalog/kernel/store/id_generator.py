"""
Course id issuance from a persisted counter cell.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.kernel.errors import IdentifierSpaceExhausted
from catalog.kernel.models.counter import IdCounter

COURSE_ID_COUNTER = "course_id"

# The counter cell is a signed BIGINT; MAX_ID itself is never issued so
# the incremented value always fits.
MAX_ID = 2**63 - 1


class IdGenerator:
    """
    Issues strictly increasing ids: 0, 1, 2, ...

    The counter row is read, incremented and written back within the
    caller's transaction, so an id is only consumed when that transaction
    commits. Nothing ever decrements or resets it. Ids are unsigned in
    principle, but the counter column is a signed BIGINT, so issuance stops
    below MAX_ID (2**63 - 1) rather than at 2**64 - 1.
    """

    def __init__(self, session: AsyncSession, name: str = COURSE_ID_COUNTER):
        self.session = session
        self.name = name

    async def _counter(self) -> IdCounter:
        counter = await self.session.get(IdCounter, self.name)
        if counter is None:
            counter = IdCounter(name=self.name, value=0)
            self.session.add(counter)
            await self.session.flush()
        return counter

    async def peek(self) -> int:
        """Return the id the next call to ``next_id`` will issue."""
        counter = await self.session.get(IdCounter, self.name)
        return counter.value if counter is not None else 0

    async def next_id(self) -> int:
        counter = await self._counter()
        current = counter.value
        if current >= MAX_ID:
            raise IdentifierSpaceExhausted(f"counter {self.name!r} exhausted at {current}")
        counter.value = current + 1
        await self.session.flush()
        return current
