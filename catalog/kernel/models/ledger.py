"""
Access control ledger tables: admin cell, moderators, banned addresses.
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.kernel.models.base import Base, now_ns

# The admin table holds at most one row, always in this slot.
ADMIN_SLOT = 1


class AdminCell(Base):
    """Single-slot cell holding the admin address."""

    __tablename__ = "ledger_admin"

    slot: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    assigned_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ns)


class ModeratorEntry(Base):
    """A moderator address. Insertion order is preserved by ``id``."""

    __tablename__ = "ledger_moderators"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    added_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ns)

    def __repr__(self) -> str:
        return f"<ModeratorEntry {self.address}>"


class BannedEntry(Base):
    """An address barred from creating courses."""

    __tablename__ = "ledger_banned"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    banned_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ns)

    def __repr__(self) -> str:
        return f"<BannedEntry {self.address}>"
