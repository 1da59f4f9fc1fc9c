"""
Named counter cells.
"""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.kernel.models.base import Base


class IdCounter(Base):
    """A persisted monotonically increasing counter, addressed by name."""

    __tablename__ = "id_counters"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<IdCounter {self.name}={self.value}>"
