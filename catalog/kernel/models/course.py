"""
Course table: the ordered record table keyed by id.
"""

from typing import Optional

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog.kernel.models.base import Base


class CourseRecord(Base):
    """
    Persisted course row.

    ``id`` is issued by the id counter, never by the database, so ids are
    not reused after deletion.
    """

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
    )
    creator_address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    creator_name: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    attachment_url: Mapped[str] = mapped_column(Text, nullable=False)
    keyword: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact: Mapped[str] = mapped_column(String(255), nullable=False)

    # Nanoseconds since the Unix epoch
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    def __repr__(self) -> str:
        return f"<CourseRecord {self.id} by {self.creator_address}>"
