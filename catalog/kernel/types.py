"""
Kernel value types shared by the store, the policy and the service facade.

These are detached copies: nothing here references a database row, so a
caller mutating a ``Course`` cannot change the table.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class FilterMode(str, Enum):
    """How filter criteria are combined."""
    ALL = "and"
    ANY = "or"


class Course(BaseModel):
    """A single course catalog entry."""

    id: int = Field(..., ge=0)
    creator_address: str
    creator_name: str
    title: str
    body: str
    attachment_url: str
    keyword: str
    category: str
    contact: str
    created_at: int  # nanoseconds since the Unix epoch
    updated_at: Optional[int] = None

    class Config:
        from_attributes = True


# Fields a creator supplies and may later patch, in declaration order.
COURSE_CONTENT_FIELDS = (
    "title",
    "creator_name",
    "body",
    "attachment_url",
    "keyword",
    "category",
    "contact",
)


class CoursePayload(BaseModel):
    """Data needed to create a course. Every field must be non-empty."""

    title: str
    creator_name: str
    body: str
    attachment_url: str
    keyword: str
    category: str
    contact: str

    def empty_fields(self) -> List[str]:
        return [name for name in COURSE_CONTENT_FIELDS if not getattr(self, name)]


class CourseUpdatePayload(BaseModel):
    """Partial update. ``None`` leaves the corresponding field unchanged."""

    title: Optional[str] = None
    creator_name: Optional[str] = None
    body: Optional[str] = None
    attachment_url: Optional[str] = None
    keyword: Optional[str] = None
    category: Optional[str] = None
    contact: Optional[str] = None

    def apply_to(self, course: Course, updated_at: int) -> Course:
        """Return a copy of ``course`` with the present fields replaced."""
        changes = {
            name: getattr(self, name)
            for name in COURSE_CONTENT_FIELDS
            if getattr(self, name) is not None
        }
        changes["updated_at"] = updated_at
        return course.model_copy(update=changes)


class FilterPayload(BaseModel):
    """
    Filter criteria. Each field is optional but at least one is required.

    ``created_from`` and ``created_to`` are inclusive bounds on
    ``created_at`` and count as a single range criterion.
    """

    keyword: Optional[str] = None
    category: Optional[str] = None
    creator_address: Optional[str] = None
    created_from: Optional[int] = None
    created_to: Optional[int] = None

    @property
    def has_range(self) -> bool:
        return self.created_from is not None or self.created_to is not None

    def is_empty(self) -> bool:
        return (
            self.keyword is None
            and self.category is None
            and self.creator_address is None
            and not self.has_range
        )


class LedgerSnapshot(BaseModel):
    """Point-in-time view of the access control ledger."""

    admin: Optional[str] = None
    moderators: List[str] = Field(default_factory=list)
    banned: List[str] = Field(default_factory=list)
