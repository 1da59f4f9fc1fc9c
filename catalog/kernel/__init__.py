"""
Course Catalog Kernel

- Record Store (persisted course table, detached copies)
- Identifier Generator (persisted counter, ids never reused)
- Access Control Ledger (admin, moderators, banned)
- Authorization Policy (pure allow/deny decisions)
- Filter Query Engine (AND/OR field predicates)
"""

from catalog.kernel.errors import (
    CatalogError,
    ErrorKind,
    NotFoundError,
    UnauthorizedError,
    BannedError,
    InvalidArgumentError,
    CapacityExceededError,
    DuplicateError,
    IdentifierSpaceExhausted,
)
from catalog.kernel.types import (
    Course,
    CoursePayload,
    CourseUpdatePayload,
    FilterMode,
    FilterPayload,
    LedgerSnapshot,
)

__all__ = [
    # Errors
    "CatalogError",
    "ErrorKind",
    "NotFoundError",
    "UnauthorizedError",
    "BannedError",
    "InvalidArgumentError",
    "CapacityExceededError",
    "DuplicateError",
    "IdentifierSpaceExhausted",
    # Value types
    "Course",
    "CoursePayload",
    "CourseUpdatePayload",
    "FilterMode",
    "FilterPayload",
    "LedgerSnapshot",
]
