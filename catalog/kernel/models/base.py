"""
Declarative base for all kernel tables.
"""

import time

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


def now_ns() -> int:
    """Current wall-clock time in nanoseconds since the Unix epoch."""
    return time.time_ns()
