"""
Persisted course table and id issuance.
"""

from catalog.kernel.store.id_generator import IdGenerator, COURSE_ID_COUNTER
from catalog.kernel.store.record_store import RecordStore

__all__ = [
    "IdGenerator",
    "COURSE_ID_COUNTER",
    "RecordStore",
]
