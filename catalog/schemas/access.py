"""
Access control schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog.kernel.types import LedgerSnapshot


class AddressRequest(BaseModel):
    """A single identity to act on."""

    address: str = Field(..., min_length=1, max_length=255)


class AccessControlResponse(BaseModel):
    """Current admin, moderators and banned addresses."""

    admin: Optional[str]
    moderators: List[str]
    banned: List[str]

    @classmethod
    def from_snapshot(cls, snapshot: LedgerSnapshot) -> "AccessControlResponse":
        return cls(
            admin=snapshot.admin,
            moderators=list(snapshot.moderators),
            banned=list(snapshot.banned),
        )
