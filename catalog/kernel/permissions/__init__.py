"""
Permission Core - admin/moderator/ban ledger and the authorization policy.
"""

from catalog.kernel.permissions import policy
from catalog.kernel.permissions.ledger_service import (
    AccessControlLedger,
    DEFAULT_MAX_MODERATORS,
)

__all__ = [
    "AccessControlLedger",
    "DEFAULT_MAX_MODERATORS",
    "policy",
]
