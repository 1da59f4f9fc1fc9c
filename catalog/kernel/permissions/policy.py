"""
Authorization policy.

Pure functions over a ``LedgerSnapshot``; no I/O. The service facade
takes one snapshot per operation and asks these questions of it.
"""

from typing import Optional

from catalog.kernel.types import Course, LedgerSnapshot


def is_admin(caller: str, ledger: LedgerSnapshot) -> bool:
    return ledger.admin is not None and caller == ledger.admin


def is_moderator(caller: str, ledger: LedgerSnapshot) -> bool:
    return caller in ledger.moderators


def is_privileged(caller: str, ledger: LedgerSnapshot) -> bool:
    """Admin or moderator."""
    return is_admin(caller, ledger) or is_moderator(caller, ledger)


def is_banned(caller: str, ledger: LedgerSnapshot) -> bool:
    return caller in ledger.banned


def can_set_admin(caller: str, ledger: LedgerSnapshot) -> bool:
    """
    Anyone may name the first admin; afterwards only the admin may rotate.
    """
    return ledger.admin is None or caller == ledger.admin


def can_create(caller: str, ledger: LedgerSnapshot) -> bool:
    return not is_banned(caller, ledger)


def can_mutate(course: Course, caller: str, ledger: LedgerSnapshot) -> bool:
    """
    Update/delete check: the creator, the admin or any moderator.

    Being banned does not remove the creator's rights over courses they
    still own.
    """
    return caller == course.creator_address or is_privileged(caller, ledger)


def can_delete_by_creator(address: str, caller: str, ledger: LedgerSnapshot) -> bool:
    """Bulk delete of ``address``'s courses: privileged callers or the creator."""
    return caller == address or is_privileged(caller, ledger)


def can_be_banned(address: str, ledger: LedgerSnapshot) -> bool:
    """Admin and moderators are never banned."""
    return not is_privileged(address, ledger)


def role_of(caller: str, ledger: LedgerSnapshot, course: Optional[Course] = None) -> str:
    """Highest role ``caller`` holds, for log lines."""
    if is_admin(caller, ledger):
        return "admin"
    if is_moderator(caller, ledger):
        return "moderator"
    if course is not None and caller == course.creator_address:
        return "owner"
    if is_banned(caller, ledger):
        return "banned"
    return "user"
