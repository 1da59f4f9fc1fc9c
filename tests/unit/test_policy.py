"""
Unit tests for the authorization policy.
"""

from catalog.kernel.permissions import policy
from catalog.kernel.types import Course, LedgerSnapshot


def _course(creator: str = "owner") -> Course:
    return Course(
        id=0,
        creator_address=creator,
        creator_name="Owner",
        title="t",
        body="b",
        attachment_url="u",
        keyword="k",
        category="c",
        contact="x",
        created_at=1,
    )


LEDGER = LedgerSnapshot(admin="admin", moderators=["mod"], banned=["banned"])


class TestRoles:
    """Tests for role predicates."""

    def test_admin_and_moderator_are_privileged(self):
        assert policy.is_privileged("admin", LEDGER)
        assert policy.is_privileged("mod", LEDGER)
        assert not policy.is_privileged("someone", LEDGER)

    def test_no_admin_matches_nobody(self):
        assert not policy.is_admin("", LedgerSnapshot())
        assert not policy.is_admin("anyone", LedgerSnapshot())

    def test_role_of(self):
        course = _course()
        assert policy.role_of("admin", LEDGER, course) == "admin"
        assert policy.role_of("mod", LEDGER, course) == "moderator"
        assert policy.role_of("owner", LEDGER, course) == "owner"
        assert policy.role_of("banned", LEDGER) == "banned"
        assert policy.role_of("someone", LEDGER) == "user"


class TestAdminBootstrap:
    """Tests for set_admin permission."""

    def test_anyone_may_set_first_admin(self):
        assert policy.can_set_admin("anyone", LedgerSnapshot())

    def test_only_admin_may_rotate(self):
        assert policy.can_set_admin("admin", LEDGER)
        assert not policy.can_set_admin("mod", LEDGER)


class TestCourseRights:
    """Tests for create/mutate permissions."""

    def test_banned_cannot_create(self):
        assert not policy.can_create("banned", LEDGER)
        assert policy.can_create("someone", LEDGER)

    def test_owner_admin_and_moderator_may_mutate(self):
        course = _course()
        assert policy.can_mutate(course, "owner", LEDGER)
        assert policy.can_mutate(course, "admin", LEDGER)
        assert policy.can_mutate(course, "mod", LEDGER)
        assert not policy.can_mutate(course, "someone", LEDGER)

    def test_banned_owner_keeps_rights_over_own_course(self):
        course = _course(creator="banned")
        assert policy.can_mutate(course, "banned", LEDGER)

    def test_delete_by_creator(self):
        assert policy.can_delete_by_creator("owner", "owner", LEDGER)
        assert policy.can_delete_by_creator("owner", "mod", LEDGER)
        assert not policy.can_delete_by_creator("owner", "someone", LEDGER)

    def test_privileged_cannot_be_banned(self):
        assert not policy.can_be_banned("admin", LEDGER)
        assert not policy.can_be_banned("mod", LEDGER)
        assert policy.can_be_banned("someone", LEDGER)
