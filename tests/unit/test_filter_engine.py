"""
Unit tests for the filter query engine.
"""

import pytest

from catalog.kernel.errors import InvalidArgumentError, NotFoundError
from catalog.kernel.query.filter_engine import build_criteria, filter_courses, matches
from catalog.kernel.types import Course, FilterMode, FilterPayload


def _course(course_id, keyword, category, creator="alice", created_at=None) -> Course:
    return Course(
        id=course_id,
        creator_address=creator,
        creator_name=creator.title(),
        title=f"Course {course_id}",
        body="body",
        attachment_url="https://example.com/a.pdf",
        keyword=keyword,
        category=category,
        contact="c@example.com",
        created_at=created_at if created_at is not None else course_id * 10,
    )


COURSES = [
    _course(0, "rust", "programming"),
    _course(1, "python", "programming", creator="bob"),
    _course(2, "rust", "systems", creator="bob"),
    _course(3, "cooking", "lifestyle"),
]


async def _aiter(items):
    for item in items:
        yield item


class TestCriteria:
    """Tests for predicate construction."""

    def test_one_predicate_per_present_field(self):
        payload = FilterPayload(keyword="rust", category="programming")
        assert len(build_criteria(payload)) == 2

    def test_range_bounds_count_once(self):
        payload = FilterPayload(created_from=5, created_to=25)
        assert len(build_criteria(payload)) == 1

    def test_empty_payload(self):
        assert FilterPayload().is_empty()
        assert not FilterPayload(created_to=0).is_empty()

    def test_matches_modes(self):
        criteria = build_criteria(FilterPayload(keyword="rust", category="programming"))
        assert matches(COURSES[2], criteria, FilterMode.ANY)
        assert not matches(COURSES[2], criteria, FilterMode.ALL)
        assert matches(COURSES[0], criteria, FilterMode.ALL)


class TestFilterCourses:
    """Tests for the full scan."""

    @pytest.mark.asyncio
    async def test_and_requires_every_criterion(self):
        found = await filter_courses(
            _aiter(COURSES),
            FilterPayload(keyword="rust", category="programming"),
            FilterMode.ALL,
        )
        assert [c.id for c in found] == [0]

    @pytest.mark.asyncio
    async def test_or_keeps_store_order(self):
        found = await filter_courses(
            _aiter(COURSES),
            FilterPayload(keyword="rust", category="programming"),
            FilterMode.ANY,
        )
        assert [c.id for c in found] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_creator_and_range(self):
        found = await filter_courses(
            _aiter(COURSES),
            FilterPayload(creator_address="bob", created_from=15, created_to=20),
            FilterMode.ALL,
        )
        assert [c.id for c in found] == [2]

    @pytest.mark.asyncio
    async def test_open_ended_range(self):
        found = await filter_courses(
            _aiter(COURSES), FilterPayload(created_from=20), FilterMode.ALL
        )
        assert [c.id for c in found] == [2, 3]

    @pytest.mark.asyncio
    async def test_empty_payload_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            await filter_courses(_aiter(COURSES), FilterPayload(), FilterMode.ANY)
        assert exc_info.value.operation == "filter_records_or"

    @pytest.mark.asyncio
    async def test_no_match_is_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            await filter_courses(
                _aiter(COURSES), FilterPayload(keyword="haskell"), FilterMode.ALL
            )
        assert exc_info.value.operation == "filter_records_and"
