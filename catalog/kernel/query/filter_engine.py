"""
Filter query engine.

A full scan of the course table, keeping store order. Criteria:
``keyword``, ``category`` and ``creator_address`` are equality tests;
``created_from``/``created_to`` together form one inclusive range test
on ``created_at``.
"""

from typing import AsyncIterable, Callable, Iterable, List

from catalog.kernel.errors import InvalidArgumentError, NotFoundError
from catalog.kernel.types import Course, FilterMode, FilterPayload

Criterion = Callable[[Course], bool]


def build_criteria(payload: FilterPayload) -> List[Criterion]:
    """One predicate per present criterion."""
    criteria: List[Criterion] = []
    if payload.keyword is not None:
        criteria.append(lambda c, v=payload.keyword: c.keyword == v)
    if payload.category is not None:
        criteria.append(lambda c, v=payload.category: c.category == v)
    if payload.creator_address is not None:
        criteria.append(lambda c, v=payload.creator_address: c.creator_address == v)
    if payload.has_range:
        low, high = payload.created_from, payload.created_to
        criteria.append(
            lambda c: (low is None or c.created_at >= low)
            and (high is None or c.created_at <= high)
        )
    return criteria


def matches(course: Course, criteria: Iterable[Criterion], mode: FilterMode) -> bool:
    if mode == FilterMode.ALL:
        return all(criterion(course) for criterion in criteria)
    return any(criterion(course) for criterion in criteria)


def _check_payload(payload: FilterPayload, operation: str) -> List[Criterion]:
    if payload.is_empty():
        raise InvalidArgumentError(
            "Filter payload is empty; at least one filter criterion must be provided",
            operation=operation,
        )
    return build_criteria(payload)


async def filter_courses(
    courses: AsyncIterable[Course],
    payload: FilterPayload,
    mode: FilterMode,
) -> List[Course]:
    """
    Return the courses matching ``payload`` under ``mode``.

    Raises:
        InvalidArgumentError: No criterion present
        NotFoundError: Nothing matched
    """
    operation = f"filter_records_{mode.value}"
    criteria = _check_payload(payload, operation)

    found = [course async for course in courses if matches(course, criteria, mode)]
    if not found:
        raise NotFoundError(
            "Couldn't find a course with the provided inputs",
            operation=operation,
        )
    return found
