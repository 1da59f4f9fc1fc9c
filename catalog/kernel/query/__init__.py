"""
Conjunctive/disjunctive filtering over the course table.
"""

from catalog.kernel.query.filter_engine import build_criteria, filter_courses, matches

__all__ = [
    "build_criteria",
    "filter_courses",
    "matches",
]
