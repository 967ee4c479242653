"""
Query evaluation against an experience base.

A stored match always wins. A closed query without a match is answered with a
truth value derived from how much the extensions and intensions of its two
terms overlap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nal_engine.core.types import Query, QueryAnswer, QueryStatus, Statement, Term
from nal_engine.semantics import truth
from nal_engine.semantics.meaning import extension, intension

if TYPE_CHECKING:
    from nal_engine.experience.base import BaseExperienceBase


def count_evidence(left: Term, right: Term, base: BaseExperienceBase) -> tuple[int, int]:
    """
    Count the evidence the base holds for "left -> right".

    Positive evidence is the shared part of the two extensions together with the
    shared part of the two intensions; negative evidence is what the left term
    has that the right term lacks, again over extension and intension.

    Returns:
        (positive, negative) evidence counts
    """
    ext_left, ext_right = extension(left, base), extension(right, base)
    int_left, int_right = intension(left, base), intension(right, base)

    positive = (ext_left & ext_right) | (int_left & int_right)
    negative = (ext_left - ext_right) | (int_left - int_right)
    return len(positive), len(negative)


def evaluate_query(query: Query, base: BaseExperienceBase) -> QueryAnswer:
    """Answer a query; see module docstring for the fallback order."""
    for element in base.experiences:
        if query.matches(element.stmt):
            return QueryAnswer(
                query=query,
                status=QueryStatus.MATCHED,
                element=element,
                statement=element.stmt,
                truth_value=element.truth_value,
            )

    if query.is_open:
        return QueryAnswer(query=query, status=QueryStatus.NO_MATCH)

    candidate: Statement = query.to_statement()
    positive, negative = count_evidence(candidate.left, candidate.right, base)
    return QueryAnswer(
        query=query,
        status=QueryStatus.DERIVED,
        statement=candidate,
        truth_value=truth.from_evidence(positive, negative, rule="query"),
        positive_evidence=positive,
        negative_evidence=negative,
    )
