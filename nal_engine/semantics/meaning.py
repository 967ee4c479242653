"""
Extension and intension of terms.

The extension of a term is everything known to be a (transitive) subtype of
it; the intension is everything it is known to be a (transitive) subtype of.
Both include the term itself and are computed as fixed points over the
Inheritance experiences of a base.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nal_engine.core.types import Copula, Term

if TYPE_CHECKING:
    from nal_engine.experience.base import BaseExperienceBase


def _closure(term: Term, base: BaseExperienceBase, upward: bool) -> set[Term]:
    """Grow {term} along Inheritance edges until nothing new is added."""
    if not base.has_term(term):
        return set()

    closure = {term}
    edges = [
        (e.stmt.right, e.stmt.left) if not upward else (e.stmt.left, e.stmt.right)
        for e in base.experiences
        if e.stmt.copula is Copula.INHERITANCE
    ]

    while True:
        new_terms = {target for source, target in edges if source in closure} - closure
        if not new_terms:
            break
        closure |= new_terms

    return closure


def extension(term: Term, base: BaseExperienceBase) -> set[Term]:
    """
    Transitive subtypes of a term, including the term.

    Returns an empty set when the term is not in the base's term index.

    Example:
        >>> base = ExperienceBase.from_statements(["robin is bird", "bird is animal"])
        >>> sorted(t.word for t in extension(Term("animal"), base))
        ['animal', 'bird', 'robin']
    """
    return _closure(term, base, upward=False)


def intension(term: Term, base: BaseExperienceBase) -> set[Term]:
    """
    Transitive supertypes of a term, including the term.

    Returns an empty set when the term is not in the base's term index.
    """
    return _closure(term, base, upward=True)
