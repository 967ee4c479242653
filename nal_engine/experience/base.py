"""
Base class for experience base implementations.

Provides the operations every store shares (id allocation, lookups,
query evaluation, rendering) on top of a small set of storage primitives.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional

from nal_engine.core.exceptions import ExperienceNotFoundError
from nal_engine.core.types import ExperienceElement, Query, QueryAnswer, Statement, Term, TruthValue
from nal_engine.semantics.query import evaluate_query


class BaseExperienceBase(ABC):
    """
    Abstract base class for experience bases.

    An experience base owns an insertion-ordered sequence of judgments and an
    index of every term they use. Insertion order is the scan order of queries.
    """

    def __init__(self, name: str = "BaseExperienceBase") -> None:
        self._name = name
        self._last_id = 0
        self._stats: dict[str, Any] = {
            "queries": 0,
            "additions": 0,
            "removals": 0,
        }

    @property
    def name(self) -> str:
        """Human-readable name of the base."""
        return self._name

    @property
    def stats(self) -> dict[str, Any]:
        """Operation statistics."""
        return self._stats.copy()

    @property
    def last_id(self) -> int:
        """Highest id handed out so far."""
        return self._last_id

    def _increment_stat(self, key: str, value: int = 1) -> None:
        """Increment a statistic counter."""
        self._stats[key] = self._stats.get(key, 0) + value

    # Storage primitives

    @property
    @abstractmethod
    def experiences(self) -> tuple[ExperienceElement, ...]:
        """All stored experiences in insertion order."""
        ...

    @property
    @abstractmethod
    def terms(self) -> frozenset[Term]:
        """The term index."""
        ...

    @abstractmethod
    def add(self, element: ExperienceElement) -> None:
        """Append an experience and index its terms."""
        ...

    @abstractmethod
    def remove(self, experience_id: int) -> ExperienceElement:
        """Remove an experience by id, returning it."""
        ...

    @abstractmethod
    def find(self, experience_id: int) -> Optional[ExperienceElement]:
        """Look up an experience by id."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every experience."""
        ...

    # Shared operations

    def get(self, experience_id: int) -> ExperienceElement:
        """
        Look up an experience by id.

        Raises:
            ExperienceNotFoundError: If no experience has this id
        """
        element = self.find(experience_id)
        if element is None:
            raise ExperienceNotFoundError(experience_id, self._name)
        return element

    def get_next_id(self) -> int:
        """Id the next added experience should use."""
        return self._last_id + 1

    def add_statement(
        self,
        stmt: Statement | str,
        truth_value: TruthValue | str | None = None,
    ) -> ExperienceElement:
        """
        Create an experience under the next id and add it.

        Args:
            stmt: Statement or "<term> <copula> <term>" text
            truth_value: TruthValue, "<f, c>" literal, or None for the default

        Returns:
            The stored experience
        """
        if isinstance(stmt, str):
            stmt = Statement.parse(stmt)
        if isinstance(truth_value, str):
            truth_value = TruthValue.parse(truth_value)
        if truth_value is None:
            truth_value = TruthValue.default()
        element = ExperienceElement(id=self.get_next_id(), stmt=stmt, truth_value=truth_value)
        self.add(element)
        return element

    def has_term(self, term: Term) -> bool:
        """Check whether a term is in the index."""
        return term in self.terms

    def query(self, query: Query | str) -> QueryAnswer:
        """
        Answer a pattern query.

        Returns the first stored match in insertion order, a closure-derived
        judgment for closed queries without a match, or a NO_MATCH answer.
        """
        self._increment_stat("queries")
        if isinstance(query, str):
            query = Query.parse(query)
        return evaluate_query(query, self)

    def render(self) -> str:
        """One "{id}: {stmt} {truth}" line per experience, in storage order."""
        return "\n".join(element.to_text() for element in self.experiences)

    @property
    def num_experiences(self) -> int:
        """Number of stored experiences."""
        return len(self.experiences)

    @property
    def num_terms(self) -> int:
        """Number of indexed terms."""
        return len(self.terms)

    def __len__(self) -> int:
        return self.num_experiences

    def __iter__(self) -> Iterator[ExperienceElement]:
        return iter(self.experiences)

    def __contains__(self, experience_id: object) -> bool:
        return isinstance(experience_id, int) and self.find(experience_id) is not None

    def __str__(self) -> str:
        return self.render()
