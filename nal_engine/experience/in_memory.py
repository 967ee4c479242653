"""
In-memory experience base implementation.

Provides a fast, lightweight store that keeps every judgment in memory.
Ideal for interactive sessions, scripts, and tests.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from typing import Iterable, Optional, Union

from nal_engine.core.config import get_config
from nal_engine.core.exceptions import ExperienceNotFoundError
from nal_engine.core.types import Copula, ExperienceElement, Statement, Term, TruthValue
from nal_engine.experience.base import BaseExperienceBase

logger = logging.getLogger(__name__)

StatementSource = Union[Statement, str, tuple[Union[Statement, str], Union[TruthValue, str, None]]]


class ExperienceBase(BaseExperienceBase):
    """
    In-memory experience base using a list and dictionary indexes.

    Features:
    - Insertion-ordered storage (the query scan order)
    - O(1) lookup by experience id
    - Term index feeding the extension/intension closures
    - Optional reference-counted term index

    By default the term index is not reference counted: removing an experience
    discards both of its terms even if another experience still uses them, and
    clear() leaves the index untouched. Pass reference_counted_terms=True to keep
    the index exact.

    Example:
        >>> base = ExperienceBase()
        >>> base.add_statement("robin is bird")
        >>> base.add_statement("bird is animal", "<0.9, 0.9>")
        >>> print(base)
        1: robin -> bird <1.00, 0.99>
        2: bird -> animal <0.90, 0.90>
    """

    def __init__(
        self,
        name: Optional[str] = None,
        reference_counted_terms: Optional[bool] = None,
    ) -> None:
        config = get_config().experience
        super().__init__(name if name is not None else config.name)

        if reference_counted_terms is None:
            reference_counted_terms = config.reference_counted_terms
        self._reference_counted = reference_counted_terms

        # Core storage
        self._experiences: list[ExperienceElement] = []

        # Indexes for fast lookups
        self._id_index: dict[int, ExperienceElement] = {}
        self._terms: set[Term] = set()
        self._term_counts: Counter[Term] = Counter()

    @property
    def reference_counted_terms(self) -> bool:
        """Whether the term index tracks how many experiences use each term."""
        return self._reference_counted

    @property
    def experiences(self) -> tuple[ExperienceElement, ...]:
        return tuple(self._experiences)

    @property
    def terms(self) -> frozenset[Term]:
        return frozenset(self._terms)

    def _index_terms(self, stmt: Statement) -> None:
        for term in stmt.terms:
            self._terms.add(term)
            if self._reference_counted:
                self._term_counts[term] += 1

    def _unindex_terms(self, stmt: Statement) -> None:
        for term in stmt.terms:
            if not self._reference_counted:
                self._terms.discard(term)
                continue
            self._term_counts[term] -= 1
            if self._term_counts[term] <= 0:
                del self._term_counts[term]
                self._terms.discard(term)

    # Read operations

    def find(self, experience_id: int) -> Optional[ExperienceElement]:
        return self._id_index.get(experience_id)

    # Write operations

    def add(self, element: ExperienceElement) -> None:
        """Append an experience; duplicate statements are kept as distinct experiences."""
        if element.id <= self._last_id:
            logger.warning(
                f"Experience id {element.id} is not above last id {self._last_id} in {self._name}"
            )
        self._experiences.append(element)
        self._id_index[element.id] = element
        self._index_terms(element.stmt)
        self._last_id = max(self._last_id + 1, element.id)
        self._increment_stat("additions")
        logger.debug(f"Added experience {element.to_text()}")

    def add_statements(self, sources: Iterable[StatementSource]) -> list[ExperienceElement]:
        """
        Add several statements under consecutive ids.

        Each source is a Statement, statement text, or a (statement, truth) pair.
        """
        added: list[ExperienceElement] = []
        for source in sources:
            if isinstance(source, tuple):
                stmt, truth_value = source
                added.append(self.add_statement(stmt, truth_value))
            else:
                added.append(self.add_statement(source))
        return added

    def remove(self, experience_id: int) -> ExperienceElement:
        """
        Remove an experience, keeping the order of the others.

        Raises:
            ExperienceNotFoundError: If no experience has this id
        """
        element = self._id_index.pop(experience_id, None)
        if element is None:
            raise ExperienceNotFoundError(experience_id, self._name)

        removed = [e for e in self._experiences if e.id == experience_id]
        self._experiences = [e for e in self._experiences if e.id != experience_id]
        for e in removed:
            self._unindex_terms(e.stmt)

        self._increment_stat("removals")
        logger.debug(f"Removed experience {experience_id} from {self._name}")
        return element

    def clear(self) -> None:
        """
        Remove all experiences.

        Without reference counting the term index is left as it was, so
        previously stored terms still count as known to the closures.
        """
        self._experiences.clear()
        self._id_index.clear()
        if self._reference_counted:
            self._term_counts.clear()
            self._terms.clear()
        logger.debug(f"Cleared {self._name}")

    # Convenience methods

    @classmethod
    def from_statements(
        cls,
        sources: Iterable[StatementSource],
        name: Optional[str] = None,
        reference_counted_terms: Optional[bool] = None,
    ) -> "ExperienceBase":
        """Create a base from statements, statement texts, or (statement, truth) pairs."""
        base = cls(name=name, reference_counted_terms=reference_counted_terms)
        base.add_statements(sources)
        return base

    def to_networkx(self) -> "networkx.MultiDiGraph":
        """Convert to a NetworkX graph for analysis/visualization.

        Similarity experiences become a pair of opposite edges.
        """
        import networkx as nx

        G = nx.MultiDiGraph()

        for term in self._terms:
            G.add_node(term.word)

        for element in self._experiences:
            attrs = {
                "id": element.id,
                "copula": element.stmt.copula.value,
                "frequency": element.truth_value.frequency,
                "confidence": element.truth_value.confidence,
            }
            left, right = element.stmt.left.word, element.stmt.right.word
            G.add_edge(left, right, **attrs)
            if element.stmt.is_similarity:
                G.add_edge(right, left, **attrs)

        return G

    def __repr__(self) -> str:
        return f"ExperienceBase(experiences={self.num_experiences}, terms={self.num_terms})"

    def summary(self) -> str:
        """Get a summary of the base contents."""
        lines = [
            f"Experience Base: {self._name}",
            f"  Experiences: {self.num_experiences}",
            f"  Terms: {self.num_terms}",
            f"  Next id: {self.get_next_id()}",
        ]

        copula_counts: dict[str, int] = defaultdict(int)
        for element in self._experiences:
            copula_counts[element.stmt.copula.name.lower()] += 1

        if copula_counts:
            lines.append("  Copulas:")
            for copula in Copula:
                name = copula.name.lower()
                if copula_counts[name]:
                    lines.append(f"    {name}: {copula_counts[name]}")

        return "\n".join(lines)
