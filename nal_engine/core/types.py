"""
Core data types for the NAL-Engine framework.

This module defines the fundamental data structures used throughout the framework:
terms, copulas, statements, truth values, queries, stored experiences and the
result objects returned by queries and inference.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from nal_engine.core.config import get_config
from nal_engine.core.exceptions import (
    InvalidCopulaError,
    InvalidQueryError,
    InvalidStatementError,
    InvalidTermError,
    InvalidTruthValueError,
)

WILDCARD_SYMBOL = "?"
NO_MATCHES_FOUND = "No matches found."

_TRUTH_LITERAL = re.compile(r"^<\s*([^,<>\s]+)\s*,\s*([^,<>\s]+)\s*>$")


def _tokenize(source: Union[str, Sequence[str]]) -> list[str]:
    """Split text on whitespace, or copy an already tokenized sequence."""
    if isinstance(source, str):
        return source.split()
    return list(source)


class Copula(str, Enum):
    """Relation kinds linking two terms."""

    INHERITANCE = "->"
    SIMILARITY = "<->"

    @classmethod
    def parse(cls, symbol: str) -> "Copula":
        """Resolve a copula from its word or arrow form ("is", "->", "similar", "<->")."""
        try:
            return _COPULA_SYMBOLS[symbol]
        except KeyError:
            raise InvalidCopulaError(symbol) from None

    def __str__(self) -> str:
        return self.value


_COPULA_SYMBOLS: dict[str, Copula] = {
    "is": Copula.INHERITANCE,
    "->": Copula.INHERITANCE,
    "similar": Copula.SIMILARITY,
    "<->": Copula.SIMILARITY,
}


class Wildcard(str, Enum):
    """The query placeholder standing for any term."""

    QUESTION = WILDCARD_SYMBOL

    def __str__(self) -> str:
        return self.value


class Term(BaseModel):
    """
    An atomic or compound-named concept.

    Compound terms built by the set-operation rules, e.g. "(a&b)", are opaque:
    nothing decomposes them again.

    Attributes:
        word: The term text (non-empty, no whitespace, not "?")
    """

    model_config = ConfigDict(frozen=True)

    word: str

    def __init__(self, word: Optional[str] = None, **data: Any) -> None:
        """Allow the word to be passed positionally."""
        if word is not None:
            data["word"] = word
        super().__init__(**data)

    @field_validator("word")
    @classmethod
    def _check_word(cls, word: str) -> str:
        if word == "":
            raise InvalidTermError(word, "Term can't be empty")
        if any(ch.isspace() for ch in word):
            raise InvalidTermError(word, "Term can't contain whitespaces")
        if word == WILDCARD_SYMBOL:
            raise InvalidTermError(word, "Term can't be a question mark (?)")
        return word

    def __str__(self) -> str:
        return self.word

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Term):
            return NotImplemented
        return self.word < other.word


def _as_term(value: Any) -> Any:
    return Term(value) if isinstance(value, str) else value


def _as_copula(value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, Copula):
        return Copula.parse(value)
    return value


class Statement(BaseModel):
    """
    A (left, copula, right) triple relating two terms.

    Example:
        >>> Statement.parse("robin is bird")
        Statement(left=Term(word='robin'), copula=<Copula.INHERITANCE: '->'>, ...)
        >>> str(Statement("robin", "is", "bird"))
        'robin -> bird'
    """

    model_config = ConfigDict(frozen=True)

    left: Term
    copula: Copula
    right: Term

    def __init__(
        self,
        left: Optional[Union[str, Term]] = None,
        copula: Optional[Union[str, Copula]] = None,
        right: Optional[Union[str, Term]] = None,
        **data: Any,
    ) -> None:
        """Allow positional arguments, with plain strings for terms and copula."""
        if left is not None:
            data["left"] = _as_term(left)
        if copula is not None:
            data["copula"] = _as_copula(copula)
        if right is not None:
            data["right"] = _as_term(right)
        super().__init__(**data)

    @classmethod
    def parse(cls, text: str) -> "Statement":
        """Parse "<term> <copula> <term>" text."""
        return cls.from_tokens(_tokenize(text))

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> "Statement":
        """Build a statement from exactly three tokens."""
        tokens = _tokenize(tokens)
        if len(tokens) != 3:
            raise InvalidStatementError(" ".join(tokens))
        return cls(Term(tokens[0]), Copula.parse(tokens[1]), Term(tokens[2]))

    @property
    def terms(self) -> tuple[Term, Term]:
        """Both operand terms, left first."""
        return (self.left, self.right)

    @property
    def is_inheritance(self) -> bool:
        return self.copula is Copula.INHERITANCE

    @property
    def is_similarity(self) -> bool:
        return self.copula is Copula.SIMILARITY

    def same_terms(self, other: "Statement") -> bool:
        """Check whether both statements relate the same left and right terms."""
        return self.left == other.left and self.right == other.right

    def __str__(self) -> str:
        return f"{self.left} {self.copula} {self.right}"


class TruthValue(BaseModel):
    """
    Evidence-based truth of a judgment.

    Attributes:
        frequency: Proportion of positive evidence, in [0, 1]
        confidence: Amount of evidence relative to the horizon, in [0, 1)

    Displayed with two decimals; full precision is kept internally.
    """

    model_config = ConfigDict(frozen=True)

    frequency: float
    confidence: float

    def __init__(
        self,
        frequency: Optional[float] = None,
        confidence: Optional[float] = None,
        **data: Any,
    ) -> None:
        """Allow positional arguments for frequency and confidence."""
        if frequency is not None:
            data["frequency"] = frequency
        if confidence is not None:
            data["confidence"] = confidence
        super().__init__(**data)

    @model_validator(mode="after")
    def _check_range(self) -> "TruthValue":
        f, c = self.frequency, self.confidence
        if math.isnan(f) or not 0.0 <= f <= 1.0:
            raise InvalidTruthValueError(
                f"<{f}, {c}>", "frequency must be between 0 and 1"
            )
        if math.isnan(c) or not 0.0 <= c < 1.0:
            raise InvalidTruthValueError(
                f"<{f}, {c}>", "confidence must be at least 0 and below 1"
            )
        return self

    @classmethod
    def parse(cls, text: str) -> "TruthValue":
        """Parse a "<freq, conf>" literal."""
        match = _TRUTH_LITERAL.match(text.strip())
        if match is None:
            raise InvalidTruthValueError(text, "expected <frequency, confidence>")
        try:
            frequency = float(match.group(1))
            confidence = float(match.group(2))
        except ValueError:
            raise InvalidTruthValueError(text, "components must be numbers") from None
        return cls(frequency, confidence)

    @classmethod
    def default(cls) -> "TruthValue":
        """Truth value of an assertion made without explicit evidence."""
        truth = get_config().truth
        return cls(truth.default_frequency, truth.default_confidence)

    @classmethod
    def ignorance(cls) -> "TruthValue":
        """Truth value reported when a formula has no evidence at all."""
        return cls(get_config().truth.ignorance_frequency, 0.0)

    @property
    def expectation(self) -> float:
        """Expected frequency of future evidence: c * (f - 0.5) + 0.5."""
        return self.confidence * (self.frequency - 0.5) + 0.5

    def as_tuple(self) -> tuple[float, float]:
        return (self.frequency, self.confidence)

    def __str__(self) -> str:
        return f"<{self.frequency:.2f}, {self.confidence:.2f}>"


QueryTerm = Union[Term, Wildcard]


class Query(BaseModel):
    """
    A statement pattern where at most one side may be the wildcard "?".

    Example:
        >>> str(Query.parse("? is bird"))
        '? -> bird'
    """

    model_config = ConfigDict(frozen=True)

    left: QueryTerm
    copula: Copula
    right: QueryTerm

    def __init__(
        self,
        left: Optional[Union[str, QueryTerm]] = None,
        copula: Optional[Union[str, Copula]] = None,
        right: Optional[Union[str, QueryTerm]] = None,
        **data: Any,
    ) -> None:
        """Allow positional arguments; the string "?" becomes the wildcard."""
        if left is not None:
            data["left"] = _as_query_term(left)
        if copula is not None:
            data["copula"] = _as_copula(copula)
        if right is not None:
            data["right"] = _as_query_term(right)
        super().__init__(**data)

    @model_validator(mode="after")
    def _check_wildcards(self) -> "Query":
        if self.left is Wildcard.QUESTION and self.right is Wildcard.QUESTION:
            raise InvalidQueryError(
                f"{self.left} {self.copula} {self.right}",
                "Invalid query: At most one side can be a wildcard (?)",
            )
        return self

    @classmethod
    def parse(cls, text: str) -> "Query":
        """Parse "<term|?> <copula> <term|?>" text."""
        return cls.from_tokens(_tokenize(text))

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> "Query":
        """Build a query from exactly three tokens."""
        tokens = _tokenize(tokens)
        if len(tokens) != 3:
            raise InvalidQueryError(" ".join(tokens))
        return cls(tokens[0], tokens[1], tokens[2])

    @property
    def is_open(self) -> bool:
        """True when one side is the wildcard."""
        return self.left is Wildcard.QUESTION or self.right is Wildcard.QUESTION

    def matches(self, stmt: Statement) -> bool:
        """
        Check a stored statement against the concrete sides of this pattern.

        Only the terms are compared; the copula of the pattern does not filter.
        """
        if self.left is not Wildcard.QUESTION and stmt.left != self.left:
            return False
        if self.right is not Wildcard.QUESTION and stmt.right != self.right:
            return False
        return True

    def to_statement(self) -> Statement:
        """Candidate statement of a closed query."""
        if self.is_open:
            raise InvalidQueryError(str(self), "Invalid query: wildcard has no statement")
        return Statement(self.left, self.copula, self.right)

    def __str__(self) -> str:
        return f"{self.left} {self.copula} {self.right}"


def _as_query_term(value: Any) -> Any:
    if isinstance(value, Wildcard):
        return value
    if isinstance(value, str):
        return Wildcard.QUESTION if value == WILDCARD_SYMBOL else Term(value)
    return value


class ExperienceElement(BaseModel):
    """
    A judgment stored in the experience base.

    Attributes:
        id: Unique positive identifier assigned by the base
        stmt: The statement judged
        truth_value: Evidence for the statement
        created_at: When the judgment entered the base
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    stmt: Statement
    truth_value: TruthValue = Field(default_factory=TruthValue.default)
    created_at: datetime = Field(default_factory=datetime.now)

    def to_text(self) -> str:
        """Render as "{id}: {stmt} {truth_value}"."""
        return f"{self.id}: {self.stmt} {self.truth_value}"

    def __str__(self) -> str:
        return self.to_text()


class QueryStatus(str, Enum):
    """How a query was answered."""

    MATCHED = "matched"  # A stored experience matched the pattern
    DERIVED = "derived"  # Truth computed from extension/intension overlap
    NO_MATCH = "no_match"  # Open query without any matching experience


@dataclass
class QueryAnswer:
    """
    The result of evaluating a query against an experience base.

    Attributes:
        query: The evaluated query
        status: How the answer was obtained
        element: The matching experience (MATCHED only)
        statement: The answered statement (MATCHED and DERIVED)
        truth_value: Stored or derived truth (MATCHED and DERIVED)
        positive_evidence: Overlap count behind a derived truth
        negative_evidence: Difference count behind a derived truth
    """

    query: Query
    status: QueryStatus
    element: Optional[ExperienceElement] = None
    statement: Optional[Statement] = None
    truth_value: Optional[TruthValue] = None
    positive_evidence: int = 0
    negative_evidence: int = 0

    @property
    def found(self) -> bool:
        return self.status != QueryStatus.NO_MATCH

    def to_text(self) -> str:
        """Render the stored line, the derived judgment, or the no-match sentinel."""
        if self.status == QueryStatus.MATCHED and self.element is not None:
            return self.element.to_text()
        if self.status == QueryStatus.DERIVED:
            return f"{self.statement} {self.truth_value}"
        return NO_MATCHES_FOUND

    def __str__(self) -> str:
        return self.to_text()


@dataclass
class InferenceResult:
    """
    The outcome of running one inference rule.

    Attributes:
        rule: Name of the rule that produced the conclusion
        antecedents: The premise experiences, in operand order
        statement: The concluded statement
        truth_value: Truth of the conclusion
        committed: The new experience when the result was applied to the base
    """

    rule: str
    antecedents: list[ExperienceElement] = field(default_factory=list)
    statement: Optional[Statement] = None
    truth_value: Optional[TruthValue] = None
    committed: Optional[ExperienceElement] = None

    @property
    def is_committed(self) -> bool:
        return self.committed is not None

    def to_text(self) -> str:
        """Render antecedent lines followed by "RESULT: {stmt} {truth}"."""
        lines = [element.to_text() for element in self.antecedents]
        lines.append(f"RESULT: {self.statement} {self.truth_value}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_text()
