"""
The NAL inference rule catalogue.

Every rule is a pure function of an experience base and one or two operand
ids. It checks the structural precondition, builds the concluded statement and
delegates the numbers to nal_engine.semantics.truth. Nothing here mutates the
base.

Rule table (f1/c1 from the first operand, f2/c2 from the second):

    deduction        M->P, S->M   |- S->P
    induction        M->P, M->S   |- S->P
    abduction        P->M, S->M   |- S->P
    exemplification  P->M, M->S   |- S->P
    conversion       P->S         |- S->P
    comparison       M->P, M->S   |- S<->P
    analogy          M->P, S<->M  |- S->P (and three similarity variants)
    resemblance      M<->P, S<->M |- S<->P
    revision         S->P, S->P   |- S->P (merged evidence)
    choice/selection S->P, T->Q   |- the preferred premise
    union/intersection/difference over a shared predicate (extension)
        or a shared subject (intension)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from nal_engine.core.exceptions import (
    EqualExpectationsError,
    EqualExperiencesError,
    OperandNotFoundError,
    RuleNotApplicableError,
)
from nal_engine.core.types import Copula, ExperienceElement, Statement, Term, TruthValue
from nal_engine.experience.base import BaseExperienceBase
from nal_engine.semantics import truth

Conclusion = tuple[Statement, TruthValue]


class InferenceRule(str, Enum):
    """The fixed set of inference rules."""

    REVISION = "revision"
    CHOICE = "choice"
    SELECTION = "selection"
    DEDUCTION = "deduction"
    INDUCTION = "induction"
    EXEMPLIFICATION = "exemplification"
    ABDUCTION = "abduction"
    CONVERSION = "conversion"
    COMPARISON = "comparison"
    ANALOGY = "analogy"
    RESEMBLANCE = "resemblance"
    UNION_EXTENSION = "union_extension"
    UNION_INTENSION = "union_intension"
    INTERSECTION_EXTENSION = "intersection_extension"
    INTERSECTION_INTENSION = "intersection_intension"
    DIFFERENCE_EXTENSION = "difference_extension"
    DIFFERENCE_INTENSION = "difference_intension"

    def __str__(self) -> str:
        return self.value


def _operand(base: BaseExperienceBase, experience_id: int, position: int) -> ExperienceElement:
    element = base.find(experience_id)
    if element is None:
        raise OperandNotFoundError(experience_id, position)
    return element


def _operands(
    base: BaseExperienceBase, id1: int, id2: int
) -> tuple[ExperienceElement, ExperienceElement]:
    return _operand(base, id1, 1), _operand(base, id2, 2)


def _require_inheritance(rule: InferenceRule, *elements: ExperienceElement) -> None:
    if any(not e.stmt.is_inheritance for e in elements):
        raise RuleNotApplicableError(rule.value)


def _inheritance(left: Term, right: Term) -> Statement:
    return Statement(left, Copula.INHERITANCE, right)


def _similarity(left: Term, right: Term) -> Statement:
    return Statement(left, Copula.SIMILARITY, right)


# Local inference


def revision(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    """Pool the evidence of two judgments about the same terms."""
    exp1, exp2 = _operands(base, id1, id2)
    if not exp1.stmt.same_terms(exp2.stmt):
        raise RuleNotApplicableError(InferenceRule.REVISION.value)
    return exp1.stmt, truth.revision(exp1.truth_value, exp2.truth_value)


def choice(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    """
    Pick the better of two judgments, returned verbatim.

    Judgments about the same terms are ranked by confidence, then frequency.
    Judgments about different statements are ranked by expectation.

    Raises:
        EqualExperiencesError: Same terms and identical truth values
        EqualExpectationsError: Different statements with equal expectation
    """
    exp1, exp2 = _operands(base, id1, id2)
    t1, t2 = exp1.truth_value, exp2.truth_value

    if exp1.stmt.same_terms(exp2.stmt):
        for a, b in ((t1.confidence, t2.confidence), (t1.frequency, t2.frequency)):
            if a > b:
                return exp1.stmt, t1
            if a < b:
                return exp2.stmt, t2
        raise EqualExperiencesError(id1, id2)

    if t1.expectation > t2.expectation:
        return exp1.stmt, t1
    if t1.expectation < t2.expectation:
        return exp2.stmt, t2
    raise EqualExpectationsError(id1, id2, t1.expectation)


def selection(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    """Same ranking as choice, under its own instruction name."""
    return choice(base, id1, id2)


# Syllogistic rules for inheritance


def deduction(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    """Chain two inheritances sharing a middle term, in either operand order."""
    exp1, exp2 = _operands(base, id1, id2)
    _require_inheritance(InferenceRule.DEDUCTION, exp1, exp2)
    s1, s2 = exp1.stmt, exp2.stmt

    if s1.right == s2.left:
        stmt = _inheritance(s1.left, s2.right)
    elif s2.right == s1.left:
        stmt = _inheritance(s2.left, s1.right)
    else:
        raise RuleNotApplicableError(InferenceRule.DEDUCTION.value)
    return stmt, truth.deduction(exp1.truth_value, exp2.truth_value)


def induction(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    exp1, exp2 = _operands(base, id1, id2)
    _require_inheritance(InferenceRule.INDUCTION, exp1, exp2)
    if exp1.stmt.left != exp2.stmt.left:
        raise RuleNotApplicableError(InferenceRule.INDUCTION.value)
    stmt = _inheritance(exp2.stmt.right, exp1.stmt.right)
    return stmt, truth.induction(exp1.truth_value, exp2.truth_value)


def abduction(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    exp1, exp2 = _operands(base, id1, id2)
    _require_inheritance(InferenceRule.ABDUCTION, exp1, exp2)
    if exp1.stmt.right != exp2.stmt.right:
        raise RuleNotApplicableError(InferenceRule.ABDUCTION.value)
    stmt = _inheritance(exp2.stmt.left, exp1.stmt.left)
    return stmt, truth.abduction(exp1.truth_value, exp2.truth_value)


def exemplification(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    """Reverse a two-step chain: P->M, M->S gives S->P."""
    exp1, exp2 = _operands(base, id1, id2)
    _require_inheritance(InferenceRule.EXEMPLIFICATION, exp1, exp2)
    s1, s2 = exp1.stmt, exp2.stmt

    if s1.right == s2.left:
        stmt = _inheritance(s2.right, s1.left)
    elif s1.left == s2.right:
        stmt = _inheritance(s1.right, s2.left)
    else:
        raise RuleNotApplicableError(InferenceRule.EXEMPLIFICATION.value)
    return stmt, truth.exemplification(exp1.truth_value, exp2.truth_value)


def conversion(base: BaseExperienceBase, id1: int) -> Conclusion:
    exp = _operand(base, id1, 1)
    _require_inheritance(InferenceRule.CONVERSION, exp)
    return _inheritance(exp.stmt.right, exp.stmt.left), truth.conversion(exp.truth_value)


# Rules producing or consuming similarity


def comparison(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    exp1, exp2 = _operands(base, id1, id2)
    _require_inheritance(InferenceRule.COMPARISON, exp1, exp2)
    if exp1.stmt.left != exp2.stmt.left:
        raise RuleNotApplicableError(InferenceRule.COMPARISON.value)
    stmt = _similarity(exp2.stmt.right, exp1.stmt.right)
    return stmt, truth.comparison(exp1.truth_value, exp2.truth_value)


def analogy(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    """
    Carry an inheritance across a similarity sharing its subject.

    One operand must be an inheritance and the other a similarity, in either
    order. The truth always takes f1/c1 from the inheritance and f2/c2 from
    the similarity.
    """
    exp1, exp2 = _operands(base, id1, id2)
    s1, s2 = exp1.stmt, exp2.stmt

    if s1.is_inheritance and s2.is_similarity:
        inh, sim = s1, s2
        t = truth.analogy(exp1.truth_value, exp2.truth_value)
        if inh.left == sim.left:
            return _inheritance(sim.right, inh.right), t
        if inh.left == sim.right:
            return _similarity(sim.left, inh.right), t
    elif s1.is_similarity and s2.is_inheritance:
        sim, inh = s1, s2
        t = truth.analogy(exp2.truth_value, exp1.truth_value)
        if inh.left == sim.left:
            return _similarity(sim.right, inh.right), t
        if inh.left == sim.right:
            return _similarity(sim.left, inh.right), t

    raise RuleNotApplicableError(InferenceRule.ANALOGY.value)


def resemblance(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    """Chain two similarities sharing one term into a similarity of the other two."""
    exp1, exp2 = _operands(base, id1, id2)
    s1, s2 = exp1.stmt, exp2.stmt
    if not (s1.is_similarity and s2.is_similarity):
        raise RuleNotApplicableError(InferenceRule.RESEMBLANCE.value)

    stmt: Optional[Statement] = None
    if s1.right == s2.left:
        stmt = _similarity(s1.left, s2.right)
    elif s1.left == s2.right:
        stmt = _similarity(s2.left, s1.right)
    elif s1.left == s2.left:
        stmt = _similarity(s2.right, s1.right)
    elif s1.right == s2.right:
        stmt = _similarity(s2.left, s1.left)

    if stmt is None:
        raise RuleNotApplicableError(InferenceRule.RESEMBLANCE.value)
    if stmt.left == stmt.right:
        raise RuleNotApplicableError(InferenceRule.RESEMBLANCE.value, "premises share both terms")
    return stmt, truth.resemblance(exp1.truth_value, exp2.truth_value)


# Compound term composition


def _compose(
    rule: InferenceRule,
    base: BaseExperienceBase,
    id1: int,
    id2: int,
    operator: str,
    truth_fn: Callable[[TruthValue, TruthValue], TruthValue],
    extensional: bool,
) -> Conclusion:
    """
    Build a compound term from the unshared sides of two inheritances.

    Extensional rules need a shared predicate and compose the subjects;
    intensional rules need a shared subject and compose the predicates.
    """
    exp1, exp2 = _operands(base, id1, id2)
    _require_inheritance(rule, exp1, exp2)
    s1, s2 = exp1.stmt, exp2.stmt

    if extensional:
        if s1.right != s2.right:
            raise RuleNotApplicableError(rule.value)
        compound = Term(f"({s1.left}{operator}{s2.left})")
        stmt = _inheritance(compound, s2.right)
    else:
        if s1.left != s2.left:
            raise RuleNotApplicableError(rule.value)
        compound = Term(f"({s1.right}{operator}{s2.right})")
        stmt = _inheritance(s1.left, compound)

    return stmt, truth_fn(exp1.truth_value, exp2.truth_value)


def union_extension(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    return _compose(
        InferenceRule.UNION_EXTENSION, base, id1, id2, "|", truth.intersection, extensional=True
    )


def union_intension(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    return _compose(
        InferenceRule.UNION_INTENSION, base, id1, id2, "|", truth.union, extensional=False
    )


def intersection_extension(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    return _compose(
        InferenceRule.INTERSECTION_EXTENSION, base, id1, id2, "&", truth.union, extensional=True
    )


def intersection_intension(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    return _compose(
        InferenceRule.INTERSECTION_INTENSION,
        base,
        id1,
        id2,
        "&",
        truth.intersection,
        extensional=False,
    )


def difference_extension(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    return _compose(
        InferenceRule.DIFFERENCE_EXTENSION, base, id1, id2, "-", truth.difference, extensional=True
    )


def difference_intension(base: BaseExperienceBase, id1: int, id2: int) -> Conclusion:
    return _compose(
        InferenceRule.DIFFERENCE_INTENSION, base, id1, id2, "-", truth.difference, extensional=False
    )


@dataclass
class RuleSpec:
    """
    Catalogue entry for one inference rule.

    Attributes:
        rule: The rule identifier
        function: The pure rule function
        arity: Number of operand ids (1 or 2)
        aliases: Accepted instruction names, full name first
        description: Short human-readable description
    """

    rule: InferenceRule
    function: Callable[..., Conclusion]
    arity: int = 2
    aliases: tuple[str, ...] = field(default_factory=tuple)
    description: str = ""

    @property
    def usage(self) -> str:
        """Operand placeholder text, e.g. "<id1> <id2>"."""
        return "<id>" if self.arity == 1 else "<id1> <id2>"

    def to_text(self) -> str:
        return f"{' | '.join(self.aliases)} {self.usage}: {self.description}"


RULE_CATALOGUE: dict[InferenceRule, RuleSpec] = {
    spec.rule: spec
    for spec in [
        RuleSpec(InferenceRule.REVISION, revision, 2, ("revision", "rev", "r"),
                 "merge two judgments of the same statement"),
        RuleSpec(InferenceRule.CHOICE, choice, 2, ("choice", "cho", "ch"),
                 "keep the better of two judgments"),
        RuleSpec(InferenceRule.SELECTION, selection, 2, ("selection", "sel", "s"),
                 "keep the better of two judgments"),
        RuleSpec(InferenceRule.DEDUCTION, deduction, 2, ("deduction", "ded", "d"),
                 "M->P, S->M |- S->P"),
        RuleSpec(InferenceRule.INDUCTION, induction, 2, ("induction", "ind", "i"),
                 "M->P, M->S |- S->P"),
        RuleSpec(InferenceRule.EXEMPLIFICATION, exemplification, 2, ("exemplification", "exe", "e"),
                 "P->M, M->S |- S->P"),
        RuleSpec(InferenceRule.ABDUCTION, abduction, 2, ("abduction", "abd", "a"),
                 "P->M, S->M |- S->P"),
        RuleSpec(InferenceRule.CONVERSION, conversion, 1, ("conversion", "cnv", "c"),
                 "P->S |- S->P"),
        RuleSpec(InferenceRule.COMPARISON, comparison, 2, ("comparison", "com"),
                 "M->P, M->S |- S<->P"),
        RuleSpec(InferenceRule.ANALOGY, analogy, 2, ("analogy", "ana"),
                 "M->P, S<->M |- S->P"),
        RuleSpec(InferenceRule.RESEMBLANCE, resemblance, 2, ("resemblance", "res"),
                 "M<->P, S<->M |- S<->P"),
        RuleSpec(InferenceRule.UNION_EXTENSION, union_extension, 2,
                 ("union_extension", "uext", "ue"), "S1->P, S2->P |- (S1|S2)->P"),
        RuleSpec(InferenceRule.UNION_INTENSION, union_intension, 2,
                 ("union_intension", "uint", "ui"), "S->P1, S->P2 |- S->(P1|P2)"),
        RuleSpec(InferenceRule.INTERSECTION_EXTENSION, intersection_extension, 2,
                 ("intersection_extension", "iext", "ie"), "S1->P, S2->P |- (S1&S2)->P"),
        RuleSpec(InferenceRule.INTERSECTION_INTENSION, intersection_intension, 2,
                 ("intersection_intension", "iint", "ii"), "S->P1, S->P2 |- S->(P1&P2)"),
        RuleSpec(InferenceRule.DIFFERENCE_EXTENSION, difference_extension, 2,
                 ("difference_extension", "dext", "de"), "S1->P, S2->P |- (S1-S2)->P"),
        RuleSpec(InferenceRule.DIFFERENCE_INTENSION, difference_intension, 2,
                 ("difference_intension", "dint", "di"), "S->P1, S->P2 |- S->(P1-P2)"),
    ]
}
