"""
Truth functions of the inference rules.

Pure numeric formulas mapping premise truth values to the truth value of a
conclusion, kept apart from the structural matching done by the rules.

Zero-evidence policy: whenever a formula would divide an empty evidence total
(0/0), the result is the ignorance truth value <ignorance_frequency, 0.00>
instead of NaN.
"""

from __future__ import annotations

import logging
from typing import Optional

from nal_engine.core.config import get_config
from nal_engine.core.types import TruthValue

logger = logging.getLogger(__name__)


def evidence_horizon() -> float:
    """The configured evidence horizon k."""
    return get_config().truth.evidence_horizon


def _truth(frequency: float, confidence: float) -> TruthValue:
    # Float noise can push a ratio a hair outside [0, 1]
    return TruthValue(min(1.0, max(0.0, frequency)), max(0.0, confidence))


def _ignorance(rule: str) -> TruthValue:
    logger.debug(f"No evidence for {rule}, using ignorance truth value")
    return TruthValue.ignorance()


def from_evidence(
    positive: float,
    negative: float,
    k: Optional[float] = None,
    rule: str = "evidence",
) -> TruthValue:
    """
    Convert evidence amounts to a truth value.

    frequency = w+ / (w+ + w-), confidence = (w+ + w-) / (w+ + w- + k)
    """
    k = evidence_horizon() if k is None else k
    total = positive + negative
    if total <= 0:
        return _ignorance(rule)
    return _truth(positive / total, total / (total + k))


def revision(t1: TruthValue, t2: TruthValue) -> TruthValue:
    """Merge two judgments of the same statement built on distinct evidence."""
    f1, c1 = t1.as_tuple()
    f2, c2 = t2.as_tuple()
    w1 = c1 * (1.0 - c2)
    w2 = c2 * (1.0 - c1)
    total = w1 + w2
    if total <= 0:
        return _ignorance("revision")
    frequency = (f1 * w1 + f2 * w2) / total
    confidence = total / (total + (1.0 - c1) * (1.0 - c2))
    return _truth(frequency, confidence)


def deduction(t1: TruthValue, t2: TruthValue) -> TruthValue:
    f1, c1 = t1.as_tuple()
    f2, c2 = t2.as_tuple()
    return _truth(f1 * f2, c1 * c2 * f1 * f2)


def induction(t1: TruthValue, t2: TruthValue) -> TruthValue:
    f1, c1 = t1.as_tuple()
    f2, c2 = t2.as_tuple()
    positive = f1 * f2 * c1 * c2
    negative = (1.0 - f1) * f2 * c1 * c2
    return from_evidence(positive, negative, rule="induction")


def abduction(t1: TruthValue, t2: TruthValue) -> TruthValue:
    f1, c1 = t1.as_tuple()
    f2, c2 = t2.as_tuple()
    positive = f1 * f2 * c1 * c2
    negative = (1.0 - f2) * f1 * c1 * c2
    return from_evidence(positive, negative, rule="abduction")


def exemplification(t1: TruthValue, t2: TruthValue) -> TruthValue:
    f1, c1 = t1.as_tuple()
    f2, c2 = t2.as_tuple()
    return from_evidence(f1 * f2 * c1 * c2, 0.0, rule="exemplification")


def conversion(t: TruthValue) -> TruthValue:
    f, c = t.as_tuple()
    return from_evidence(f * c, 0.0, rule="conversion")


def comparison(t1: TruthValue, t2: TruthValue) -> TruthValue:
    f1, c1 = t1.as_tuple()
    f2, c2 = t2.as_tuple()
    disjunction = f1 + f2 - f1 * f2
    if disjunction <= 0:
        return _ignorance("comparison")
    weight = c1 * c2 * disjunction
    return _truth(f1 * f2 / disjunction, weight / (weight + evidence_horizon()))


def analogy(inheritance: TruthValue, similarity: TruthValue) -> TruthValue:
    """Truth of an analogy; the similarity premise scales the confidence."""
    f1, c1 = inheritance.as_tuple()
    f2, c2 = similarity.as_tuple()
    return _truth(f1 * f2, f2 * c1 * c2)


def resemblance(t1: TruthValue, t2: TruthValue) -> TruthValue:
    f1, c1 = t1.as_tuple()
    f2, c2 = t2.as_tuple()
    return _truth(f1 * f2, c1 * c2 * (f1 + f2 - f1 * f2))


def intersection(t1: TruthValue, t2: TruthValue) -> TruthValue:
    """f1 * f2; used by union-extension and intersection-intension."""
    return _truth(t1.frequency * t2.frequency, t1.confidence * t2.confidence)


def union(t1: TruthValue, t2: TruthValue) -> TruthValue:
    """1 - (1 - f1)(1 - f2); used by intersection-extension and union-intension."""
    frequency = 1.0 - (1.0 - t1.frequency) * (1.0 - t2.frequency)
    return _truth(frequency, t1.confidence * t2.confidence)


def difference(t1: TruthValue, t2: TruthValue) -> TruthValue:
    """f1 * (1 - f2); used by both difference rules."""
    return _truth(t1.frequency * (1.0 - t2.frequency), t1.confidence * t2.confidence)
