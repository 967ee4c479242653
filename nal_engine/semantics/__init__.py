"""
Semantics of NAL terms and judgments.

Provides:
- Extension/intension closures
- Truth functions for the inference rules
- Query evaluation with closure-derived fallback
"""

from nal_engine.semantics import truth
from nal_engine.semantics.meaning import extension, intension
from nal_engine.semantics.query import count_evidence, evaluate_query

__all__ = [
    "truth",
    "extension",
    "intension",
    "count_evidence",
    "evaluate_query",
]
