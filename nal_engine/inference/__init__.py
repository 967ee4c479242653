"""
Inference rules, instruction parsing and the execution engine.
"""

from nal_engine.inference.engine import InferenceEngine
from nal_engine.inference.instruction import InferenceInstruction, resolve_rule
from nal_engine.inference.rules import RULE_CATALOGUE, InferenceRule, RuleSpec

__all__ = [
    "InferenceEngine",
    "InferenceInstruction",
    "resolve_rule",
    "InferenceRule",
    "RuleSpec",
    "RULE_CATALOGUE",
]
