"""
Execution of inference instructions against an experience base.
"""

from __future__ import annotations

import logging
from typing import Union

from nal_engine.core.types import ExperienceElement, InferenceResult
from nal_engine.experience.base import BaseExperienceBase
from nal_engine.inference.instruction import InferenceInstruction

logger = logging.getLogger(__name__)


class InferenceEngine:
    """
    Runs inference rules over an experience base.

    evaluate() only computes; apply() also stores the conclusion under the
    next free id, after the rule has finished without error.

    Example:
        >>> base = ExperienceBase.from_statements(["robin is bird", "bird is animal"])
        >>> engine = InferenceEngine(base)
        >>> print(engine.apply("ded 1 2"))
        1: robin -> bird <1.00, 0.99>
        2: bird -> animal <1.00, 0.99>
        RESULT: robin -> animal <1.00, 0.98>
    """

    def __init__(self, base: BaseExperienceBase) -> None:
        self.base = base

    def _run(self, instruction: Union[InferenceInstruction, str]) -> InferenceResult:
        if isinstance(instruction, str):
            instruction = InferenceInstruction.parse(instruction)

        spec = instruction.spec
        stmt, truth_value = spec.function(self.base, *instruction.ids)
        # Operands resolved inside the rule, so these lookups succeed
        antecedents = [self.base.get(experience_id) for experience_id in instruction.ids]

        logger.debug(f"{instruction} concluded {stmt} {truth_value}")
        return InferenceResult(
            rule=spec.rule.value,
            antecedents=antecedents,
            statement=stmt,
            truth_value=truth_value,
        )

    def evaluate(self, instruction: Union[InferenceInstruction, str]) -> InferenceResult:
        """
        Compute a conclusion without changing the base.

        Args:
            instruction: Parsed instruction or text such as "ded 1 2"

        Raises:
            ParseError: Malformed instruction text
            InferenceError: Missing operand or rule not applicable
        """
        return self._run(instruction)

    def apply(self, instruction: Union[InferenceInstruction, str]) -> InferenceResult:
        """Compute a conclusion and append it to the base."""
        result = self._run(instruction)
        element = ExperienceElement(
            id=self.base.get_next_id(),
            stmt=result.statement,
            truth_value=result.truth_value,
        )
        self.base.add(element)
        result.committed = element

        logger.info(f"Applied {result.rule}: {element.to_text()}")
        return result
