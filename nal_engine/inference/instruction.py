"""
Parsing of inference instructions such as "ded 1 2" or "conversion 3".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from nal_engine.core.exceptions import InvalidArgumentsError, InvalidInstructionError
from nal_engine.core.types import _tokenize
from nal_engine.inference.rules import RULE_CATALOGUE, InferenceRule, RuleSpec

_RULE_NAMES: dict[str, InferenceRule] = {
    alias: spec.rule for spec in RULE_CATALOGUE.values() for alias in spec.aliases
}


def resolve_rule(name: str) -> InferenceRule:
    """
    Resolve a rule name or abbreviation (case-insensitive).

    Raises:
        InvalidInstructionError: Unknown rule name
    """
    try:
        return _RULE_NAMES[name.lower()]
    except KeyError:
        raise InvalidInstructionError(name) from None


def _parse_id(token: str, spec: RuleSpec) -> int:
    if not (token.isascii() and token.isdigit()):
        raise InvalidArgumentsError(spec.rule.value, spec.usage)
    return int(token)


@dataclass(frozen=True)
class InferenceInstruction:
    """A rule together with its operand ids."""

    rule: InferenceRule
    ids: tuple[int, ...]

    @property
    def spec(self) -> RuleSpec:
        return RULE_CATALOGUE[self.rule]

    @classmethod
    def parse(cls, source: Union[str, Sequence[str]]) -> InferenceInstruction:
        """
        Parse an instruction from text or pre-split tokens.

        The first token names the rule; the rest must be exactly as many
        non-negative decimal ids as the rule takes.

        Raises:
            InvalidInstructionError: Empty input or unknown rule name
            InvalidArgumentsError: Wrong number of ids or a non-integer id
        """
        tokens = _tokenize(source) if isinstance(source, str) else list(source)
        if not tokens:
            raise InvalidInstructionError("")

        rule = resolve_rule(tokens[0])
        spec = RULE_CATALOGUE[rule]
        arguments = tokens[1:]
        if len(arguments) != spec.arity:
            raise InvalidArgumentsError(rule.value, spec.usage)

        return cls(rule=rule, ids=tuple(_parse_id(token, spec) for token in arguments))

    def __str__(self) -> str:
        return " ".join([self.rule.value, *map(str, self.ids)])
