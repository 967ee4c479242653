"""
Custom exceptions for the NAL-Engine framework.

Provides a hierarchy of exceptions for different error scenarios,
enabling precise error handling. Every failure carries a human-readable
message that host loops can surface verbatim.
"""

from __future__ import annotations

from typing import Any


class NALError(Exception):
    """Base exception for all NAL-Engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# Parse Exceptions
class ParseError(NALError):
    """Base exception for malformed input."""

    pass


class InvalidTermError(ParseError):
    """Raised when a term text is empty, contains whitespace or is the wildcard."""

    def __init__(self, word: str, reason: str) -> None:
        super().__init__(reason, {"word": word})
        self.word = word


class InvalidCopulaError(ParseError):
    """Raised when a copula symbol is unknown."""

    def __init__(self, symbol: str) -> None:
        super().__init__("Invalid copula", {"symbol": symbol})
        self.symbol = symbol


class InvalidStatementError(ParseError):
    """Raised when a statement does not have the <term> <copula> <term> shape."""

    def __init__(self, text: str) -> None:
        message = "Invalid statement: Expected <term> <copula> <term>"
        super().__init__(message, {"text": text[:200]})


class InvalidQueryError(ParseError):
    """Raised when a query is malformed or wildcards both sides."""

    def __init__(self, text: str, reason: str = "") -> None:
        message = reason or "Invalid query: Expected <term / ?> <copula> <term / ?>"
        super().__init__(message, {"text": text[:200]})


class InvalidTruthValueError(ParseError):
    """Raised when a truth value literal or component is out of range."""

    def __init__(self, text: str, reason: str = "") -> None:
        message = "Invalid truth value"
        if reason:
            message += f": {reason}"
        super().__init__(message, {"text": text[:200], "reason": reason})


class InvalidInstructionError(ParseError):
    """Raised when an inference rule name is unknown."""

    def __init__(self, name: str) -> None:
        super().__init__("Invalid inference instruction", {"name": name})
        self.name = name


class InvalidArgumentsError(ParseError):
    """Raised when inference operand ids are missing or not integers."""

    def __init__(self, rule: str, expected: str) -> None:
        message = f"Invalid inference instruction: Expected {expected}"
        super().__init__(message, {"rule": rule, "expected": expected})


class InvalidCommandError(ParseError):
    """Raised when a session command has malformed arguments."""

    def __init__(self, command: str, usage: str) -> None:
        super().__init__(f"Invalid command: Expected {command} {usage}", {"command": command})
        self.command = command


# Experience Base Exceptions
class ExperienceBaseError(NALError):
    """Base exception for experience base errors."""

    pass


class ExperienceNotFoundError(ExperienceBaseError):
    """Raised when an experience id is not present in the base."""

    def __init__(self, experience_id: int, base_name: str = "") -> None:
        message = f"Experience {experience_id} not found"
        if base_name:
            message += f" in {base_name}"
        message += "."
        super().__init__(message, {"experience_id": experience_id, "base_name": base_name})
        self.experience_id = experience_id


# Inference Exceptions
class InferenceError(NALError):
    """Base exception for inference rule errors."""

    pass


class OperandNotFoundError(InferenceError):
    """Raised when a rule operand id does not resolve to an experience."""

    def __init__(self, experience_id: int, position: int = 1) -> None:
        message = f"Experience {position} not found."
        super().__init__(message, {"experience_id": experience_id, "position": position})
        self.experience_id = experience_id
        self.position = position


class RuleNotApplicableError(InferenceError):
    """Raised when the structural precondition of a rule fails."""

    def __init__(self, rule: str, reason: str = "") -> None:
        message = f"{rule.capitalize()} not possible."
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"rule": rule, "reason": reason})
        self.rule = rule


class UndecidableChoiceError(InferenceError):
    """Raised when the choice rule cannot prefer either operand."""

    pass


class EqualExperiencesError(UndecidableChoiceError):
    """Raised when two judgments of the same statement tie exactly."""

    def __init__(self, id1: int, id2: int) -> None:
        super().__init__("Equal experiences.", {"ids": (id1, id2)})


class EqualExpectationsError(UndecidableChoiceError):
    """Raised when two different statements have the same expectation."""

    def __init__(self, id1: int, id2: int, expectation: float) -> None:
        super().__init__(
            "Equal expectations.", {"ids": (id1, id2), "expectation": expectation}
        )


# Configuration Exceptions
class ConfigurationError(NALError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration value is invalid."""

    def __init__(self, config_key: str, value: Any, reason: str = "") -> None:
        message = f"Invalid configuration for '{config_key}': {value}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"config_key": config_key, "value": value, "reason": reason})
