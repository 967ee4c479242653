"""
Core abstractions for NAL-Engine.
"""

from nal_engine.core.config import (
    Config,
    ExperienceConfig,
    LoggingConfig,
    TruthConfig,
    get_config,
    set_config,
)
from nal_engine.core.exceptions import (
    ConfigurationError,
    EqualExpectationsError,
    EqualExperiencesError,
    ExperienceBaseError,
    ExperienceNotFoundError,
    InferenceError,
    InvalidArgumentsError,
    InvalidCommandError,
    InvalidConfigError,
    InvalidCopulaError,
    InvalidInstructionError,
    InvalidQueryError,
    InvalidStatementError,
    InvalidTermError,
    InvalidTruthValueError,
    NALError,
    OperandNotFoundError,
    ParseError,
    RuleNotApplicableError,
    UndecidableChoiceError,
)
from nal_engine.core.types import (
    NO_MATCHES_FOUND,
    WILDCARD_SYMBOL,
    Copula,
    ExperienceElement,
    InferenceResult,
    Query,
    QueryAnswer,
    QueryStatus,
    QueryTerm,
    Statement,
    Term,
    TruthValue,
    Wildcard,
)

__all__ = [
    # Types
    "Term",
    "Copula",
    "Wildcard",
    "Statement",
    "TruthValue",
    "Query",
    "QueryTerm",
    "ExperienceElement",
    "QueryStatus",
    "QueryAnswer",
    "InferenceResult",
    "WILDCARD_SYMBOL",
    "NO_MATCHES_FOUND",
    # Config
    "Config",
    "TruthConfig",
    "ExperienceConfig",
    "LoggingConfig",
    "get_config",
    "set_config",
    # Exceptions
    "NALError",
    "ParseError",
    "InvalidTermError",
    "InvalidCopulaError",
    "InvalidStatementError",
    "InvalidQueryError",
    "InvalidTruthValueError",
    "InvalidInstructionError",
    "InvalidArgumentsError",
    "InvalidCommandError",
    "ExperienceBaseError",
    "ExperienceNotFoundError",
    "InferenceError",
    "OperandNotFoundError",
    "RuleNotApplicableError",
    "UndecidableChoiceError",
    "EqualExperiencesError",
    "EqualExpectationsError",
    "ConfigurationError",
    "InvalidConfigError",
]
