"""
NAL-Engine: A Non-Axiomatic Logic Reasoning Engine

Stores judgments about terms with evidence-based truth values, answers
pattern queries, and derives new judgments with the NAL inference rules.

Example:
    >>> from nal_engine import ExperienceBase, InferenceEngine
    >>>
    >>> # Assert some experience
    >>> base = ExperienceBase.from_statements([
    ...     "robin is bird",
    ...     ("bird is animal", "<0.9, 0.9>"),
    ... ])
    >>>
    >>> # Ask a question
    >>> print(base.query("robin is ?"))
    1: robin -> bird <1.00, 0.99>
    >>>
    >>> # Reason!
    >>> result = InferenceEngine(base).apply("deduction 1 2")
    >>> print(result.committed)
    3: robin -> animal <0.90, 0.80>
"""

__version__ = "0.1.0"

# Core types
from nal_engine.core import (
    # Data types
    Term,
    Copula,
    Wildcard,
    Statement,
    TruthValue,
    Query,
    ExperienceElement,
    QueryStatus,
    QueryAnswer,
    InferenceResult,
    NO_MATCHES_FOUND,
    # Configuration
    Config,
    get_config,
    set_config,
    # Exceptions
    NALError,
    ParseError,
    ExperienceBaseError,
    ExperienceNotFoundError,
    InferenceError,
    OperandNotFoundError,
    RuleNotApplicableError,
    UndecidableChoiceError,
    ConfigurationError,
)

# Experience bases
from nal_engine.experience import (
    BaseExperienceBase,
    ExperienceBase,
)

# Semantics
from nal_engine.semantics import (
    truth,
    extension,
    intension,
    evaluate_query,
)

# Inference
from nal_engine.inference import (
    InferenceEngine,
    InferenceInstruction,
    InferenceRule,
    RULE_CATALOGUE,
)

# Host-loop boundary
from nal_engine.session import Session, SessionOutput

# Utilities
from nal_engine.utils import configure_logging

__all__ = [
    # Version
    "__version__",
    # Core types
    "Term",
    "Copula",
    "Wildcard",
    "Statement",
    "TruthValue",
    "Query",
    "ExperienceElement",
    "QueryStatus",
    "QueryAnswer",
    "InferenceResult",
    "NO_MATCHES_FOUND",
    # Configuration
    "Config",
    "get_config",
    "set_config",
    # Exceptions
    "NALError",
    "ParseError",
    "ExperienceBaseError",
    "ExperienceNotFoundError",
    "InferenceError",
    "OperandNotFoundError",
    "RuleNotApplicableError",
    "UndecidableChoiceError",
    "ConfigurationError",
    # Experience bases
    "BaseExperienceBase",
    "ExperienceBase",
    # Semantics
    "truth",
    "extension",
    "intension",
    "evaluate_query",
    # Inference
    "InferenceEngine",
    "InferenceInstruction",
    "InferenceRule",
    "RULE_CATALOGUE",
    # Session
    "Session",
    "SessionOutput",
    # Utilities
    "configure_logging",
]
