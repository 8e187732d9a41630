"""
Decision table components: contracts and the evaluator.
"""
from decision_table.components.contracts import (
    ClassificationResult,
    ErrorMessage,
    InputRecord,
    Outcome,
    RuleSet,
)
from decision_table.components.evaluator import (
    EvaluationError,
    MissingFieldError,
    classify,
    compute_value,
    evaluate,
)

__all__ = [
    "ClassificationResult",
    "ErrorMessage",
    "EvaluationError",
    "InputRecord",
    "MissingFieldError",
    "Outcome",
    "RuleSet",
    "classify",
    "compute_value",
    "evaluate",
]
