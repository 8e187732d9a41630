"""
Decision table evaluator.

Evaluation runs in two stages:

1. classify the (a, b, c) triple under the active rule set into an Outcome;
2. compute the value formula bound to the (outcome, rule set) pair.

An Error outcome is a normal result and short-circuits stage 2. A numeric
field required by the selected formula that is absent raises
MissingFieldError instead.
"""
from typing import Callable, Dict, Optional, Tuple

from decision_table.components.contracts import (
    ClassificationResult,
    InputRecord,
    Outcome,
    RuleSet,
)
from decision_table.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)

Triple = Tuple[bool, bool, bool]
Formula = Callable[[float, Optional[float], Optional[float]], float]


class EvaluationError(Exception):
    """Base class for hard evaluation failures"""


class MissingFieldError(EvaluationError):
    """A field required by the selected formula is absent"""

    def __init__(self, field: str, outcome: Outcome, rule_set: RuleSet):
        self.field = field
        self.outcome = outcome
        self.rule_set = rule_set
        super().__init__(f"Missing required field: {field}")


_BASE_TABLE: Dict[Triple, Outcome] = {
    (True, True, False): Outcome.M,
    (True, True, True): Outcome.P,
    (False, True, True): Outcome.T,
}

_VARIANT2_TABLE: Dict[Triple, Outcome] = {
    **_BASE_TABLE,
    (True, False, True): Outcome.M,
}

CLASSIFICATION_TABLES: Dict[RuleSet, Dict[Triple, Outcome]] = {
    RuleSet.BASE: _BASE_TABLE,
    RuleSet.VARIANT1: _BASE_TABLE,
    RuleSet.VARIANT2: _VARIANT2_TABLE,
}


def _m_base(d, e, f):
    return d + (d * e / 10.0)


def _m_variant2(d, e, f):
    return f + d + ((d * e) / 100.0)


def _p_base(d, e, f):
    return d + (d * (e - f) / 25.5)


def _p_variant1(d, e, f):
    return 2.0 * d + ((d * e) / 100.0)


def _t_any(d, e, f):
    return d - (d * f / 30.0)


# (outcome, rule set) -> (fields required besides d, formula)
FORMULAS: Dict[Tuple[Outcome, RuleSet], Tuple[Tuple[str, ...], Formula]] = {
    (Outcome.M, RuleSet.BASE): (("e",), _m_base),
    (Outcome.M, RuleSet.VARIANT1): (("e",), _m_base),
    (Outcome.M, RuleSet.VARIANT2): (("e", "f"), _m_variant2),
    (Outcome.P, RuleSet.BASE): (("e", "f"), _p_base),
    (Outcome.P, RuleSet.VARIANT1): (("e",), _p_variant1),
    (Outcome.P, RuleSet.VARIANT2): (("e", "f"), _p_base),
    (Outcome.T, RuleSet.BASE): (("f",), _t_any),
    (Outcome.T, RuleSet.VARIANT1): (("f",), _t_any),
    (Outcome.T, RuleSet.VARIANT2): (("f",), _t_any),
}


def classify(
    a: Optional[bool],
    b: Optional[bool],
    c: Optional[bool],
    rule_set: RuleSet = RuleSet.BASE,
) -> Outcome:
    """
    Map a boolean triple to an Outcome under the given rule set

    Any absent member or untabulated combination yields Outcome.ERROR.
    """
    if a is None or b is None or c is None:
        return Outcome.ERROR
    return CLASSIFICATION_TABLES[rule_set].get((a, b, c), Outcome.ERROR)


def compute_value(outcome: Outcome, rule_set: RuleSet, record: InputRecord) -> float:
    """
    Compute the value bound to (outcome, rule_set)

    Raises:
        MissingFieldError: d, or a field the formula needs, is absent
    """
    if outcome is Outcome.ERROR:
        return 0.0

    if record.d is None:
        raise MissingFieldError("d", outcome, rule_set)

    required, formula = FORMULAS[(outcome, rule_set)]
    for name in required:
        if getattr(record, name) is None:
            raise MissingFieldError(name, outcome, rule_set)

    e = float(record.e) if record.e is not None else None
    f = float(record.f) if record.f is not None else None
    return formula(record.d, e, f)


def evaluate(record: InputRecord) -> ClassificationResult:
    """
    Evaluate a record against the decision table

    Args:
        record: Parsed input record

    Returns:
        ClassificationResult carrying the true outcome; Error outcomes have value 0.0

    Raises:
        MissingFieldError: a field required for the resolved path is absent
    """
    rule_set = record.rule_set
    outcome = classify(record.a, record.b, record.c, rule_set)
    if outcome is Outcome.ERROR:
        logger.debug("Unsupported combination a=%s b=%s c=%s under %s",
                     record.a, record.b, record.c, rule_set.value)
        return ClassificationResult(outcome=Outcome.ERROR, value=0.0)

    value = compute_value(outcome, rule_set, record)
    logger.debug("Evaluated %s under %s: %r", outcome.value, rule_set.value, value)
    return ClassificationResult(outcome=outcome, value=value)
