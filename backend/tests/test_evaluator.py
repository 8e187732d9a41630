"""
Tests for decision table classification and value computation
"""
import itertools

import pytest

from decision_table.components.contracts import (
    ClassificationResult,
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

BASE_ROWS = {
    (True, True, False): Outcome.M,
    (True, True, True): Outcome.P,
    (False, True, True): Outcome.T,
}

VARIANT2_ROWS = dict(BASE_ROWS)
VARIANT2_ROWS[(True, False, True)] = Outcome.M

EXPECTED_ROWS = {
    RuleSet.BASE: BASE_ROWS,
    RuleSet.VARIANT1: BASE_ROWS,
    RuleSet.VARIANT2: VARIANT2_ROWS,
}

ALL_TRIPLES = list(itertools.product([True, False, None], repeat=3))


class TestClassification:
    """Stage 1: boolean triple dispatch"""

    @pytest.mark.parametrize("rule_set", list(RuleSet))
    @pytest.mark.parametrize("triple", ALL_TRIPLES)
    def test_matches_table_for_every_triple(self, rule_set, triple):
        expected = EXPECTED_ROWS[rule_set].get(triple, Outcome.ERROR)
        assert classify(*triple, rule_set=rule_set) is expected

    @pytest.mark.parametrize("rule_set", list(RuleSet))
    def test_absent_member_is_error(self, rule_set):
        assert classify(None, True, True, rule_set) is Outcome.ERROR
        assert classify(True, None, True, rule_set) is Outcome.ERROR
        assert classify(True, True, None, rule_set) is Outcome.ERROR
        assert classify(None, None, None, rule_set) is Outcome.ERROR

    def test_absent_is_not_false(self):
        # (false, true, true) is T but (absent, true, true) is not
        assert classify(False, True, True) is Outcome.T
        assert classify(None, True, True) is Outcome.ERROR

    def test_variant2_extra_row_only_in_variant2(self):
        assert classify(True, False, True, RuleSet.VARIANT2) is Outcome.M
        assert classify(True, False, True, RuleSet.BASE) is Outcome.ERROR
        assert classify(True, False, True, RuleSet.VARIANT1) is Outcome.ERROR

    def test_default_rule_set_is_base(self):
        for triple in ALL_TRIPLES:
            assert classify(*triple) is classify(*triple, rule_set=RuleSet.BASE)


class TestValueComputation:
    """Stage 2: formulas per (outcome, rule set)"""

    @pytest.mark.parametrize("rule_set", [RuleSet.BASE, RuleSet.VARIANT1])
    def test_m_base_and_variant1(self, rule_set):
        record = InputRecord(d=3.7, e=5, rule_set=rule_set)
        assert compute_value(Outcome.M, rule_set, record) == pytest.approx(3.7 + 3.7 * 5 / 10)

    def test_m_variant2(self):
        record = InputRecord(d=3.7, e=5, f=2, rule_set=RuleSet.VARIANT2)
        assert compute_value(Outcome.M, RuleSet.VARIANT2, record) == pytest.approx(5.885)

    @pytest.mark.parametrize("rule_set", [RuleSet.BASE, RuleSet.VARIANT2])
    def test_p_base_and_variant2(self, rule_set):
        record = InputRecord(d=3.7, e=5, f=2, rule_set=rule_set)
        assert compute_value(Outcome.P, rule_set, record) == pytest.approx(3.7 + 3.7 * 3 / 25.5)

    def test_p_variant1(self):
        record = InputRecord(d=3.7, e=5, rule_set=RuleSet.VARIANT1)
        assert compute_value(Outcome.P, RuleSet.VARIANT1, record) == pytest.approx(7.585)

    @pytest.mark.parametrize("rule_set", list(RuleSet))
    def test_t_any_rule_set(self, rule_set):
        record = InputRecord(d=3.7, f=2, rule_set=rule_set)
        assert compute_value(Outcome.T, rule_set, record) == pytest.approx(3.7 - 3.7 * 2 / 30)

    @pytest.mark.parametrize("rule_set", list(RuleSet))
    def test_error_outcome_is_zero_without_fields(self, rule_set):
        assert compute_value(Outcome.ERROR, rule_set, InputRecord()) == 0.0

    def test_integers_are_widened(self):
        # (e - f) must not use integer division anywhere
        record = InputRecord(d=1.0, e=1, f=0)
        assert compute_value(Outcome.P, RuleSet.BASE, record) == pytest.approx(1.0 + 1.0 / 25.5)

    def test_unused_fields_do_not_affect_value(self):
        with_f = InputRecord(d=3.7, e=5, f=99)
        without_f = InputRecord(d=3.7, e=5)
        assert compute_value(Outcome.M, RuleSet.BASE, with_f) == compute_value(Outcome.M, RuleSet.BASE, without_f)

    def test_computation_is_deterministic(self):
        record = InputRecord(a=True, b=True, c=True, d=1.25, e=-7, f=13, rule_set=RuleSet.VARIANT2)
        assert evaluate(record) == evaluate(record)


class TestMissingFields:
    """Hard failures raised for absent required fields"""

    @pytest.mark.parametrize("rule_set", list(RuleSet))
    @pytest.mark.parametrize("triple", [(True, True, False), (True, True, True), (False, True, True)])
    def test_missing_d_always_reported(self, rule_set, triple):
        a, b, c = triple
        record = InputRecord(a=a, b=b, c=c, e=5, f=2, rule_set=rule_set)
        with pytest.raises(MissingFieldError) as exc_info:
            evaluate(record)
        assert exc_info.value.field == "d"

    @pytest.mark.parametrize("triple, rule_set, fields, missing", [
        ((True, True, False), RuleSet.BASE, {"f": 2}, "e"),
        ((True, True, False), RuleSet.VARIANT2, {"f": 2}, "e"),
        ((True, True, False), RuleSet.VARIANT2, {"e": 5}, "f"),
        ((True, False, True), RuleSet.VARIANT2, {"e": 5}, "f"),
        ((True, True, True), RuleSet.BASE, {"f": 2}, "e"),
        ((True, True, True), RuleSet.BASE, {"e": 5}, "f"),
        ((True, True, True), RuleSet.VARIANT1, {"f": 2}, "e"),
        ((True, True, True), RuleSet.VARIANT2, {"e": 5}, "f"),
        ((False, True, True), RuleSet.BASE, {"e": 5}, "f"),
        ((False, True, True), RuleSet.VARIANT1, {"e": 5}, "f"),
    ])
    def test_missing_required_numeric_field(self, triple, rule_set, fields, missing):
        a, b, c = triple
        record = InputRecord(a=a, b=b, c=c, d=3.7, rule_set=rule_set, **fields)
        with pytest.raises(MissingFieldError) as exc_info:
            evaluate(record)
        assert exc_info.value.field == missing
        assert exc_info.value.rule_set is rule_set

    def test_d_checked_before_e_and_f(self):
        record = InputRecord(a=True, b=True, c=True)
        with pytest.raises(MissingFieldError) as exc_info:
            evaluate(record)
        assert exc_info.value.field == "d"

    def test_e_checked_before_f(self):
        record = InputRecord(a=True, b=True, c=True, d=1.0)
        with pytest.raises(MissingFieldError) as exc_info:
            evaluate(record)
        assert exc_info.value.field == "e"

    def test_variant1_p_does_not_require_f(self):
        record = InputRecord(a=True, b=True, c=True, d=3.7, e=5, rule_set=RuleSet.VARIANT1)
        assert evaluate(record).outcome is Outcome.P

    def test_missing_field_is_evaluation_error(self):
        err = MissingFieldError("e", Outcome.M, RuleSet.BASE)
        assert isinstance(err, EvaluationError)
        assert str(err) == "Missing required field: e"

    def test_classification_error_wins_over_missing_d(self):
        # classification runs first, an unsupported triple never reaches the d check
        result = evaluate(InputRecord(a=False, b=False, c=False))
        assert result.outcome is Outcome.ERROR
        assert result.value == 0.0


class TestEvaluateScenarios:
    """End-to-end evaluation of representative records"""

    def test_variant1_p(self):
        record = InputRecord(a=True, b=True, c=True, d=3.7, e=5, f=2, rule_set=RuleSet.VARIANT1)
        result = evaluate(record)
        assert result.outcome is Outcome.P
        assert result.value == pytest.approx(7.585)

    def test_variant1_t(self):
        record = InputRecord(a=False, b=True, c=True, d=3.7, e=5, f=2, rule_set=RuleSet.VARIANT1)
        result = evaluate(record)
        assert result.outcome is Outcome.T
        assert result.value == pytest.approx(3.4533333333)

    def test_variant2_second_m_row(self):
        record = InputRecord(a=True, b=False, c=True, d=3.7, e=5, f=2, rule_set=RuleSet.VARIANT2)
        result = evaluate(record)
        assert result.outcome is Outcome.M
        assert result.value == pytest.approx(5.885)

    def test_unmatched_triple_is_error_result(self):
        result = evaluate(InputRecord(a=False, b=False, c=False, d=3.7, e=5, f=2))
        assert result == ClassificationResult(outcome=Outcome.ERROR, value=0.0)
        assert result.is_error

    def test_missing_d_raises(self):
        with pytest.raises(MissingFieldError):
            evaluate(InputRecord(a=True, b=True, c=True, e=5, f=2))

    @pytest.mark.parametrize("triple, expected", [
        ((True, True, True), Outcome.P),
        ((False, True, True), Outcome.T),
    ])
    def test_reports_true_outcome(self, triple, expected):
        a, b, c = triple
        result = evaluate(InputRecord(a=a, b=b, c=c, d=2.0, e=1, f=1))
        assert result.outcome is expected

    def test_absent_rule_set_same_as_base(self):
        fields = dict(a=True, b=True, c=True, d=3.7, e=5, f=2)
        assert evaluate(InputRecord(**fields)) == evaluate(InputRecord(rule_set=RuleSet.BASE, **fields))
