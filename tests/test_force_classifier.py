# tests/test_force_classifier.py
"""
Force classification: thresholds, force balance, readiness formula.
"""

from decimal import Decimal

import pytest

from jtbd_readiness.core.exceptions import InvalidThresholds
from jtbd_readiness.models.enumerations import JTBDForce
from jtbd_readiness.scoring.force_aggregator import aggregate
from jtbd_readiness.scoring.force_classifier import (
    classify,
    compute_force_balance,
    readiness_from_net_force,
)
from jtbd_readiness.scoring.force_score import validate_batch


def _aggregates(records, scale=5):
    return aggregate(validate_batch(records, scale=scale).scores, scale=scale)


class TestClassify:

    def test_empty_aggregates_are_neutral(self):
        result = classify(aggregate([]))

        assert result.dominant_forces == ()
        assert result.weak_forces == ()
        assert result.force_balance.net_force == Decimal("0")
        assert result.readiness_score == 50

    def test_eager_organization(self, eager_org_records):
        result = classify(_aggregates(eager_org_records))

        assert result.dominant_forces == (JTBDForce.PAIN_OF_OLD, JTBDForce.PULL_OF_NEW)
        assert result.weak_forces == (JTBDForce.ANCHORS_TO_OLD, JTBDForce.ANXIETY_OF_NEW)
        assert result.force_balance.push_forces == Decimal("9")
        assert result.force_balance.pull_forces == Decimal("2")
        assert result.force_balance.net_force == Decimal("7")
        assert result.readiness_score == 85

    def test_resistant_organization(self, resistant_org_records):
        result = classify(_aggregates(resistant_org_records))

        assert result.dominant_forces == (JTBDForce.ANCHORS_TO_OLD, JTBDForce.ANXIETY_OF_NEW)
        assert result.weak_forces == (JTBDForce.PAIN_OF_OLD, JTBDForce.PULL_OF_NEW)
        assert result.force_balance.net_force == Decimal("-6.5")
        # (3.5 / 20) × 100 = 17.5 → rounds half up
        assert result.readiness_score == 18

    def test_single_pull_record_on_ten_point_scale(self):
        aggregates = _aggregates([{"primaryJtbdForce": "pull_of_new", "forceStrengthScore": 8}], scale=10)
        result = classify(aggregates, scale=10)

        assert result.dominant_forces == (JTBDForce.PULL_OF_NEW,)
        assert result.weak_forces == ()
        assert result.normalized_strengths[JTBDForce.PULL_OF_NEW] == Decimal("8")
        assert result.force_balance.push_forces == Decimal("4")
        assert result.readiness_score == 70

    def test_threshold_boundaries_inclusive(self, record_factory):
        # 3.5/5 → 7.0/10 (dominant), 1.5/5 → 3.0/10 (weak)
        aggregates = _aggregates([
            record_factory("pull_of_new", 3.5),
            record_factory("anxiety_of_new", 1.5),
        ])
        result = classify(aggregates)
        assert result.dominant_forces == (JTBDForce.PULL_OF_NEW,)
        assert result.weak_forces == (JTBDForce.ANXIETY_OF_NEW,)

    def test_thresholds_use_unrounded_mean(self, record_factory):
        # pull mean 3.49995 displays as 7.0/10 but is 6.9999;
        # anxiety mean 1.500033 displays as 3.0/10 but is 3.000067
        aggregates = _aggregates([
            record_factory("pull_of_new", 3.4999),
            record_factory("pull_of_new", 3.5),
            record_factory("anxiety_of_new", 1.5),
            record_factory("anxiety_of_new", 1.5),
            record_factory("anxiety_of_new", 1.5001),
        ])
        result = classify(aggregates)

        assert aggregates[JTBDForce.PULL_OF_NEW].average_strength == Decimal("3.5")
        assert result.normalized_strengths[JTBDForce.PULL_OF_NEW] == Decimal("7")
        assert result.normalized_strengths[JTBDForce.ANXIETY_OF_NEW] == Decimal("3")
        assert result.dominant_forces == ()
        assert result.weak_forces == ()

    def test_between_thresholds_is_neutral(self, record_factory):
        result = classify(_aggregates([record_factory("demographic", 2.5)]))
        assert JTBDForce.DEMOGRAPHIC not in result.dominant_forces
        assert JTBDForce.DEMOGRAPHIC not in result.weak_forces

    def test_custom_thresholds(self, record_factory):
        aggregates = _aggregates([record_factory("demographic", 2.5)])
        result = classify(aggregates, high_threshold=5, low_threshold=1)
        assert result.dominant_forces == (JTBDForce.DEMOGRAPHIC,)

    @pytest.mark.parametrize("high, low", [(3, 7), (5, 5), (0, 0)])
    def test_invalid_thresholds_raise(self, high, low):
        with pytest.raises(InvalidThresholds):
            classify(aggregate([]), high_threshold=high, low_threshold=low)


class TestForceBalance:

    def test_balance_clamped(self):
        # both push forces at the top of the 0-10 scale
        records = [
            {"primaryJtbdForce": "pain_of_old", "forceStrengthScore": 10},
            {"primaryJtbdForce": "pull_of_new", "forceStrengthScore": 10},
        ]
        balance = compute_force_balance(_aggregates(records, scale=10), scale=10)
        assert balance.push_forces == Decimal("10")
        assert balance.net_force == Decimal("10")

    def test_balance_ignores_demographic(self, record_factory):
        balance = compute_force_balance(_aggregates([record_factory("demographic", 5.0)]))
        assert balance.push_forces == Decimal("0")
        assert balance.pull_forces == Decimal("0")


class TestReadinessFormula:

    @pytest.mark.parametrize(
        "net, expected",
        [
            ("-10", 0),
            ("-6.5", 18),
            ("0", 50),
            ("0.1", 51),
            ("2.5", 63),
            ("10", 100),
        ],
    )
    def test_linear_rescale(self, net, expected):
        assert readiness_from_net_force(Decimal(net)) == expected
