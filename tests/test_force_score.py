# tests/test_force_score.py
"""
ForceScore validation: force kinds, clamping, theme handling, batch recovery.
"""

from decimal import Decimal

import pytest

from jtbd_readiness.core.exceptions import InvalidForceKind, MalformedForceScore
from jtbd_readiness.models.enumerations import JTBDForce
from jtbd_readiness.models.force_score import ForceScoreRecord
from jtbd_readiness.scoring.force_score import (
    ForceScore,
    validate,
    validate_batch,
    validate_with_events,
)


class TestValidate:
    """Single-record validation."""

    def test_valid_record(self, record_factory):
        raw = record_factory(
            "pain_of_old", 3.5, 4.0, ["manual reporting"], secondary=["pull_of_new"]
        )
        score = validate(raw)

        assert score.primary_force == JTBDForce.PAIN_OF_OLD
        assert score.force_strength == Decimal("3.5")
        assert score.confidence == Decimal("4")
        assert score.secondary_forces == (JTBDForce.PULL_OF_NEW,)
        assert score.key_themes == ("manual reporting",)

    def test_snake_case_keys_accepted(self):
        score = validate({"primary_force": "anxiety_of_new", "force_strength_score": 2})
        assert score.primary_force == JTBDForce.ANXIETY_OF_NEW
        assert score.confidence == Decimal("0")

    def test_record_model_accepted(self):
        record = ForceScoreRecord(primary_force="demographic", force_strength_score=1.0)
        assert validate(record).primary_force == JTBDForce.DEMOGRAPHIC

    def test_null_optional_fields_keep_the_record(self):
        score = validate({
            "primaryJtbdForce": "pull_of_new",
            "forceStrengthScore": 3,
            "confidenceScore": None,
            "keyThemes": None,
            "secondaryJtbdForces": None,
        })
        assert score.primary_force == JTBDForce.PULL_OF_NEW
        assert score.force_strength == Decimal("3")
        assert score.confidence == Decimal("0")
        assert score.key_themes == ()
        assert score.secondary_forces == ()

    def test_unknown_primary_force_rejected(self, record_factory):
        with pytest.raises(InvalidForceKind) as exc_info:
            validate(record_factory("bogus", 3.0), index=4)
        assert exc_info.value.index == 4
        assert exc_info.value.reason == "InvalidForceKind"

    def test_missing_primary_force_rejected(self):
        with pytest.raises(InvalidForceKind):
            validate({"forceStrengthScore": 3.0})

    def test_missing_strength_is_malformed(self):
        with pytest.raises(MalformedForceScore) as exc_info:
            validate({"primaryJtbdForce": "pull_of_new"})
        assert exc_info.value.reason == "MalformedForceScore"
        assert "forceStrengthScore" in exc_info.value.detail

    def test_non_numeric_strength_is_malformed(self, record_factory):
        with pytest.raises(MalformedForceScore):
            validate(record_factory("pull_of_new", "very strong"))

    def test_nan_strength_is_malformed(self, record_factory):
        with pytest.raises(MalformedForceScore):
            validate(record_factory("pull_of_new", float("nan")))

    def test_non_mapping_is_malformed(self):
        with pytest.raises(MalformedForceScore):
            validate(["pull_of_new", 3.0])

    def test_strength_clamped_not_rejected(self, record_factory):
        score, events = validate_with_events(record_factory("pull_of_new", 7.0, 4.0), index=2)

        assert score.force_strength == Decimal("5")
        assert len(events) == 1
        assert events[0].index == 2
        assert events[0].field == "forceStrengthScore"
        assert events[0].original == 7.0
        assert events[0].clamped == 5.0

    def test_negative_confidence_clamped(self, record_factory):
        score, events = validate_with_events(record_factory("pull_of_new", 3.0, -1.0))
        assert score.confidence == Decimal("0")
        assert [e.field for e in events] == ["confidenceScore"]

    def test_ten_point_scale_bound(self, record_factory):
        score, events = validate_with_events(record_factory("pull_of_new", 8.0), scale=10)
        assert score.force_strength == Decimal("8")
        assert events == []

    def test_extra_decimal_places_are_not_clamps(self, record_factory):
        _, events = validate_with_events(record_factory("pull_of_new", 3.14159, 2.71828))
        assert events == []

    def test_secondary_forces_exclude_primary_and_unknowns(self, record_factory):
        raw = record_factory(
            "pull_of_new", 3.0,
            secondary=["anxiety_of_new", "pull_of_new", "bogus", "pain_of_old", "anxiety_of_new"],
        )
        score = validate(raw)
        assert score.secondary_forces == (JTBDForce.PAIN_OF_OLD, JTBDForce.ANXIETY_OF_NEW)

    def test_themes_cleaned_and_truncated(self, record_factory):
        themes = ["  cost ", "", "cost", "speed"] + [f"theme {i}" for i in range(30)]
        score = validate(record_factory("pain_of_old", 3.0, themes=themes), max_themes=20)

        assert len(score.key_themes) == 20
        assert score.key_themes[:3] == ("cost", "speed", "theme 0")

    def test_existing_force_score_revalidated(self):
        existing = ForceScore(
            primary_force=JTBDForce.PULL_OF_NEW,
            force_strength=Decimal("8"),
            confidence=Decimal("3"),
        )
        score = validate(existing, index=3, scale=5)
        assert score.force_strength == Decimal("5")
        assert score.index == 3


class TestValidateBatch:
    """Partial-failure semantics."""

    def test_bad_records_do_not_abort(self, record_factory):
        outcome = validate_batch([
            record_factory("pain_of_old", 3.0),
            record_factory("bogus", 3.0),
            {"primaryJtbdForce": "pull_of_new"},
            record_factory("pull_of_new", 9.0),
        ])

        assert [s.index for s in outcome.scores] == [0, 3]
        assert [(r.index, r.reason) for r in outcome.rejected] == [
            (1, "InvalidForceKind"),
            (2, "MalformedForceScore"),
        ]
        assert [(c.index, c.field) for c in outcome.clamped] == [(3, "forceStrengthScore")]

    def test_null_optional_fields_not_rejected(self):
        outcome = validate_batch([{
            "primaryJtbdForce": "pull_of_new",
            "forceStrengthScore": 3,
            "confidenceScore": None,
            "keyThemes": None,
            "secondaryJtbdForces": None,
        }])
        assert len(outcome.scores) == 1
        assert outcome.rejected == []

    def test_response_ids_reported(self, record_factory):
        good = dict(record_factory("pull_of_new", 9.0), responseId="resp-7")
        bad = dict(record_factory("bogus", 3.0), responseId="resp-8")
        unparseable = {"primaryJtbdForce": "pain_of_old", "responseId": 9}

        outcome = validate_batch([good, bad, unparseable])

        assert outcome.scores[0].response_id == "resp-7"
        assert [(c.index, c.response_id) for c in outcome.clamped] == [(0, "resp-7")]
        assert [(r.index, r.response_id) for r in outcome.rejected] == [
            (1, "resp-8"),
            (2, "9"),
        ]

    def test_empty_batch(self):
        outcome = validate_batch([])
        assert outcome.scores == []
        assert outcome.rejected == []
        assert outcome.clamped == []
