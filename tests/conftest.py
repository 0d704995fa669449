# tests/conftest.py

"""
Pytest Fixtures - Shared settings and scoring-call records for all tests

Records use the camelCase shape produced by the LLM scoring call:
    primaryJtbdForce, secondaryJtbdForces, forceStrengthScore,
    confidenceScore, keyThemes
"""

import pytest

from jtbd_readiness.config import Settings


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================

@pytest.fixture
def settings_five():
    """Default deployment: forceStrengthScore on 0-5."""
    return Settings(_env_file=None, FORCE_SCORE_SCALE=5)


@pytest.fixture
def settings_ten():
    """Deployment whose callers already normalise to 0-10."""
    return Settings(_env_file=None, FORCE_SCORE_SCALE=10)


# =============================================================================
# RECORD FIXTURES
# =============================================================================

def make_record(force, strength, confidence=4.0, themes=None, secondary=None):
    """Build one scoring-call record."""
    return {
        "primaryJtbdForce": force,
        "secondaryJtbdForces": secondary or [],
        "forceStrengthScore": strength,
        "confidenceScore": confidence,
        "keyThemes": themes or [],
    }


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def eager_org_records():
    """High pain, high pull, little resistance."""
    return [
        make_record("pain_of_old", 4.5, 4.5, ["manual reporting", "slow approvals"]),
        make_record("pain_of_old", 4.0, 4.0, ["manual reporting", "data silos"]),
        make_record("pull_of_new", 4.5, 4.0, ["automation", "faster insights"]),
        make_record("pull_of_new", 5.0, 4.5, ["automation"]),
        make_record("anchors_to_old", 1.0, 3.5, ["legacy ERP"]),
        make_record("anxiety_of_new", 1.0, 3.0, ["job security"]),
    ]


@pytest.fixture
def resistant_org_records():
    """Weak push, strong anchors and anxiety."""
    return [
        make_record("pain_of_old", 1.0, 3.0, ["no real issues"]),
        make_record("pull_of_new", 1.5, 3.0, ["unclear value"]),
        make_record("anchors_to_old", 4.5, 4.0, ["legacy ERP", "established process"]),
        make_record("anchors_to_old", 4.0, 4.0, ["legacy ERP"]),
        make_record("anxiety_of_new", 4.5, 4.5, ["job security", "data privacy"]),
        make_record("anxiety_of_new", 5.0, 4.0, ["job security"]),
    ]
