"""
JTBD Readiness Engine

Converts per-response JTBD force scores into an organizational AI
readiness analysis.

    from jtbd_readiness import rollup
    analysis = rollup(records, survey_id="...")
    analysis.to_wire()
"""

from jtbd_readiness.core.exceptions import (
    ForceScoreValidationError,
    InvalidForceKind,
    InvalidThresholds,
    MalformedForceScore,
    ReadinessEngineError,
)
from jtbd_readiness.models.analysis import OrganizationalAnalysis
from jtbd_readiness.models.enumerations import JTBDForce
from jtbd_readiness.scoring.force_aggregator import AggregatedForce, aggregate
from jtbd_readiness.scoring.force_classifier import Classification, ForceBalance, classify
from jtbd_readiness.scoring.force_score import ForceScore, validate, validate_batch
from jtbd_readiness.scoring.insight_generator import InsightBundle, generate
from jtbd_readiness.scoring.organizational_rollup import OrganizationalRollup, rollup

__version__ = "1.0.0"

__all__ = [
    "AggregatedForce",
    "Classification",
    "ForceBalance",
    "ForceScore",
    "ForceScoreValidationError",
    "InsightBundle",
    "InvalidForceKind",
    "InvalidThresholds",
    "JTBDForce",
    "MalformedForceScore",
    "OrganizationalAnalysis",
    "OrganizationalRollup",
    "ReadinessEngineError",
    "aggregate",
    "classify",
    "generate",
    "rollup",
    "validate",
    "validate_batch",
]
