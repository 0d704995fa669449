"""
Executive Summary
jtbd_readiness/scoring/executive_summary.py

Headline figures for the dashboard: readiness level, confidence level,
key finding, critical insight, quality insight, confidence metrics and
force interactions.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Sequence

from jtbd_readiness.models.analysis import (
    ConfidenceMetrics,
    ExecutiveSummary,
    ForceInteractions,
)
from jtbd_readiness.models.enumerations import ConfidenceLevel, JTBDForce, ReadinessLevel
from jtbd_readiness.scoring.force_aggregator import (
    AggregatedForce,
    force_distribution,
    most_common_force,
)
from jtbd_readiness.scoring.force_classifier import Classification
from jtbd_readiness.scoring.force_score import ForceScore
from jtbd_readiness.scoring.insight_generator import FORCE_LABELS
from jtbd_readiness.scoring.utils import clamp, mean, population_std_dev

LOW_CONFIDENCE_ACTIONS = ["Collect more data", "Refine questions"]
LOW_CONFIDENCE_CUTOFF = Decimal("3.5")

CRITICAL_FACTOR_THRESHOLD = Decimal("6")   # 0-10
CRITICAL_FACTORS = (
    (JTBDForce.PAIN_OF_OLD, "High current pain"),
    (JTBDForce.PULL_OF_NEW, "Strong AI attraction"),
    (JTBDForce.ANCHORS_TO_OLD, "Significant barriers"),
    (JTBDForce.ANXIETY_OF_NEW, "High change anxiety"),
)

_ONE_PLACE = Decimal("0.1")


def interpret_readiness(readiness_score: int) -> ReadinessLevel:
    """
    Map the 0-100 readiness score to a readiness level.

        >= 80 ready_to_scale, >= 70 ready_to_implement,
        >= 60 ready_with_preparation, >= 40 needs_significant_preparation
    """
    if readiness_score >= 80:
        return ReadinessLevel.READY_TO_SCALE
    elif readiness_score >= 70:
        return ReadinessLevel.READY_TO_IMPLEMENT
    elif readiness_score >= 60:
        return ReadinessLevel.READY_WITH_PREPARATION
    elif readiness_score >= 40:
        return ReadinessLevel.NEEDS_SIGNIFICANT_PREPARATION
    else:
        return ReadinessLevel.NOT_READY


def interpret_confidence(average_confidence: Decimal) -> ConfidenceLevel:
    if average_confidence >= Decimal("4.5"):
        return ConfidenceLevel.VERY_HIGH
    elif average_confidence >= Decimal("3.5"):
        return ConfidenceLevel.HIGH
    elif average_confidence >= Decimal("2.5"):
        return ConfidenceLevel.MEDIUM
    else:
        return ConfidenceLevel.LOW


def compute_confidence_metrics(scores: Sequence[ForceScore]) -> ConfidenceMetrics:
    """
    Spread of model confidence across the batch.

    consistency_score = clamp(1 − σ / 5, 0, 1), rounded to 2 places
    """
    values = [s.confidence for s in scores]
    if not values:
        return ConfidenceMetrics(
            average_confidence=0.0,
            min_confidence=0.0,
            max_confidence=0.0,
            consistency_score=0.0,
            sample_size=0,
            recommended_actions=[],
        )

    avg = mean(values)
    consistency = clamp(
        Decimal("1") - population_std_dev(values) / Decimal("5"),
        Decimal("0"),
        Decimal("1"),
    ).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    return ConfidenceMetrics(
        average_confidence=float(avg.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
        min_confidence=float(min(values)),
        max_confidence=float(max(values)),
        consistency_score=float(consistency),
        sample_size=len(values),
        recommended_actions=list(LOW_CONFIDENCE_ACTIONS) if avg < LOW_CONFIDENCE_CUTOFF else [],
    )


def _key_finding(
    aggregates: Dict[JTBDForce, AggregatedForce],
    classification: Classification,
) -> str:
    populated = [f for f in JTBDForce if aggregates[f].count > 0]
    if not populated:
        return "No responses were available for analysis"

    strongest = max(
        populated,
        key=lambda f: (classification.normalized_strengths[f], -list(JTBDForce).index(f)),
    )
    agg = aggregates[strongest]
    plural = "response" if agg.count == 1 else "responses"
    return (
        f"The strongest force is {FORCE_LABELS[strongest].lower()} at "
        f"{classification.normalized_strengths[strongest]:.1f}/10 across "
        f"{agg.count} {plural}"
    )


def _critical_insight(net_force: Decimal, sample_size: int) -> str:
    if sample_size == 0:
        return "Push and resistance forces cannot be assessed without responses"
    if net_force > Decimal("1"):
        return "Strong push forces indicate high motivation for change"
    if net_force < Decimal("-1"):
        return "Strong resistance forces may hinder adoption"
    return "Push and resistance forces are balanced - careful change management needed"


def _quality_insight(average_confidence: Decimal, sample_size: int) -> Optional[str]:
    if sample_size == 0:
        return None
    if average_confidence >= Decimal("4"):
        return "High confidence in analysis results based on response quality"
    if average_confidence < Decimal("3"):
        return "Lower confidence suggests need for additional data collection"
    return None


def build_executive_summary(
    aggregates: Dict[JTBDForce, AggregatedForce],
    classification: Classification,
    scores: Sequence[ForceScore],
) -> ExecutiveSummary:
    """Assemble the executive summary for one rollup."""
    avg_confidence = mean([s.confidence for s in scores])
    return ExecutiveSummary(
        readiness_level=interpret_readiness(classification.readiness_score),
        confidence_level=interpret_confidence(avg_confidence),
        key_finding=_key_finding(aggregates, classification),
        critical_insight=_critical_insight(
            classification.force_balance.net_force, len(scores)
        ),
        most_common_force=most_common_force(aggregates),
        force_distribution=force_distribution(aggregates),
        quality_insight=_quality_insight(avg_confidence, len(scores)),
    )


def _one_place(value: Decimal) -> float:
    return float(value.quantize(_ONE_PLACE, rounding=ROUND_HALF_UP))


def compute_force_interactions(
    aggregates: Dict[JTBDForce, AggregatedForce],
    scale: int = 5,
) -> ForceInteractions:
    """
    Combine the push and resistance forces, all on the 0-10 scale.

    Formulas:
        drivers             = pain_of_old + pull_of_new
        barriers            = anchors_to_old + anxiety_of_new
        pain_pull_alignment = drivers / 2
        barrier_resistance  = barriers / 2
        change_readiness    = max(0, drivers − barriers)      [0, 20]
        critical_factors    = forces above 6/10, in enum order

    Forces without responses count as 0 and never become critical factors.
    """
    strengths = {f: aggregates[f].strength_on(10, scale) for f in JTBDForce}
    drivers = strengths[JTBDForce.PAIN_OF_OLD] + strengths[JTBDForce.PULL_OF_NEW]
    barriers = strengths[JTBDForce.ANCHORS_TO_OLD] + strengths[JTBDForce.ANXIETY_OF_NEW]

    return ForceInteractions(
        pain_pull_alignment=_one_place(drivers / 2),
        barrier_resistance=_one_place(barriers / 2),
        change_readiness=_one_place(max(Decimal("0"), drivers - barriers)),
        critical_factors=[
            label for force, label in CRITICAL_FACTORS
            if strengths[force] > CRITICAL_FACTOR_THRESHOLD
        ],
    )
