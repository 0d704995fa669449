"""
Insight Generator
jtbd_readiness/scoring/insight_generator.py

Turns classified forces into ranked insights and table-driven
recommendations.

Insight order:
    dominant forces by strength desc, then weak forces by strength asc
    (ties by JTBDForce declaration order)

Output is fully deterministic: fixed templates, no clock, no randomness.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, Sequence, Tuple

import structlog

from jtbd_readiness.models.enumerations import (
    JTBDForce,
    Level,
    Priority,
    RecommendationCategory,
)
from jtbd_readiness.scoring.force_aggregator import AggregatedForce
from jtbd_readiness.scoring.force_classifier import Classification, ForceBalance
from jtbd_readiness.scoring.utils import rescale

logger = structlog.get_logger(__name__)

FORCE_LABELS: Dict[JTBDForce, str] = {
    JTBDForce.PAIN_OF_OLD: "Pain of the old way",
    JTBDForce.PULL_OF_NEW: "Pull of the new way",
    JTBDForce.ANCHORS_TO_OLD: "Anchors to the old way",
    JTBDForce.ANXIETY_OF_NEW: "Anxiety about the new way",
    JTBDForce.DEMOGRAPHIC: "Demographic baseline",
}

_FORCE_ORDER = {f: i for i, f in enumerate(JTBDForce)}

BLOCKING_NET_FORCE = Decimal("-2")


@dataclass(frozen=True)
class Insight:
    force: JTBDForce
    statement: str
    evidence: Tuple[str, ...]
    confidence: Decimal  # 0-1


@dataclass(frozen=True)
class Recommendation:
    category: RecommendationCategory
    action: str
    priority: Priority
    effort: Level
    impact: Level


@dataclass(frozen=True)
class RuleContext:
    """What a recommendation predicate may look at."""
    strengths: Dict[JTBDForce, Decimal]  # 0-10
    counts: Dict[JTBDForce, int]
    net_force: Decimal


@dataclass(frozen=True)
class RecommendationRule:
    """One row of the recommendation table."""
    condition: str
    predicate: Callable[[RuleContext], bool]
    recommendation: Recommendation


@dataclass(frozen=True)
class InsightBundle:
    insights: Tuple[Insight, ...] = ()
    recommendations: Tuple[Recommendation, ...] = ()
    blocking_risk: bool = False


def _force_below(force: JTBDForce, threshold: str) -> Callable[[RuleContext], bool]:
    limit = Decimal(threshold)
    return lambda ctx: ctx.counts[force] > 0 and ctx.strengths[force] < limit


def _force_above(force: JTBDForce, threshold: str) -> Callable[[RuleContext], bool]:
    limit = Decimal(threshold)
    return lambda ctx: ctx.counts[force] > 0 and ctx.strengths[force] > limit


# ---------------------------------------------------------------------------
# RECOMMENDATION TABLE  (strengths on the 0-10 scale)
#
# Condition               | Category          | Priority | Effort | Impact
# ────────────────────────┼───────────────────┼──────────┼────────┼───────
# pain_of_old    < 5      | strengthen_push   | high     | medium | high
# pull_of_new    < 6      | strengthen_push   | high     | medium | high
# anchors_to_old > 6      | reduce_pull       | high     | high   | high
# anxiety_of_new > 6      | address_anxiety   | critical | medium | high
# net_force      > 2      | leverage_momentum | medium   | low    | high
# net_force      < −2     | — (blocking risk flag, no recommendation)
#
# Force rows only fire when that force has at least one analysis.
# ---------------------------------------------------------------------------

RECOMMENDATION_RULES: Tuple[RecommendationRule, ...] = (
    RecommendationRule(
        condition="pain_of_old < 5",
        predicate=_force_below(JTBDForce.PAIN_OF_OLD, "5"),
        recommendation=Recommendation(
            category=RecommendationCategory.STRENGTHEN_PUSH,
            action="Clarify and quantify current pain points",
            priority=Priority.HIGH,
            effort=Level.MEDIUM,
            impact=Level.HIGH,
        ),
    ),
    RecommendationRule(
        condition="pull_of_new < 6",
        predicate=_force_below(JTBDForce.PULL_OF_NEW, "6"),
        recommendation=Recommendation(
            category=RecommendationCategory.STRENGTHEN_PUSH,
            action="Develop a clearer AI value proposition",
            priority=Priority.HIGH,
            effort=Level.MEDIUM,
            impact=Level.HIGH,
        ),
    ),
    RecommendationRule(
        condition="anchors_to_old > 6",
        predicate=_force_above(JTBDForce.ANCHORS_TO_OLD, "6"),
        recommendation=Recommendation(
            category=RecommendationCategory.REDUCE_PULL,
            action="Address organizational resistance and barriers",
            priority=Priority.HIGH,
            effort=Level.HIGH,
            impact=Level.HIGH,
        ),
    ),
    RecommendationRule(
        condition="anxiety_of_new > 6",
        predicate=_force_above(JTBDForce.ANXIETY_OF_NEW, "6"),
        recommendation=Recommendation(
            category=RecommendationCategory.ADDRESS_ANXIETY,
            action="Invest in AI education and anxiety reduction",
            priority=Priority.CRITICAL,
            effort=Level.MEDIUM,
            impact=Level.HIGH,
        ),
    ),
    RecommendationRule(
        condition="net_force > 2",
        predicate=lambda ctx: ctx.net_force > Decimal("2"),
        recommendation=Recommendation(
            category=RecommendationCategory.LEVERAGE_MOMENTUM,
            action="Focus on quick wins to build momentum",
            priority=Priority.MEDIUM,
            effort=Level.LOW,
            impact=Level.HIGH,
        ),
    ),
)


def _statement(kind: str, agg: AggregatedForce, strength_10: Decimal) -> str:
    plural = "response" if agg.count == 1 else "responses"
    return (
        f"{FORCE_LABELS[agg.force]} is a {kind} force: average strength "
        f"{strength_10:.1f}/10 with {agg.average_confidence:.1f}/5 confidence "
        f"across {agg.count} {plural}."
    )


def _insight(kind: str, agg: AggregatedForce, strength_10: Decimal) -> Insight:
    return Insight(
        force=agg.force,
        statement=_statement(kind, agg, strength_10),
        evidence=agg.top_themes,
        confidence=(agg.average_confidence / Decimal("5")).quantize(
            Decimal("0.0001"), rounding=ROUND_HALF_UP
        ),
    )


def generate(
    aggregates: Dict[JTBDForce, AggregatedForce],
    balance: ForceBalance,
    dominant: Sequence[JTBDForce],
    weak: Sequence[JTBDForce],
    scale: int = 5,
) -> InsightBundle:
    """
    Build ranked insights and recommendations.

    Args:
        aggregates: Output of aggregate().
        balance: Force balance from classify().
        dominant: Dominant forces from classify().
        weak: Weak forces from classify().
        scale: Input scale of average_strength (5 or 10).

    Returns:
        InsightBundle with insights, recommendations and the blocking_risk flag.
    """
    # exact means rank and trigger; rounded means are only displayed
    strengths = {f: aggregates[f].strength_on(10, scale) for f in JTBDForce}
    shown = {f: rescale(aggregates[f].average_strength, scale, 10) for f in JTBDForce}
    counts = {f: aggregates[f].count for f in JTBDForce}

    ranked_dominant = sorted(dominant, key=lambda f: (-strengths[f], _FORCE_ORDER[f]))
    ranked_weak = sorted(weak, key=lambda f: (strengths[f], _FORCE_ORDER[f]))

    insights: List[Insight] = [
        _insight("dominant", aggregates[f], shown[f]) for f in ranked_dominant
    ]
    insights += [_insight("weak", aggregates[f], shown[f]) for f in ranked_weak]

    ctx = RuleContext(strengths=strengths, counts=counts, net_force=balance.net_force)
    recommendations = tuple(
        rule.recommendation for rule in RECOMMENDATION_RULES if rule.predicate(ctx)
    )
    blocking_risk = balance.net_force < BLOCKING_NET_FORCE

    logger.info(
        "insights_generated",
        insight_count=len(insights),
        recommendation_count=len(recommendations),
        blocking_risk=blocking_risk,
    )
    return InsightBundle(
        insights=tuple(insights),
        recommendations=recommendations,
        blocking_risk=blocking_risk,
    )


def generate_for(
    aggregates: Dict[JTBDForce, AggregatedForce],
    classification: Classification,
    scale: int = 5,
) -> InsightBundle:
    """generate() fed straight from a Classification."""
    return generate(
        aggregates,
        classification.force_balance,
        classification.dominant_forces,
        classification.weak_forces,
        scale=scale,
    )
