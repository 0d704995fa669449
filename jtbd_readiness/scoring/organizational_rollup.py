"""
Organizational Rollup
jtbd_readiness/scoring/organizational_rollup.py

Full pipeline: scored survey responses → OrganizationalAnalysis.

Class: OrganizationalRollup
Method: rollup(records) → OrganizationalAnalysis

Pipeline steps:
  1. validate_batch   → ForceScores + rejected + clamped
  2. aggregate        → 5 AggregatedForce
  3. classify         → dominant / weak / balance / readiness
  4. generate         → insights + recommendations
  5. executive summary + confidence metrics + force interactions
  6. assemble the immutable OrganizationalAnalysis

Bad records are dropped into ``rejected`` and never abort the batch.
InvalidThresholds is a caller error and propagates.
"""

from typing import Iterable, Optional

import structlog

from jtbd_readiness.config import Settings, get_settings
from jtbd_readiness.models.analysis import (
    ForceBalanceOut,
    InsightOut,
    OrganizationalAnalysis,
    PerForceOut,
    RecommendationOut,
)
from jtbd_readiness.models.enumerations import JTBDForce
from jtbd_readiness.scoring.executive_summary import (
    build_executive_summary,
    compute_confidence_metrics,
    compute_force_interactions,
)
from jtbd_readiness.scoring.force_aggregator import aggregate
from jtbd_readiness.scoring.force_classifier import classify
from jtbd_readiness.scoring.force_score import RawRecord, validate_batch
from jtbd_readiness.scoring.insight_generator import generate_for

logger = structlog.get_logger(__name__)


class OrganizationalRollup:
    """Roll a batch of scored responses up into one organizational analysis."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        high_threshold: Optional[float] = None,
        low_threshold: Optional[float] = None,
    ):
        self.settings = settings or get_settings()
        self.scale = self.settings.FORCE_SCORE_SCALE
        self.high_threshold = (
            self.settings.DOMINANT_THRESHOLD if high_threshold is None else high_threshold
        )
        self.low_threshold = (
            self.settings.WEAK_THRESHOLD if low_threshold is None else low_threshold
        )
        self.max_themes = self.settings.MAX_KEY_THEMES
        self.top_k = self.settings.TOP_THEMES_LIMIT

    def rollup(
        self,
        records: Iterable[RawRecord],
        survey_id: Optional[str] = None,
        organization_id: Optional[str] = None,
    ) -> OrganizationalAnalysis:
        """
        Run the full pipeline for one survey / organization.

        Args:
            records: Scoring-call records (camelCase mappings), ForceScoreRecords
                     or ForceScores, in batch order.
            survey_id: Optional survey identifier echoed into the result.
            organization_id: Optional organization identifier echoed into the result.

        Returns:
            OrganizationalAnalysis. An empty batch yields sample_size 0,
            readiness_score 50 and no insights or recommendations.

        Raises:
            InvalidThresholds: high_threshold <= low_threshold.
        """
        log = logger.bind(survey_id=survey_id, organization_id=organization_id)

        # 1. Validate
        outcome = validate_batch(records, scale=self.scale, max_themes=self.max_themes)
        scores = outcome.scores

        # 2. Aggregate
        aggregates = aggregate(scores, top_k=self.top_k, scale=self.scale)

        # 3. Classify
        classification = classify(
            aggregates,
            high_threshold=self.high_threshold,
            low_threshold=self.low_threshold,
            scale=self.scale,
        )

        # 4. Insights + recommendations
        bundle = generate_for(aggregates, classification, scale=self.scale)

        # 5. Summary
        summary = build_executive_summary(aggregates, classification, scores)
        confidence_metrics = compute_confidence_metrics(scores)
        interactions = compute_force_interactions(aggregates, scale=self.scale)

        # 6. Assemble
        balance = classification.force_balance
        analysis = OrganizationalAnalysis(
            survey_id=survey_id,
            organization_id=organization_id,
            readiness_score=classification.readiness_score,
            force_balance=ForceBalanceOut(
                push_forces=float(balance.push_forces),
                pull_forces=float(balance.pull_forces),
                net_force=float(balance.net_force),
            ),
            dominant_forces=list(classification.dominant_forces),
            weak_forces=list(classification.weak_forces),
            per_force={
                force: PerForceOut(
                    count=aggregates[force].count,
                    average_strength=float(aggregates[force].average_strength),
                    average_confidence=float(aggregates[force].average_confidence),
                    top_themes=list(aggregates[force].top_themes),
                    strength_label=aggregates[force].strength_label,
                )
                for force in JTBDForce
            },
            insights=[
                InsightOut(
                    force=i.force,
                    statement=i.statement,
                    evidence=list(i.evidence),
                    confidence=float(i.confidence),
                )
                for i in bundle.insights
            ],
            recommendations=[
                RecommendationOut(
                    category=r.category,
                    action=r.action,
                    priority=r.priority,
                    effort=r.effort,
                    impact=r.impact,
                )
                for r in bundle.recommendations
            ],
            blocking_risk=bundle.blocking_risk,
            sample_size=len(scores),
            rejected=outcome.rejected,
            clamped=outcome.clamped,
            executive_summary=summary,
            confidence_metrics=confidence_metrics,
            force_interactions=interactions,
        )

        log.info(
            "rollup_completed",
            sample_size=analysis.sample_size,
            rejected=len(analysis.rejected),
            clamped=len(analysis.clamped),
            readiness_score=analysis.readiness_score,
            blocking_risk=analysis.blocking_risk,
        )
        return analysis


def rollup(
    records: Iterable[RawRecord],
    survey_id: Optional[str] = None,
    organization_id: Optional[str] = None,
    settings: Optional[Settings] = None,
    high_threshold: Optional[float] = None,
    low_threshold: Optional[float] = None,
) -> OrganizationalAnalysis:
    """Module-level shortcut for OrganizationalRollup(...).rollup(...)."""
    return OrganizationalRollup(
        settings=settings,
        high_threshold=high_threshold,
        low_threshold=low_threshold,
    ).rollup(records, survey_id=survey_id, organization_id=organization_id)
