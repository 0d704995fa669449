from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from jtbd_readiness.models.enumerations import (
    ConfidenceLevel,
    JTBDForce,
    Level,
    Priority,
    ReadinessLevel,
    RecommendationCategory,
    StrengthLabel,
)


class WireModel(BaseModel):
    """
    Base for everything in the rollup output.

    Immutable once built; serialises with camelCase keys for the dashboard
    and export consumers.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class RejectedRecord(WireModel):
    """A record dropped during validation."""

    index: int = Field(..., ge=0, description="Position of the record in the submitted batch")
    response_id: Optional[str] = Field(default=None, description="responseId of the record, when it carried one")
    reason: str = Field(..., description="InvalidForceKind or MalformedForceScore")
    detail: str = Field(default="", description="Human-readable explanation")


class ClampEvent(WireModel):
    """An out-of-range score that was pulled back into range instead of rejected."""

    index: int = Field(..., ge=0)
    response_id: Optional[str] = None
    field: str = Field(..., description="forceStrengthScore or confidenceScore")
    original: float
    clamped: float


class ForceBalanceOut(WireModel):
    push_forces: float = Field(..., ge=0, le=10, description="pain_of_old + pull_of_new")
    pull_forces: float = Field(..., ge=0, le=10, description="anchors_to_old + anxiety_of_new")
    net_force: float = Field(..., ge=-10, le=10, description="push - pull")


class PerForceOut(WireModel):
    count: int = Field(..., ge=0)
    average_strength: float = Field(..., ge=0)
    average_confidence: float = Field(..., ge=0, le=5)
    top_themes: List[str] = Field(default_factory=list)
    strength_label: StrengthLabel = StrengthLabel.NONE


class InsightOut(WireModel):
    force: JTBDForce
    statement: str
    evidence: List[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0, le=1)


class RecommendationOut(WireModel):
    category: RecommendationCategory
    action: str
    priority: Priority
    effort: Level
    impact: Level


class ConfidenceMetrics(WireModel):
    average_confidence: float = Field(..., ge=0, le=5)
    min_confidence: float = Field(..., ge=0, le=5)
    max_confidence: float = Field(..., ge=0, le=5)
    consistency_score: float = Field(..., ge=0, le=1)
    sample_size: int = Field(..., ge=0)
    recommended_actions: List[str] = Field(default_factory=list)


class ForceInteractions(WireModel):
    """How the push and resistance forces combine, on the 0-10 force scale."""

    pain_pull_alignment: float = Field(..., ge=0, le=10, description="Mean of pain_of_old and pull_of_new")
    barrier_resistance: float = Field(..., ge=0, le=10, description="Mean of anchors_to_old and anxiety_of_new")
    change_readiness: float = Field(..., ge=0, le=20, description="max(0, drivers - barriers)")
    critical_factors: List[str] = Field(default_factory=list)


class ExecutiveSummary(WireModel):
    readiness_level: ReadinessLevel
    confidence_level: ConfidenceLevel
    key_finding: str
    critical_insight: str
    most_common_force: Optional[JTBDForce] = None
    force_distribution: Dict[JTBDForce, int]
    quality_insight: Optional[str] = None


class OrganizationalAnalysis(WireModel):
    """
    Terminal artifact of a rollup.

    Built on demand from one batch of scored responses and never updated;
    a new batch produces a new analysis.
    """

    survey_id: Optional[str] = None
    organization_id: Optional[str] = None

    readiness_score: int = Field(..., ge=0, le=100)
    force_balance: ForceBalanceOut
    dominant_forces: List[JTBDForce] = Field(default_factory=list)
    weak_forces: List[JTBDForce] = Field(default_factory=list)
    per_force: Dict[JTBDForce, PerForceOut]
    insights: List[InsightOut] = Field(default_factory=list)
    recommendations: List[RecommendationOut] = Field(default_factory=list)
    blocking_risk: bool = False
    sample_size: int = Field(..., ge=0)
    rejected: List[RejectedRecord] = Field(default_factory=list)
    clamped: List[ClampEvent] = Field(default_factory=list)

    executive_summary: ExecutiveSummary
    confidence_metrics: ConfidenceMetrics
    force_interactions: ForceInteractions

    @model_validator(mode="after")
    def validate_force_sets(self):
        """All five forces keyed; no force both dominant and weak."""
        missing = [f.value for f in JTBDForce if f not in self.per_force]
        if missing:
            raise ValueError(f"per_force is missing forces: {missing}")
        overlap = set(self.dominant_forces) & set(self.weak_forces)
        if overlap:
            raise ValueError(
                f"forces cannot be both dominant and weak: {sorted(f.value for f in overlap)}"
            )
        return self

    def to_wire(self) -> Dict[str, Any]:
        """JSON-compatible dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
