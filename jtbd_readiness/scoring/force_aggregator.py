"""
Force Aggregator
jtbd_readiness/scoring/force_aggregator.py

Folds validated ForceScores into one AggregatedForce per JTBD force.

Algorithm (single pass):
  1. Initialize accumulators for each of the 5 forces
  2. For each score, bucket by primary_force:
       count += 1, strength_sum += strength, confidence_sum += confidence
       every key theme → per-force frequency table (first-seen order kept)
  3. Averages = sum / count, 0 when count is 0 (never NaN). The exact sum
     is kept so thresholds compare against the unrounded mean.
  4. top_themes = themes sorted by (frequency desc, first-seen asc)[:top_k]

All five forces are always present in the result, even with count 0.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from jtbd_readiness.models.enumerations import JTBDForce, StrengthLabel
from jtbd_readiness.scoring.force_score import ForceScore
from jtbd_readiness.scoring.utils import mean, rescale, strength_label

logger = structlog.get_logger(__name__)

DEFAULT_TOP_K = 5


@dataclass(frozen=True)
class AggregatedForce:
    """Aggregate of all analyses whose primary force is ``force``."""
    force: JTBDForce
    count: int
    average_strength: Decimal                      # input scale, 4 places
    average_confidence: Decimal                    # 0-5, 4 places
    top_themes: Tuple[str, ...]
    theme_frequencies: Tuple[Tuple[str, int], ...]  # full ranked table
    strength_label: StrengthLabel = StrengthLabel.NONE
    strength_sum: Decimal = Decimal("0")            # exact, input scale

    def strength_on(self, to_max: int, scale: int) -> Decimal:
        """Unrounded average strength on [0, to_max]; 0 when count is 0."""
        if self.count == 0:
            return Decimal("0")
        return self.strength_sum * Decimal(to_max) / (Decimal(scale) * self.count)


class _ThemeTable:
    """Theme → (frequency, first-seen ordinal), ranked stably."""

    def __init__(self):
        self._freq: Dict[str, int] = {}
        self._first_seen: Dict[str, int] = {}

    def add(self, theme: str, ordinal: int) -> None:
        if theme not in self._freq:
            self._freq[theme] = 0
            self._first_seen[theme] = ordinal
        self._freq[theme] += 1

    def ranked(self) -> List[Tuple[str, int]]:
        return sorted(
            self._freq.items(),
            key=lambda item: (-item[1], self._first_seen[item[0]]),
        )


def aggregate(
    scores: Sequence[ForceScore],
    top_k: int = DEFAULT_TOP_K,
    scale: int = 5,
) -> Dict[JTBDForce, AggregatedForce]:
    """
    Aggregate force scores per primary force.

    Args:
        scores: Validated ForceScores, in batch order.
        top_k: Number of top themes kept per force.
        scale: Input scale of force_strength, used only for strength_label.

    Returns:
        Dict with all 5 JTBDForce keys, in enum order.
    """
    counts: Dict[JTBDForce, int] = {f: 0 for f in JTBDForce}
    strengths: Dict[JTBDForce, List[Decimal]] = {f: [] for f in JTBDForce}
    confidences: Dict[JTBDForce, List[Decimal]] = {f: [] for f in JTBDForce}
    themes: Dict[JTBDForce, _ThemeTable] = {f: _ThemeTable() for f in JTBDForce}

    ordinal = 0
    for score in scores:
        force = score.primary_force
        counts[force] += 1
        strengths[force].append(score.force_strength)
        confidences[force].append(score.confidence)
        for theme in score.key_themes:
            themes[force].add(theme, ordinal)
            ordinal += 1

    results: Dict[JTBDForce, AggregatedForce] = {}
    for force in JTBDForce:
        avg_strength = mean(strengths[force])
        ranked = themes[force].ranked()
        results[force] = AggregatedForce(
            force=force,
            count=counts[force],
            average_strength=avg_strength,
            average_confidence=mean(confidences[force]),
            top_themes=tuple(theme for theme, _ in ranked[:top_k]),
            theme_frequencies=tuple(ranked),
            strength_label=strength_label(rescale(avg_strength, scale, 5), counts[force]),
            strength_sum=sum(strengths[force], Decimal("0")),
        )

    logger.info(
        "force_aggregated",
        sample_size=len(scores),
        counts={f.value: c for f, c in counts.items()},
    )
    return results


def force_distribution(aggregates: Dict[JTBDForce, AggregatedForce]) -> Dict[JTBDForce, int]:
    """Number of analyses per primary force, in enum order."""
    return {f: aggregates[f].count for f in JTBDForce}


def most_common_force(aggregates: Dict[JTBDForce, AggregatedForce]) -> Optional[JTBDForce]:
    """Force with the highest count; earliest in enum order on ties; None if empty."""
    best: Optional[JTBDForce] = None
    for force in JTBDForce:
        count = aggregates[force].count
        if count > 0 and (best is None or count > aggregates[best].count):
            best = force
    return best
