"""
Force Classifier
jtbd_readiness/scoring/force_classifier.py

Labels each force dominant / weak / neutral and computes force balance and
the readiness score.

Scales:
    strength_10 = strength_sum × 10 / (scale × count) — unrounded, used for thresholds
    strength_5  = average_strength × (5 / scale)      — used for balance

Formulas:
    push      = clamp(strength_5(pain_of_old)    + strength_5(pull_of_new),    0, 10)
    pull      = clamp(strength_5(anchors_to_old) + strength_5(anxiety_of_new), 0, 10)
    net       = clamp(push − pull, −10, 10)
    readiness = round_half_up(((net + 10) / 20) × 100)  clamped to [0, 100]

Readiness is a strict linear rescale of net force: −10 → 0, 0 → 50, +10 → 100.

A force with count 0 carries no evidence and is always neutral.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Tuple

import structlog

from jtbd_readiness.core.exceptions import InvalidThresholds
from jtbd_readiness.models.enumerations import JTBDForce
from jtbd_readiness.scoring.force_aggregator import AggregatedForce
from jtbd_readiness.scoring.utils import clamp, rescale, round_half_up

logger = structlog.get_logger(__name__)

DEFAULT_HIGH_THRESHOLD = 7.0
DEFAULT_LOW_THRESHOLD = 3.0

PUSH_FORCES = (JTBDForce.PAIN_OF_OLD, JTBDForce.PULL_OF_NEW)
RESISTANCE_FORCES = (JTBDForce.ANCHORS_TO_OLD, JTBDForce.ANXIETY_OF_NEW)

_TEN = Decimal("10")


@dataclass(frozen=True)
class ForceBalance:
    push_forces: Decimal   # [0, 10]
    pull_forces: Decimal   # [0, 10]
    net_force: Decimal     # [−10, 10]


@dataclass(frozen=True)
class Classification:
    """Output of classify()."""
    dominant_forces: Tuple[JTBDForce, ...]
    weak_forces: Tuple[JTBDForce, ...]
    force_balance: ForceBalance
    readiness_score: int                                   # [0, 100]
    normalized_strengths: Dict[JTBDForce, Decimal] = field(default_factory=dict)  # 0-10, 4 places
    high_threshold: Decimal = Decimal("7")
    low_threshold: Decimal = Decimal("3")


def compute_force_balance(
    aggregates: Dict[JTBDForce, AggregatedForce],
    scale: int = 5,
) -> ForceBalance:
    """Push vs. resistance balance on the 0-5 equivalent of each average."""
    on_five = {f: rescale(aggregates[f].average_strength, scale, 5) for f in JTBDForce}

    push = clamp(sum(on_five[f] for f in PUSH_FORCES), Decimal("0"), _TEN)
    pull = clamp(sum(on_five[f] for f in RESISTANCE_FORCES), Decimal("0"), _TEN)
    net = clamp(push - pull, -_TEN, _TEN)
    return ForceBalance(push_forces=push, pull_forces=pull, net_force=net)


def readiness_from_net_force(net_force: Decimal) -> int:
    """readiness = round_half_up(((net + 10) / 20) × 100), clamped to [0, 100]."""
    raw = (net_force + _TEN) / Decimal("20") * Decimal("100")
    return max(0, min(100, round_half_up(raw)))


def classify(
    aggregates: Dict[JTBDForce, AggregatedForce],
    high_threshold: float = DEFAULT_HIGH_THRESHOLD,
    low_threshold: float = DEFAULT_LOW_THRESHOLD,
    scale: int = 5,
) -> Classification:
    """
    Classify aggregated forces.

    Args:
        aggregates: Output of aggregate(), all 5 forces keyed.
        high_threshold: strength_10 at or above which a force is dominant.
        low_threshold: strength_10 at or below which a force is weak.
        scale: Input scale of average_strength (5 or 10).

    Returns:
        Classification

    Raises:
        InvalidThresholds: high_threshold <= low_threshold.

    Examples:
        >>> result = classify(aggregate([]))
        >>> result.readiness_score
        50
    """
    if high_threshold <= low_threshold:
        raise InvalidThresholds(high_threshold, low_threshold)

    high = Decimal(str(high_threshold))
    low = Decimal(str(low_threshold))

    normalized: Dict[JTBDForce, Decimal] = {}
    dominant = []
    weak = []
    for force in JTBDForce:
        agg = aggregates[force]
        normalized[force] = rescale(agg.average_strength, scale, 10)
        if agg.count == 0:
            continue
        strength_10 = agg.strength_on(10, scale)
        if strength_10 >= high:
            dominant.append(force)
        elif strength_10 <= low:
            weak.append(force)

    balance = compute_force_balance(aggregates, scale)
    readiness = readiness_from_net_force(balance.net_force)

    logger.info(
        "forces_classified",
        dominant=[f.value for f in dominant],
        weak=[f.value for f in weak],
        push_forces=float(balance.push_forces),
        pull_forces=float(balance.pull_forces),
        net_force=float(balance.net_force),
        readiness_score=readiness,
    )

    return Classification(
        dominant_forces=tuple(dominant),
        weak_forces=tuple(weak),
        force_balance=balance,
        readiness_score=readiness,
        normalized_strengths=normalized,
        high_threshold=high,
        low_threshold=low,
    )
