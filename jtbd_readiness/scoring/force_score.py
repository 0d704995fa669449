"""
ForceScore validation
jtbd_readiness/scoring/force_score.py

Turns one raw scoring-call record into a validated, immutable ForceScore.

Rules:
    primaryJtbdForce not one of the five forces   → InvalidForceKind
    missing / non-numeric / NaN forceStrengthScore → MalformedForceScore
    forceStrengthScore outside [0, scale]          → clamped, reported
    confidenceScore outside [0, 5]                 → clamped, reported
    keyThemes                                      → stripped, de-duplicated,
                                                     truncated to max_themes

Out-of-range scores are clamped, not rejected. Every clamp is logged and
returned as a ClampEvent.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import structlog
from pydantic import ValidationError

from jtbd_readiness.core.exceptions import (
    ForceScoreValidationError,
    InvalidForceKind,
    MalformedForceScore,
)
from jtbd_readiness.models.analysis import ClampEvent, RejectedRecord
from jtbd_readiness.models.enumerations import JTBDForce
from jtbd_readiness.models.force_score import ForceScoreRecord
from jtbd_readiness.scoring.utils import clamp, to_decimal

logger = structlog.get_logger(__name__)

CONFIDENCE_MAX = Decimal("5")
DEFAULT_SCALE = 5
DEFAULT_MAX_THEMES = 20

_FORCE_VALUES = {f.value: f for f in JTBDForce}


@dataclass(frozen=True)
class ForceScore:
    """A validated analysis of one survey response."""
    primary_force: JTBDForce
    force_strength: Decimal                       # [0, scale]
    confidence: Decimal                           # [0, 5]
    secondary_forces: Tuple[JTBDForce, ...] = ()  # enum order, excludes primary
    key_themes: Tuple[str, ...] = ()              # extraction order
    index: int = 0                                # position in the batch
    response_id: Optional[str] = None


@dataclass
class ValidationOutcome:
    """Result of validating a whole batch."""
    scores: List[ForceScore] = field(default_factory=list)
    rejected: List[RejectedRecord] = field(default_factory=list)
    clamped: List[ClampEvent] = field(default_factory=list)


RawRecord = Union[Mapping[str, Any], ForceScoreRecord, ForceScore]


def _coerce_force(value: Any) -> Union[JTBDForce, None]:
    if isinstance(value, JTBDForce):
        return value
    if isinstance(value, str):
        return _FORCE_VALUES.get(value.strip())
    return None


def _response_id(raw: Any) -> Optional[str]:
    if isinstance(raw, (ForceScore, ForceScoreRecord)):
        return raw.response_id
    if isinstance(raw, Mapping):
        value = raw.get("responseId", raw.get("response_id"))
        return None if value is None else str(value)
    return None


def _clean_themes(themes: Iterable[str], max_themes: int) -> Tuple[str, ...]:
    seen = set()
    cleaned: List[str] = []
    for theme in themes:
        text = theme.strip()
        if not text or text in seen:
            continue
        seen.add(text)
        cleaned.append(text)
    return tuple(cleaned[:max_themes])


def _clamp_score(
    raw: float,
    upper: Decimal,
    field_name: str,
    index: int,
    response_id: Optional[str],
    events: List[ClampEvent],
) -> Decimal:
    # Clamp before quantizing; very large inputs exceed Decimal precision.
    value = Decimal(str(raw))
    in_range = clamp(value, Decimal("0"), upper)
    bounded = to_decimal(float(in_range))
    if in_range != value:
        logger.warning(
            "clamped_value",
            index=index,
            response_id=response_id,
            field=field_name,
            original=raw,
            clamped=float(bounded),
        )
        events.append(
            ClampEvent(
                index=index,
                response_id=response_id,
                field=field_name,
                original=raw,
                clamped=float(bounded),
            )
        )
    return bounded


def validate_with_events(
    raw: RawRecord,
    *,
    index: int = 0,
    scale: int = DEFAULT_SCALE,
    max_themes: int = DEFAULT_MAX_THEMES,
) -> Tuple[ForceScore, List[ClampEvent]]:
    """
    Validate one record and return the ForceScore with any clamp events.

    Raises:
        InvalidForceKind: primary force missing or not a JTBD force.
        MalformedForceScore: record is not a mapping, or a score is missing
            or not a finite number.
    """
    if isinstance(raw, ForceScore):
        raw = ForceScoreRecord(
            primary_force=raw.primary_force.value,
            secondary_forces=[f.value for f in raw.secondary_forces],
            force_strength_score=float(raw.force_strength),
            confidence_score=float(raw.confidence),
            key_themes=list(raw.key_themes),
            response_id=raw.response_id,
        )

    if isinstance(raw, ForceScoreRecord):
        record = raw
    elif isinstance(raw, Mapping):
        try:
            record = ForceScoreRecord.model_validate(raw)
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(p) for p in err["loc"]) for err in e.errors()
            )
            raise MalformedForceScore(index, f"invalid fields: {fields}") from e
    else:
        raise MalformedForceScore(index, f"expected a mapping, got {type(raw).__name__}")

    primary = _coerce_force(record.primary_force)
    if primary is None:
        raise InvalidForceKind(index, record.primary_force)

    events: List[ClampEvent] = []
    strength = _clamp_score(
        record.force_strength_score, Decimal(scale), "forceStrengthScore", index,
        record.response_id, events,
    )
    confidence = _clamp_score(
        record.confidence_score, CONFIDENCE_MAX, "confidenceScore", index,
        record.response_id, events,
    )

    secondary_set = {_coerce_force(f) for f in record.secondary_forces}
    secondary = tuple(f for f in JTBDForce if f in secondary_set and f != primary)

    score = ForceScore(
        primary_force=primary,
        force_strength=strength,
        confidence=confidence,
        secondary_forces=secondary,
        key_themes=_clean_themes(record.key_themes, max_themes),
        index=index,
        response_id=record.response_id,
    )
    return score, events


def validate(
    raw: RawRecord,
    *,
    index: int = 0,
    scale: int = DEFAULT_SCALE,
    max_themes: int = DEFAULT_MAX_THEMES,
) -> ForceScore:
    """
    Validate one raw scoring-call record.

    Args:
        raw: camelCase mapping from the scoring call, a ForceScoreRecord,
             or an existing ForceScore (re-validated against this scale).
        index: Position of the record in its batch, used in error reports.
        scale: Upper bound of forceStrengthScore (5 or 10).
        max_themes: Maximum number of key themes kept per record.

    Returns:
        ForceScore

    Examples:
        >>> score = validate({"primaryJtbdForce": "pull_of_new",
        ...                   "forceStrengthScore": 6.5, "confidenceScore": 4})
        >>> score.force_strength
        Decimal('5.0000')
    """
    score, _ = validate_with_events(raw, index=index, scale=scale, max_themes=max_themes)
    return score


def validate_batch(
    raws: Iterable[RawRecord],
    *,
    scale: int = DEFAULT_SCALE,
    max_themes: int = DEFAULT_MAX_THEMES,
) -> ValidationOutcome:
    """
    Validate every record of a batch.

    Bad records never abort the batch: they are dropped into
    ``rejected`` with their index and reason.
    """
    outcome = ValidationOutcome()
    for index, raw in enumerate(raws):
        try:
            score, events = validate_with_events(
                raw, index=index, scale=scale, max_themes=max_themes
            )
        except ForceScoreValidationError as e:
            response_id = _response_id(raw)
            logger.warning(
                "record_rejected",
                index=e.index,
                response_id=response_id,
                reason=e.reason,
                detail=e.detail,
            )
            outcome.rejected.append(
                RejectedRecord(
                    index=e.index,
                    response_id=response_id,
                    reason=e.reason,
                    detail=e.detail,
                )
            )
            continue
        outcome.scores.append(score)
        outcome.clamped.extend(events)
    return outcome
