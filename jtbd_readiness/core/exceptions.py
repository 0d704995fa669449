"""
Custom Exceptions - JTBD Readiness Engine
jtbd_readiness/core/exceptions.py

Per-record validation errors are recoverable: the rollup catches them and
reports the record in ``rejected``. Configuration errors propagate.
"""


class ReadinessEngineError(Exception):
    """Base exception for the scoring engine."""

    pass


class ForceScoreValidationError(ReadinessEngineError):
    """A single analysis record could not be turned into a ForceScore."""

    reason = "ForceScoreValidationError"

    def __init__(self, index: int, detail: str):
        self.index = index
        self.detail = detail
        super().__init__(f"Record {index} rejected ({self.reason}): {detail}")


class InvalidForceKind(ForceScoreValidationError):
    """primaryJtbdForce is not one of the five JTBD forces."""

    reason = "InvalidForceKind"

    def __init__(self, index: int, value: object):
        self.value = value
        super().__init__(index, f"unknown primary force {value!r}")


class MalformedForceScore(ForceScoreValidationError):
    """Record is missing required fields or carries non-numeric scores."""

    reason = "MalformedForceScore"


class InvalidThresholds(ReadinessEngineError):
    """high_threshold must be strictly greater than low_threshold."""

    def __init__(self, high_threshold: float, low_threshold: float):
        self.high_threshold = high_threshold
        self.low_threshold = low_threshold
        super().__init__(
            f"high_threshold ({high_threshold}) must be greater than "
            f"low_threshold ({low_threshold})"
        )
