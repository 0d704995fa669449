"""
Core Package - JTBD Readiness Engine
jtbd_readiness/core/__init__.py

Core infrastructure: exceptions, logging.
"""

from jtbd_readiness.core.exceptions import (
    ForceScoreValidationError,
    InvalidForceKind,
    InvalidThresholds,
    MalformedForceScore,
    ReadinessEngineError,
)
from jtbd_readiness.core.logging_config import configure_logging, get_logger

__all__ = [
    # Exceptions
    "ForceScoreValidationError",
    "InvalidForceKind",
    "InvalidThresholds",
    "MalformedForceScore",
    "ReadinessEngineError",
    # Logging
    "configure_logging",
    "get_logger",
]
