"""Structured JSON logging for the engine."""

from cosmoscope.shared.logging.config import (
    StructuredFormatter,
    log_state_transition,
    setup_logging,
    split_tags,
)

__all__ = [
    "StructuredFormatter",
    "log_state_transition",
    "setup_logging",
    "split_tags",
]
