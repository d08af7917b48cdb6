"""Redaction engine – pure text redaction plus the ad-hoc redactor builder."""
from mp_redact.engine.builder import RedactedText, Redactor, RedactorBuilder
from mp_redact.engine.redactor import (
    MAX_PARTIAL_EXPOSE,
    MIN_PARTIAL_CHARS,
    Specialization,
    redact,
    redact_full,
    redact_partial,
)

__all__ = [
    "MAX_PARTIAL_EXPOSE",
    "MIN_PARTIAL_CHARS",
    "RedactedText",
    "Redactor",
    "RedactorBuilder",
    "Specialization",
    "redact",
    "redact_full",
    "redact_partial",
]
