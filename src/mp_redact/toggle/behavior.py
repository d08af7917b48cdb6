"""Toggle – RedactionBehavior."""
from __future__ import annotations

from enum import Enum


class RedactionBehavior(str, Enum):
    """How redacted values are rendered for the rest of the process."""

    REDACT = "redact"
    PLAINTEXT = "plaintext"

    def is_redact(self) -> bool:
        return self is RedactionBehavior.REDACT

    def is_plaintext(self) -> bool:
        return self is RedactionBehavior.PLAINTEXT


__all__ = ["RedactionBehavior"]
