"""Domain errors – redaction policy declarations that cannot be honoured."""

from __future__ import annotations

from typing import Any

from mp_redact.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule / invariant is violated."""

    default_code = "domain_error"


class PolicyError(DomainError):
    """A type's redaction annotations are contradictory, misplaced or useless.

    ``location`` names the offending item, e.g. ``Customer.email`` for a
    field, ``Issuer::Other`` for an enum variant or just ``Customer`` for the
    type-level annotation. Resolution is all-or-nothing: a type that raises
    this error must not be rendered at all.
    """

    default_code = "policy_error"

    def __init__(
        self,
        message: str,
        *,
        location: str | None = None,
        **kwargs: Any,
    ) -> None:
        if location is not None:
            message = f"{location}: {message}"
        super().__init__(message, location=location, **kwargs)


__all__ = ["DomainError", "PolicyError"]
