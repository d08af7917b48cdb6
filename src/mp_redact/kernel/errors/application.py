"""Application-layer errors – runtime concerns outside the policy model."""

from __future__ import annotations

from typing import Any

from mp_redact.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class ToggleAlreadySetError(ApplicationError):
    """The redaction toggle was already read or set and is now frozen.

    Returned (not raised) by :func:`mp_redact.toggle.disable`; ``behavior``
    is the value the toggle is frozen at.
    """

    default_code = "redaction_toggle_already_set"

    def __init__(
        self,
        behavior: Any,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or "Redaction behaviour has already been initialised",
            detail={"behavior": str(getattr(behavior, "value", behavior))},
            **kwargs,
        )
        self.behavior = behavior


__all__ = ["ApplicationError", "ToggleAlreadySetError"]
