"""Root error class for the mp-redact error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the mp-redact error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        location: The declaration the error is about, e.g. ``Customer.email``
            or ``Issuer::Other``.
        detail: Extra context; never holds field values.
        cause: Original exception that triggered this error.
    """

    default_code: str = "mp_redact_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        location: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.location = location
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """Return the single-line JSON form used in log records."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        where = f", location={self.location!r}" if self.location is not None else ""
        return f"{type(self).__name__}(code={self.code!r}{where}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict; ``location`` and ``cause`` only when set."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.location is not None:
            payload["location"] = self.location
        payload["detail"] = self.detail
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
