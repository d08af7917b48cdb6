"""Policy flags – the unresolved annotation surface.

A :class:`RawFlags` is what an author writes next to a field, a variant or a
type. It is permissive: contradictions are reported by the
resolver, which knows *where* the flags were written.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mp_redact.kernel.errors import PolicyError
from mp_redact.policy.models import RedactionLength, RedactionPolicy, RedactionStyle

_MODIFIERS = {
    "all": "redact_all",
    "variant": "variant",
    "skip": "skip",
    "display": "display",
    "partial": "partial",
    "fixed": "fixed",
    "with_": "with_",
    "with": "with_",
}


@dataclass(frozen=True)
class RawFlags:
    """One annotation: scope flags plus policy overrides.

    ``with_`` is a single character (redact with that character) or a longer
    string (emit it verbatim for fixed-width redaction).
    """

    redact_all: bool = False
    variant: bool = False
    skip: bool = False
    display: bool = False
    partial: bool = False
    fixed: int | None = None
    with_: str | None = None

    @property
    def has_modifiers(self) -> bool:
        """Whether anything besides ``skip`` and the scope flags is set."""
        return self.display or self.partial or self.fixed is not None or self.with_ is not None

    def policy(self) -> RedactionPolicy:
        """Build the policy these flags describe, starting from the default.

        Raises
        ------
        PolicyError
            When ``partial`` and ``fixed`` are combined, or a width or
            replacement value is invalid.
        """
        if self.partial and self.fixed is not None:
            raise PolicyError("`partial` and `fixed` are incompatible")

        if self.fixed is not None:
            length = RedactionLength.fixed(self.fixed)
        elif self.partial:
            length = RedactionLength.partial()
        else:
            length = RedactionLength.full()

        if self.with_ is None:
            style = RedactionStyle.asterisks()
        elif isinstance(self.with_, str) and len(self.with_) == 1:
            style = RedactionStyle.char(self.with_)
        else:
            style = RedactionStyle.string(self.with_)

        return RedactionPolicy(length, style)

    def describe(self) -> str:
        """Render the flags the way they were declared, e.g. ``redact(all, partial)``."""
        parts: list[str] = []
        for attr, label in (
            ("redact_all", "all"),
            ("variant", "variant"),
            ("skip", "skip"),
            ("display", "display"),
            ("partial", "partial"),
        ):
            if getattr(self, attr):
                parts.append(label)
        if self.fixed is not None:
            parts.append(f"fixed={self.fixed}")
        if self.with_ is not None:
            parts.append(f"with={self.with_!r}")
        return f"redact({', '.join(parts)})"


def redact(**modifiers: Any) -> RawFlags:
    """Declare a redaction annotation.

    Accepted modifiers: ``all``, ``variant``, ``skip``, ``display``,
    ``partial``, ``fixed=<int>`` and ``with_=<char or str>``::

        redact()                          # full redaction with '*'
        redact(partial=True, with_="X")   # partial redaction with 'X'
        redact(fixed=3)                   # always '***'
        redact(all=True, partial=True)    # type-level default
        redact(variant=True)              # redact an enum variant's name
    """
    kwargs: dict[str, Any] = {}
    for name, value in modifiers.items():
        attr = _MODIFIERS.get(name)
        if attr is None:
            raise PolicyError(f"unknown redaction modifier `{name}`")
        kwargs[attr] = value
    return RawFlags(**kwargs)


__all__ = ["RawFlags", "redact"]
