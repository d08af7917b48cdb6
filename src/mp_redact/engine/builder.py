"""Redaction engine – RedactorBuilder and Redactor for ad-hoc strings.

For data that is not part of an annotated type::

    redactor = RedactorBuilder().char("X").partial().build()
    redactor.redact("john.doe@prima.it")   # 'johX.XXX@XXXXa.it'
"""
from __future__ import annotations

import dataclasses
from typing import Any, Iterable

from mp_redact.engine.redactor import redact
from mp_redact.kernel.errors import PolicyError
from mp_redact.policy.models import RedactionLength, RedactionPolicy, RedactionStyle
from mp_redact.toggle import RedactionToggle


class RedactedText:
    """A value that only ever renders in redacted form.

    ``str()`` redacts ``str(value)`` and ``repr()`` redacts ``repr(value)``,
    both at render time, so the toggle in force when the text is logged
    decides whether it is redacted.
    """

    __slots__ = ("_value", "_policy", "_toggle")

    def __init__(
        self, value: Any, policy: RedactionPolicy, toggle: RedactionToggle | None = None
    ) -> None:
        self._value = value
        self._policy = policy
        self._toggle = toggle

    def __str__(self) -> str:
        return redact(str(self._value), self._policy, toggle=self._toggle)

    def __repr__(self) -> str:
        return redact(repr(self._value), self._policy, toggle=self._toggle)


class Redactor:
    """Redacts arbitrary strings with one pre-built policy."""

    __slots__ = ("_policy", "_toggle")

    def __init__(self, policy: RedactionPolicy, toggle: RedactionToggle | None = None) -> None:
        self._policy = policy
        self._toggle = toggle

    @property
    def policy(self) -> RedactionPolicy:
        return self._policy

    def redact(self, text: str) -> str:
        return redact(text, self._policy, toggle=self._toggle)

    def redact_many(self, texts: Iterable[str]) -> list[str]:
        return [self.redact(text) for text in texts]

    def wrap(self, value: Any) -> RedactedText:
        """Wrap *value* so that formatting it applies this redactor's policy."""
        return RedactedText(value, self._policy, self._toggle)

    def __repr__(self) -> str:
        return f"<Redactor: {self._policy.length!r}, {self._policy.style!r}>"


@dataclasses.dataclass(frozen=True)
class RedactorBuilder:
    """Checked, fluent builder for :class:`Redactor`.

    Each step returns a new builder, so partially configured builders can be
    shared and extended.
    """

    _char: str | None = None
    _string: str | None = None
    _partial: bool = False
    _fixed: int | None = None

    def char(self, char: str) -> "RedactorBuilder":
        """Redact with *char* instead of ``*``."""
        return dataclasses.replace(self, _char=char, _string=None)

    def string(self, text: str) -> "RedactorBuilder":
        """Emit *text* verbatim in place of fixed-width redaction."""
        return dataclasses.replace(self, _string=text, _char=None)

    def partial(self) -> "RedactorBuilder":
        return dataclasses.replace(self, _partial=True)

    def fixed(self, width: int) -> "RedactorBuilder":
        return dataclasses.replace(self, _fixed=width)

    def build(self, toggle: RedactionToggle | None = None) -> Redactor:
        """Validate the configuration and return a :class:`Redactor`.

        Raises
        ------
        PolicyError
            For ``partial`` combined with ``fixed``, a non-positive width, or
            an invalid replacement character or string.
        """
        if self._partial and self._fixed is not None:
            raise PolicyError("`partial` and `fixed` are incompatible")

        if self._fixed is not None:
            length = RedactionLength.fixed(self._fixed)
        elif self._partial:
            length = RedactionLength.partial()
        else:
            length = RedactionLength.full()

        if self._string is not None:
            style = RedactionStyle.string(self._string)
        elif self._char is not None:
            style = RedactionStyle.char(self._char)
        else:
            style = RedactionStyle.asterisks()

        return Redactor(RedactionPolicy(length, style), toggle)


__all__ = ["RedactedText", "Redactor", "RedactorBuilder"]
