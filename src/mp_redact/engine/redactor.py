"""Redaction engine – character-level redaction of rendered text.

:func:`redact` is pure and reentrant: it only reads its arguments and the
frozen toggle, so it may be called from any number of threads.

Only alphanumeric code points (``str.isalnum``) are redacted; whitespace,
punctuation and symbols pass through, which keeps the structure of the
rendered value readable.
"""
from __future__ import annotations

from enum import Enum

from mp_redact.policy.models import RedactionPolicy, StyleKind
from mp_redact.toggle import RedactionToggle, default_toggle

# Strings with fewer alphanumerics than this are never partially exposed.
MIN_PARTIAL_CHARS = 5
# Upper bound on alphanumerics exposed at each end by partial redaction.
MAX_PARTIAL_EXPOSE = 3

_NONE_TEXT = "None"
_SOME_PREFIX = "Some("
_SOME_SUFFIX = ")"


class Specialization(str, Enum):
    """Rendering shortcuts selected from schema knowledge, not from the text."""

    OPTION = "option"


def redact_full(text: str, fill: str = "*") -> str:
    """Replace every alphanumeric character of *text* with *fill*."""
    return "".join(fill if char.isalnum() else char for char in text)


def redact_partial(text: str, fill: str = "*") -> str:
    """Expose up to three alphanumerics at each end of *text*, redact the rest.

    Text with fewer than :data:`MIN_PARTIAL_CHARS` alphanumerics is redacted
    fully. Zones are assigned by position among alphanumerics only.
    """
    count = sum(1 for char in text if char.isalnum())
    if count < MIN_PARTIAL_CHARS:
        return redact_full(text, fill)

    expose = min(count // 3, MAX_PARTIAL_EXPOSE)
    prefix = expose
    middle = count - 2 * expose

    out: list[str] = []
    for char in text:
        if not char.isalnum():
            out.append(char)
        elif prefix > 0:
            prefix -= 1
            out.append(char)
        elif middle > 0:
            middle -= 1
            out.append(fill)
        else:
            out.append(char)
    return "".join(out)


def _redact_variable(text: str, policy: RedactionPolicy) -> str:
    fill = policy.style.fill_char
    if policy.length.is_partial:
        return redact_partial(text, fill)
    return redact_full(text, fill)


def redact(
    text: str,
    policy: RedactionPolicy | None = None,
    specialization: Specialization | None = None,
    *,
    toggle: RedactionToggle | None = None,
) -> str:
    """Redact already-rendered *text* according to *policy*.

    Parameters
    ----------
    text:
        The plain rendering of the value (its ``repr()`` or ``str()``).
    policy:
        Defaults to full redaction with ``*``.
    specialization:
        :attr:`Specialization.OPTION` when the schema declares the value as
        nullable: ``None`` passes through and only the inside of
        ``Some(...)`` is redacted.
    toggle:
        The toggle to consult; defaults to the process-wide one.
    """
    if (toggle or default_toggle()).behavior().is_plaintext():
        return text

    policy = policy or RedactionPolicy.default()

    if policy.length.is_fixed:
        if policy.style.kind is StyleKind.STR:
            # Literal replacements are emitted whole, whatever the width.
            return policy.style.value  # type: ignore[return-value]
        return policy.style.fill_char * policy.length.width  # type: ignore[operator]

    if specialization is Specialization.OPTION:
        if text == _NONE_TEXT:
            return text
        if (
            len(text) > len(_SOME_PREFIX)
            and text.startswith(_SOME_PREFIX)
            and text.endswith(_SOME_SUFFIX)
        ):
            inner = text[len(_SOME_PREFIX) : -len(_SOME_SUFFIX)]
            return f"{_SOME_PREFIX}{_redact_variable(inner, policy)}{_SOME_SUFFIX}"
        return redact_full(text, policy.style.fill_char)

    return _redact_variable(text, policy)


__all__ = [
    "MAX_PARTIAL_EXPOSE",
    "MIN_PARTIAL_CHARS",
    "Specialization",
    "redact",
    "redact_full",
    "redact_partial",
]
