"""Redactable – values whose ``str()`` form is the sensitive part.

A wrapper type such as an e-mail address declares one policy for the whole
value and gets an explicit ``redact()`` method; ``str()`` and ``repr()`` are
left untouched::

    @redact_display(redact(partial=True, with_="X"))
    class EmailAddress(str):
        pass

    EmailAddress("john.doe@prima.it").redact()   # 'johX.XXX@XXXXa.it'
"""
from __future__ import annotations

from typing import Any, Callable, Protocol, TextIO, TypeVar, runtime_checkable

from mp_redact.engine.redactor import redact as redact_text
from mp_redact.kernel.errors import PolicyError
from mp_redact.policy.flags import RawFlags
from mp_redact.toggle import RedactionToggle

T = TypeVar("T")


@runtime_checkable
class Redactable(Protocol):
    """Anything that can render itself with sensitive data redacted."""

    def redact(self) -> str: ...

    def redact_into(self, buffer: TextIO) -> None: ...


def redact_display(
    annotation: RawFlags | None = None, *, toggle: RedactionToggle | None = None
) -> Callable[[type[T]], type[T]]:
    """Class decorator adding ``redact()`` and ``redact_into()`` based on ``str()``.

    Only policy modifiers (``partial``, ``fixed``, ``with_``) are accepted;
    scope flags have nothing to apply to on a single value.

    Raises
    ------
    PolicyError
        At decoration time, for scope flags or an invalid policy.
    """

    def decorator(cls: type[T]) -> type[T]:
        location = cls.__name__
        flags = annotation or RawFlags()
        for attr, label in (
            ("redact_all", "all"),
            ("variant", "variant"),
            ("skip", "skip"),
            ("display", "display"),
        ):
            if getattr(flags, attr):
                raise PolicyError(f"`{label}` is not allowed for redactable values", location=location)
        try:
            policy = flags.policy()
        except PolicyError as exc:
            raise PolicyError(exc.message, location=location) from exc

        def redact(self: Any) -> str:
            return redact_text(str(self), policy, toggle=toggle)

        def redact_into(self: Any, buffer: TextIO) -> None:
            buffer.write(redact(self))

        cls.redact = redact  # type: ignore[attr-defined]
        cls.redact_into = redact_into  # type: ignore[attr-defined]
        return cls

    return decorator


__all__ = ["Redactable", "redact_display"]
