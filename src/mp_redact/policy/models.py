"""Policy value types – how much to redact and with what."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mp_redact.kernel.errors import PolicyError

DEFAULT_FILL = "*"


class LengthKind(str, Enum):
    FULL = "full"
    PARTIAL = "partial"
    FIXED = "fixed"


class StyleKind(str, Enum):
    ASTERISKS = "asterisks"
    CHAR = "char"
    STR = "str"


@dataclass(frozen=True)
class RedactionLength:
    """How much of the data to redact.

    ``FULL`` and ``PARTIAL`` ignore the declared length of the data;
    ``FIXED`` ignores both its length and its contents and always emits
    ``width`` characters.
    """

    kind: LengthKind = LengthKind.FULL
    width: int | None = None

    def __post_init__(self) -> None:
        if self.kind is LengthKind.FIXED:
            if isinstance(self.width, bool) or not isinstance(self.width, int) or self.width <= 0:
                raise PolicyError(
                    f"fixed redaction width must be a positive integer, got {self.width!r}"
                )
        elif self.width is not None:
            raise PolicyError(f"{self.kind.value} redaction takes no width")

    @classmethod
    def full(cls) -> "RedactionLength":
        return cls(LengthKind.FULL)

    @classmethod
    def partial(cls) -> "RedactionLength":
        return cls(LengthKind.PARTIAL)

    @classmethod
    def fixed(cls, width: int) -> "RedactionLength":
        return cls(LengthKind.FIXED, width)

    @property
    def is_fixed(self) -> bool:
        return self.kind is LengthKind.FIXED

    @property
    def is_partial(self) -> bool:
        return self.kind is LengthKind.PARTIAL

    def __repr__(self) -> str:
        if self.kind is LengthKind.FIXED:
            return f"Fixed({self.width})"
        return self.kind.value.capitalize()


@dataclass(frozen=True)
class RedactionStyle:
    """What to redact with: asterisks, a single character or a literal string.

    A ``STR`` style only takes effect together with a fixed length, where it
    is emitted verbatim; full and partial redaction always work one fill
    character per position and fall back to ``*``.
    """

    kind: StyleKind = StyleKind.ASTERISKS
    value: str | None = None

    def __post_init__(self) -> None:
        if self.kind is StyleKind.ASTERISKS:
            if self.value is not None:
                raise PolicyError("asterisk redaction takes no replacement value")
        elif self.kind is StyleKind.CHAR:
            if not isinstance(self.value, str) or len(self.value) != 1:
                raise PolicyError(
                    f"redaction character must be a single character, got {self.value!r}"
                )
        elif not isinstance(self.value, str) or not self.value:
            raise PolicyError("redaction string must be a non-empty string")

    @classmethod
    def asterisks(cls) -> "RedactionStyle":
        return cls(StyleKind.ASTERISKS)

    @classmethod
    def char(cls, char: str) -> "RedactionStyle":
        return cls(StyleKind.CHAR, char)

    @classmethod
    def string(cls, text: str) -> "RedactionStyle":
        return cls(StyleKind.STR, text)

    @property
    def fill_char(self) -> str:
        if self.kind is StyleKind.CHAR:
            return self.value  # type: ignore[return-value]
        return DEFAULT_FILL

    def __repr__(self) -> str:
        if self.kind is StyleKind.ASTERISKS:
            return "Asterisks"
        label = "Char" if self.kind is StyleKind.CHAR else "Str"
        return f"{label}({self.value!r})"


@dataclass(frozen=True)
class RedactionPolicy:
    """The unit of configuration attached to a field, a variant name or a type."""

    length: RedactionLength = field(default_factory=RedactionLength.full)
    style: RedactionStyle = field(default_factory=RedactionStyle.asterisks)

    @classmethod
    def default(cls) -> "RedactionPolicy":
        return cls()

    @classmethod
    def full(cls, style: RedactionStyle | None = None) -> "RedactionPolicy":
        return cls(RedactionLength.full(), style or RedactionStyle.asterisks())

    @classmethod
    def partial(cls, style: RedactionStyle | None = None) -> "RedactionPolicy":
        return cls(RedactionLength.partial(), style or RedactionStyle.asterisks())

    @classmethod
    def fixed(cls, width: int, style: RedactionStyle | None = None) -> "RedactionPolicy":
        return cls(RedactionLength.fixed(width), style or RedactionStyle.asterisks())


__all__ = [
    "DEFAULT_FILL",
    "LengthKind",
    "RedactionLength",
    "RedactionPolicy",
    "RedactionStyle",
    "StyleKind",
]
