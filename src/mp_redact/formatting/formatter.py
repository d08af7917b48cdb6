"""Formatter – renders a value's fields, redacting each one before interpolation.

The output mirrors the shapes of a debug representation::

    Customer { id: 42, email: '****@*******.**' }   # record
    Token('****')                                   # positional
    Anonymous                                       # unit

and, with ``pretty=True``, the indented multi-line form::

    Customer {
        id: 42,
        email: '****@*******.**',
    }
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Sequence

from mp_redact.engine.redactor import Specialization, redact
from mp_redact.kernel.types import Nothing, from_optional
from mp_redact.policy.models import RedactionPolicy
from mp_redact.policy.resolver import ResolvedField, ResolvedPolicies
from mp_redact.policy.schema import ShapeKind
from mp_redact.toggle import RedactionToggle

INDENT = "    "

# Attribute under which a redactable class keeps its formatter.
FORMATTER_ATTR = "__redacted_formatter__"


@dataclass(frozen=True)
class FieldRendering:
    """One field's plain text and the policy to apply to it.

    ``policy=None`` means the text is interpolated as-is.
    """

    name: str | int
    text: str
    policy: RedactionPolicy | None = None
    specialization: Specialization | None = None


def _indent(text: str) -> str:
    return text.replace("\n", "\n" + INDENT)


def format_value(
    type_name: str,
    kind: ShapeKind,
    fields: Sequence[FieldRendering],
    *,
    pretty: bool = False,
    toggle: RedactionToggle | None = None,
) -> str:
    """Assemble the representation of one value from its field renderings.

    Redacted fields pass through :func:`~mp_redact.engine.redact` first;
    *type_name* is used verbatim, so a redacted variant name must already
    be redacted by the caller.
    """
    if kind is ShapeKind.UNIT or not fields:
        return type_name

    values = [
        f.text if f.policy is None else redact(f.text, f.policy, f.specialization, toggle=toggle)
        for f in fields
    ]

    if kind is ShapeKind.RECORD:
        if pretty:
            body = "".join(
                f"{INDENT}{f.name}: {_indent(value)},\n" for f, value in zip(fields, values)
            )
            return f"{type_name} {{\n{body}}}"
        body = ", ".join(f"{f.name}: {value}" for f, value in zip(fields, values))
        return f"{type_name} {{ {body} }}"

    if kind is ShapeKind.TUPLE:
        if pretty:
            body = "".join(f"{INDENT}{_indent(value)},\n" for value in values)
            return f"{type_name}(\n{body})"
        return f"{type_name}({', '.join(values)})"

    raise ValueError(f"cannot format a value of kind {kind.value!r}")


class RedactedFormatter:
    """Renders live objects of one type using its resolved policy table.

    Record fields are read with ``getattr``, positional fields by index.
    Union values select their variant by ``enum.Enum`` member name, or
    otherwise by the name of their class.
    """

    def __init__(self, resolved: ResolvedPolicies, toggle: RedactionToggle | None = None) -> None:
        self._resolved = resolved
        self._toggle = toggle

    @property
    def resolved(self) -> ResolvedPolicies:
        return self._resolved

    def render(self, value: Any, pretty: bool = False) -> str:
        if self._resolved.kind is ShapeKind.ENUM:
            variant = self._resolved.variant(self._variant_name(value))
            name = variant.name
            if variant.name_policy is not None:
                name = redact(name, variant.name_policy, toggle=self._toggle)
            return self._format(name, variant.kind, variant.fields, value, pretty)
        return self._format(
            self._resolved.type_name, self._resolved.kind, self._resolved.fields, value, pretty
        )

    def _format(
        self,
        name: str,
        kind: ShapeKind,
        fields: Sequence[ResolvedField],
        value: Any,
        pretty: bool,
    ) -> str:
        renderings = [self._field_rendering(f, value, pretty) for f in fields]
        return format_value(name, kind, renderings, pretty=pretty, toggle=self._toggle)

    def _field_rendering(self, field: ResolvedField, value: Any, pretty: bool) -> FieldRendering:
        raw = value[field.name] if isinstance(field.name, int) else getattr(value, field.name)
        if not field.nullable:
            return FieldRendering(field.name, _plain_text(raw, field.use_display, pretty), field.policy)

        option = from_optional(raw)
        if isinstance(option, Nothing):
            text = "None"
        else:
            text = f"Some({_plain_text(option.unwrap(), field.use_display, pretty)})"
        return FieldRendering(field.name, text, field.policy, Specialization.OPTION)

    @staticmethod
    def _variant_name(value: Any) -> str:
        if isinstance(value, enum.Enum):
            return value.name
        return type(value).__name__

    def __repr__(self) -> str:
        return f"<RedactedFormatter: {self._resolved.type_name}>"


def _plain_text(value: Any, use_display: bool, pretty: bool) -> str:
    if use_display:
        return str(value)
    if pretty:
        formatter = getattr(type(value), FORMATTER_ATTR, None)
        if formatter is not None:
            return formatter.render(value, pretty=True)
    return repr(value)


__all__ = ["FORMATTER_ATTR", "FieldRendering", "RedactedFormatter", "format_value"]
