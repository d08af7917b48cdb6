"""Reflection – builds schemas from dataclasses and named tuples.

Annotations live next to the fields they apply to::

    @redactable()
    @dataclass
    class Customer:
        id: int
        email: str | None = field(redact=redact(), default=None)
        name: str = field(redact=redact(partial=True), default="")

    repr(Customer(1, "jane@prima.it", "Jane Doe"))
    # "Customer { id: 1, email: Some('****@*****.**'), name: 'Ja** *oe' }"

Named tuples cannot carry field metadata; they declare per-field
annotations in a ``__redact_fields__`` mapping keyed by field name.

Schemas are resolved when the decorator runs, so a contradictory
declaration raises :class:`~mp_redact.kernel.errors.PolicyError` at import
time rather than on first render.
"""
from __future__ import annotations

import dataclasses
import enum
import types
import typing
from typing import Any, Callable, Iterable, Mapping, TypeVar

from mp_redact.formatting.formatter import FORMATTER_ATTR, RedactedFormatter
from mp_redact.kernel.types import Nothing, Some
from mp_redact.policy.flags import RawFlags
from mp_redact.policy.resolver import ResolvedPolicies, resolve_policy
from mp_redact.policy.schema import FieldDescriptor, ShapeKind, TypeSchema, VariantDescriptor
from mp_redact.toggle import RedactionToggle

T = TypeVar("T")

METADATA_KEY = "mp_redact"
NULLABLE_KEY = "mp_redact.nullable"
FIELDS_ATTR = "__redact_fields__"


def field(
    *,
    redact: RawFlags | Iterable[RawFlags] | None = None,
    nullable: bool | None = None,
    **kwargs: Any,
) -> Any:
    """``dataclasses.field`` with redaction annotations attached as metadata.

    *nullable* overrides what the type hint says, for fields typed ``Any`` or
    with a custom optional wrapper.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = _as_tuple(redact)
    if nullable is not None:
        metadata[NULLABLE_KEY] = nullable
    return dataclasses.field(metadata=metadata, **kwargs)


def _as_tuple(annotations: RawFlags | Iterable[RawFlags] | None) -> tuple[RawFlags, ...]:
    if annotations is None:
        return ()
    if isinstance(annotations, RawFlags):
        return (annotations,)
    return tuple(annotations)


# ---------------------------------------------------------------------------
# Nullability
# ---------------------------------------------------------------------------


def _is_nullable(hint: Any) -> bool:
    """Whether a type hint declares an optional value."""
    if hint in (Some, Nothing):
        return True
    if isinstance(hint, typing.TypeAliasType):
        return _is_nullable(hint.__value__)

    origin = typing.get_origin(hint)
    if origin in (Some, Nothing):
        return True
    if isinstance(origin, typing.TypeAliasType):
        return _is_nullable(origin.__value__)
    if origin is typing.Union or origin is types.UnionType:
        return any(arg is type(None) or _is_nullable(arg) for arg in typing.get_args(hint))
    return False


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise TypeError(
            f"cannot resolve the type hints of {cls.__name__} ({exc}); nullability "
            "is read from resolved hints, so every annotation must be importable"
        ) from exc


# ---------------------------------------------------------------------------
# Schema extraction
# ---------------------------------------------------------------------------


def _is_named_tuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def _shape(cls: type) -> tuple[ShapeKind, tuple[FieldDescriptor, ...]]:
    hints = _type_hints(cls)
    declared: Mapping[str, Any] = getattr(cls, FIELDS_ATTR, {})

    if dataclasses.is_dataclass(cls):
        # Fields hidden from the dataclass repr stay hidden.
        fields = tuple(
            FieldDescriptor(
                name=f.name,
                nullable=f.metadata.get(NULLABLE_KEY, _is_nullable(hints.get(f.name, f.type))),
                annotations=_as_tuple(f.metadata.get(METADATA_KEY, declared.get(f.name))),
            )
            for f in dataclasses.fields(cls)
            if f.repr
        )
        return (ShapeKind.RECORD if fields else ShapeKind.UNIT), fields

    if _is_named_tuple(cls):
        fields = tuple(
            FieldDescriptor(
                name=index,
                nullable=_is_nullable(hints.get(name)),
                annotations=_as_tuple(declared.get(name)),
            )
            for index, name in enumerate(cls._fields)  # type: ignore[attr-defined]
        )
        return (ShapeKind.TUPLE if fields else ShapeKind.UNIT), fields

    if not hints:
        return ShapeKind.UNIT, ()
    raise TypeError(f"{cls.__name__} is neither a dataclass nor a named tuple")


def schema_for(cls: type, *annotations: RawFlags) -> TypeSchema:
    """Build the :class:`TypeSchema` of a dataclass or named tuple.

    *annotations* are the type-level ones, e.g. ``redact(all=True)``.
    """
    kind, fields = _shape(cls)
    return TypeSchema(cls.__name__, kind, fields=fields, annotations=tuple(annotations))


def _variant_schema(cls: type, annotations: tuple[RawFlags, ...]) -> VariantDescriptor:
    kind, fields = _shape(cls)
    return VariantDescriptor(cls.__name__, kind, fields, annotations)


# ---------------------------------------------------------------------------
# Decorators
# ---------------------------------------------------------------------------


def _install(cls: type, formatter: RedactedFormatter) -> None:
    def __repr__(self: Any) -> str:
        return formatter.render(self)

    __repr__.__qualname__ = f"{cls.__qualname__}.__repr__"
    cls.__repr__ = __repr__  # type: ignore[method-assign]
    setattr(cls, FORMATTER_ATTR, formatter)


def redactable(
    *annotations: RawFlags, toggle: RedactionToggle | None = None
) -> Callable[[type[T]], type[T]]:
    """Class decorator replacing ``__repr__`` with the redacted representation.

    Apply it above ``@dataclass`` so the generated ``__repr__`` is replaced.
    """

    def decorator(cls: type[T]) -> type[T]:
        resolved = resolve_policy(schema_for(cls, *annotations))
        _install(cls, RedactedFormatter(resolved, toggle))
        return cls

    return decorator


def redactable_union(
    name: str,
    variants: type[enum.Enum] | Iterable[type],
    *annotations: RawFlags,
    member_annotations: Mapping[str, RawFlags | Iterable[RawFlags]] | None = None,
    toggle: RedactionToggle | None = None,
) -> RedactedFormatter:
    """Declare a tagged union and install its redacted ``__repr__``.

    *variants* is either an ``enum.Enum`` class, whose members become unit
    variants, or the classes making up the union (dataclasses, named tuples
    or field-less classes). *annotations* are the union-level ones, e.g.
    ``redact(all=True, variant=True)``; *member_annotations* maps variant
    names to their own annotations.
    """
    member_annotations = member_annotations or {}

    if isinstance(variants, type) and issubclass(variants, enum.Enum):
        descriptors = [
            VariantDescriptor.unit(member, *_as_tuple(member_annotations.get(member)))
            for member in variants.__members__
        ]
        targets: list[type] = [variants]
    else:
        targets = list(variants)
        descriptors = [
            _variant_schema(cls, _as_tuple(member_annotations.get(cls.__name__))) for cls in targets
        ]

    known = {d.name for d in descriptors}
    unknown = sorted(set(member_annotations) - known)
    if unknown:
        raise TypeError(f"{name} has no variants named {', '.join(unknown)}")

    resolved = resolve_policy(TypeSchema.enum(name, descriptors, *annotations))
    formatter = RedactedFormatter(resolved, toggle)
    for cls in targets:
        _install(cls, formatter)
    return formatter


def policies_of(cls: type) -> ResolvedPolicies:
    """Return the resolved policy table installed on a redactable class."""
    formatter: RedactedFormatter | None = getattr(cls, FORMATTER_ATTR, None)
    if formatter is None:
        raise TypeError(f"{cls.__name__} is not redactable")
    return formatter.resolved


def pretty_repr(value: Any) -> str:
    """Render a redactable value in its indented multi-line form."""
    formatter: RedactedFormatter | None = getattr(type(value), FORMATTER_ATTR, None)
    if formatter is None:
        raise TypeError(f"{type(value).__name__} is not redactable")
    return formatter.render(value, pretty=True)


__all__ = [
    "field",
    "policies_of",
    "pretty_repr",
    "redactable",
    "redactable_union",
    "schema_for",
]
