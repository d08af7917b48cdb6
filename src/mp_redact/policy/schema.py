"""Policy schema – the declared shape of a type, with its raw annotations.

Descriptors only live for the one-time resolution pass of a type. They are
built either by hand::

    schema = TypeSchema.record(
        "Customer",
        [
            FieldDescriptor.of("id"),
            FieldDescriptor.of("email", redact(), nullable=True),
            FieldDescriptor.of("name", redact(partial=True)),
        ],
    )

or by reflection over a dataclass, see :mod:`mp_redact.formatting.reflection`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from mp_redact.policy.flags import RawFlags


class ShapeKind(str, Enum):
    RECORD = "record"
    TUPLE = "tuple"
    UNIT = "unit"
    ENUM = "enum"


@dataclass(frozen=True)
class FieldDescriptor:
    """One record field or tuple position.

    ``name`` is the attribute name, or an integer index for positional
    access. ``nullable`` states that the declared type is an optional
    wrapper, which turns on the engine's option specialisation.
    """

    name: str | int
    nullable: bool = False
    annotations: tuple[RawFlags, ...] = ()

    @classmethod
    def of(cls, name: str | int, *annotations: RawFlags, nullable: bool = False) -> "FieldDescriptor":
        return cls(name=name, nullable=nullable, annotations=tuple(annotations))


@dataclass(frozen=True)
class VariantDescriptor:
    """One case of a tagged union."""

    name: str
    kind: ShapeKind = ShapeKind.UNIT
    fields: tuple[FieldDescriptor, ...] = ()
    annotations: tuple[RawFlags, ...] = ()

    @classmethod
    def record(
        cls, name: str, fields: Iterable[FieldDescriptor], *annotations: RawFlags
    ) -> "VariantDescriptor":
        return cls(name, ShapeKind.RECORD, tuple(fields), tuple(annotations))

    @classmethod
    def positional(
        cls, name: str, fields: Iterable[FieldDescriptor], *annotations: RawFlags
    ) -> "VariantDescriptor":
        return cls(name, ShapeKind.TUPLE, tuple(fields), tuple(annotations))

    @classmethod
    def unit(cls, name: str, *annotations: RawFlags) -> "VariantDescriptor":
        return cls(name, ShapeKind.UNIT, (), tuple(annotations))


@dataclass(frozen=True)
class TypeSchema:
    """A record, tuple or enum type as declared by its author."""

    name: str
    kind: ShapeKind
    fields: tuple[FieldDescriptor, ...] = ()
    variants: tuple[VariantDescriptor, ...] = ()
    annotations: tuple[RawFlags, ...] = ()

    @classmethod
    def record(
        cls, name: str, fields: Iterable[FieldDescriptor], *annotations: RawFlags
    ) -> "TypeSchema":
        return cls(name, ShapeKind.RECORD, fields=tuple(fields), annotations=tuple(annotations))

    @classmethod
    def positional(
        cls, name: str, fields: Iterable[FieldDescriptor], *annotations: RawFlags
    ) -> "TypeSchema":
        return cls(name, ShapeKind.TUPLE, fields=tuple(fields), annotations=tuple(annotations))

    @classmethod
    def unit(cls, name: str, *annotations: RawFlags) -> "TypeSchema":
        return cls(name, ShapeKind.UNIT, annotations=tuple(annotations))

    @classmethod
    def enum(
        cls, name: str, variants: Iterable[VariantDescriptor], *annotations: RawFlags
    ) -> "TypeSchema":
        return cls(name, ShapeKind.ENUM, variants=tuple(variants), annotations=tuple(annotations))


__all__ = ["FieldDescriptor", "ShapeKind", "TypeSchema", "VariantDescriptor"]
