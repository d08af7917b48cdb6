"""Policy resolver – turns a declared schema into an immutable policy table.

Resolution happens once per type. It either succeeds completely or raises
:class:`~mp_redact.kernel.errors.PolicyError`; a type is never rendered with a
partially resolved table.

Per field:

1. the field's own annotation wins (attributes it does not set take the
   library default, not the inherited one);
2. otherwise the enclosing ``redact(all, ...)`` default applies;
3. otherwise the field is rendered as-is;
4. ``redact(skip)`` opts a field out of an inherited default.

Variant names resolve independently: an explicit ``redact(variant, ...)`` on
the variant, else the enum-level ``redact(all, variant, ...)``. A variant's
``redact(all, ...)`` never implies its name is redacted.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from mp_redact.kernel.errors import PolicyError
from mp_redact.observability.logging import get_logger
from mp_redact.policy.flags import RawFlags
from mp_redact.policy.models import RedactionPolicy
from mp_redact.policy.schema import FieldDescriptor, ShapeKind, TypeSchema, VariantDescriptor

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedField:
    name: str | int
    policy: RedactionPolicy | None = None
    use_display: bool = False
    nullable: bool = False

    @property
    def redacted(self) -> bool:
        return self.policy is not None


@dataclass(frozen=True)
class ResolvedVariant:
    name: str
    kind: ShapeKind
    name_policy: RedactionPolicy | None = None
    fields: tuple[ResolvedField, ...] = ()


@dataclass(frozen=True)
class ResolvedPolicies:
    """The resolved policy table of one type."""

    type_name: str
    kind: ShapeKind
    fields: tuple[ResolvedField, ...] = ()
    variants: tuple[ResolvedVariant, ...] = ()

    @property
    def redacted_count(self) -> int:
        """Number of fields and variant names that end up redacted."""
        count = sum(1 for f in self.fields if f.redacted)
        for variant in self.variants:
            count += variant.name_policy is not None
            count += sum(1 for f in variant.fields if f.redacted)
        return count

    def variant(self, name: str) -> ResolvedVariant:
        for variant in self.variants:
            if variant.name == name:
                return variant
        raise KeyError(f"{self.type_name} has no variant {name!r}")


class PolicyResolver:
    """Computes the effective policy of every field and variant of a type."""

    def resolve(self, schema: TypeSchema) -> ResolvedPolicies:
        """Resolve *schema* or raise :class:`PolicyError` naming the offending item."""
        try:
            if schema.kind is ShapeKind.ENUM:
                resolved = self._resolve_enum(schema)
            else:
                resolved = self._resolve_record(schema)

            if resolved.redacted_count == 0:
                raise PolicyError(
                    "redaction does nothing by default, annotate at least one field or variant "
                    "to redact, or render the type with its ordinary repr() instead",
                    location=schema.name,
                )
        except PolicyError as exc:
            logger.debug("policy.rejected", type_name=schema.name, location=exc.location)
            raise

        logger.debug(
            "policy.resolved",
            type_name=schema.name,
            kind=schema.kind.value,
            redacted=resolved.redacted_count,
        )
        return resolved

    # ------------------------------------------------------------------
    # Records and tuples
    # ------------------------------------------------------------------

    def _resolve_record(self, schema: TypeSchema) -> ResolvedPolicies:
        if schema.kind is ShapeKind.UNIT:
            raise PolicyError(
                "unit types contain no data and need no redaction",
                location=schema.name,
            )

        default: RawFlags | None = None
        if len(schema.annotations) > 1:
            raise PolicyError(
                "expected only one or zero type-level `redact(all, ...)` annotations",
                location=schema.name,
            )
        if schema.annotations:
            default = schema.annotations[0]
            if default.variant:
                raise PolicyError(
                    "`redact(variant, ...)` is invalid for records and tuples",
                    location=schema.name,
                )
            if not default.redact_all:
                raise PolicyError(
                    "at least `redact(all)` is required here to redact all fields",
                    location=schema.name,
                )
            self._reject_skip_on_default(default, schema.name)

        fields = self._resolve_fields(schema.name, schema.fields, default)
        return ResolvedPolicies(schema.name, schema.kind, fields=fields)

    def _resolve_fields(
        self,
        owner: str,
        descriptors: Sequence[FieldDescriptor],
        default: RawFlags | None,
    ) -> tuple[ResolvedField, ...]:
        default_policy = self._parse(default, owner) if default is not None else None

        resolved: list[ResolvedField] = []
        for descriptor in descriptors:
            location = f"{owner}.{descriptor.name}"
            if len(descriptor.annotations) > 1:
                raise PolicyError("only one `redact(...)` annotation is allowed per field", location=location)

            flags = descriptor.annotations[0] if descriptor.annotations else None
            if flags is None:
                if default is None:
                    resolved.append(ResolvedField(descriptor.name, nullable=descriptor.nullable))
                else:
                    resolved.append(
                        ResolvedField(
                            descriptor.name,
                            policy=default_policy,
                            use_display=default.display,
                            nullable=descriptor.nullable,
                        )
                    )
                continue

            if flags.variant:
                raise PolicyError("`redact(variant)` is invalid for fields", location=location)
            if flags.redact_all:
                raise PolicyError(
                    "`redact(all)` is invalid for fields, declare it on the enclosing type or variant",
                    location=location,
                )
            if flags.skip:
                self._check_skip(flags, default is not None, location)
                resolved.append(ResolvedField(descriptor.name, nullable=descriptor.nullable))
                continue

            resolved.append(
                ResolvedField(
                    descriptor.name,
                    policy=self._parse(flags, location),
                    use_display=flags.display,
                    nullable=descriptor.nullable,
                )
            )
        return tuple(resolved)

    # ------------------------------------------------------------------
    # Enums
    # ------------------------------------------------------------------

    def _resolve_enum(self, schema: TypeSchema) -> ResolvedPolicies:
        if len(schema.annotations) > 1:
            raise PolicyError(
                "expected only one or zero enum-level `redact(all, variant, ...)` annotations",
                location=schema.name,
            )

        top: RawFlags | None = None
        top_policy: RedactionPolicy | None = None
        if schema.annotations:
            top = schema.annotations[0]
            if not (top.redact_all and top.variant):
                raise PolicyError(
                    "at least `redact(all, variant)` is required here to redact all variant names",
                    location=schema.name,
                )
            self._reject_skip_on_default(top, schema.name)
            self._reject_display_on_name(top, schema.name)
            top_policy = self._parse(top, schema.name)

        variants = tuple(
            self._resolve_variant(schema.name, variant, top_policy) for variant in schema.variants
        )
        return ResolvedPolicies(schema.name, schema.kind, variants=variants)

    def _resolve_variant(
        self,
        enum_name: str,
        variant: VariantDescriptor,
        top_policy: RedactionPolicy | None,
    ) -> ResolvedVariant:
        location = f"{enum_name}::{variant.name}"
        if len(variant.annotations) > 2:
            raise PolicyError(
                "at most two `redact(...)` annotations are allowed per variant",
                location=location,
            )

        name_flags: RawFlags | None = None
        all_flags: RawFlags | None = None
        for flags in variant.annotations:
            if flags.redact_all and flags.variant:
                raise PolicyError(
                    "`redact(all, variant, ...)` is invalid here, split it into two separate "
                    "annotations to configure the variant name and all fields respectively",
                    location=location,
                )
            if flags.redact_all:
                if all_flags is not None:
                    raise PolicyError("a `redact(all, ...)` annotation is already present", location=location)
                all_flags = flags
            elif flags.variant:
                if name_flags is not None:
                    raise PolicyError(
                        "a `redact(variant, ...)` annotation is already present", location=location
                    )
                name_flags = flags
            else:
                raise PolicyError(
                    "expected `redact(all, ...)` or `redact(variant, ...)`, or both as separate annotations",
                    location=location,
                )

        name_policy = top_policy
        if name_flags is not None:
            self._reject_display_on_name(name_flags, location)
            if name_flags.skip:
                self._check_skip(name_flags, top_policy is not None, location)
                name_policy = None
            else:
                name_policy = self._parse(name_flags, location)

        if all_flags is not None:
            self._reject_skip_on_default(all_flags, location)
            if variant.kind is ShapeKind.UNIT:
                raise PolicyError(
                    "unit variants contain no data, `redact(all)` has nothing to redact",
                    location=location,
                )

        fields = self._resolve_fields(location, variant.fields, all_flags)
        return ResolvedVariant(variant.name, variant.kind, name_policy=name_policy, fields=fields)

    # ------------------------------------------------------------------
    # Shared checks
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(flags: RawFlags, location: str) -> RedactionPolicy:
        try:
            return flags.policy()
        except PolicyError as exc:
            raise PolicyError(exc.message, location=location) from exc

    @staticmethod
    def _check_skip(flags: RawFlags, has_default: bool, location: str) -> None:
        if not has_default:
            raise PolicyError(
                "`redact(skip)` is only allowed where an enclosing `redact(all)` default applies",
                location=location,
            )
        if flags.has_modifiers:
            raise PolicyError("`redact(skip)` takes no other modifiers", location=location)

    @staticmethod
    def _reject_skip_on_default(flags: RawFlags, location: str) -> None:
        if flags.skip:
            raise PolicyError("`skip` cannot be combined with `redact(all)`", location=location)

    @staticmethod
    def _reject_display_on_name(flags: RawFlags, location: str) -> None:
        if flags.display:
            raise PolicyError(
                "`display` is invalid for variant names, a variant name has no display form",
                location=location,
            )


_default_resolver = PolicyResolver()


def resolve_policy(schema: TypeSchema) -> ResolvedPolicies:
    """Resolve *schema* with the default :class:`PolicyResolver`."""
    return _default_resolver.resolve(schema)


__all__ = [
    "PolicyResolver",
    "ResolvedField",
    "ResolvedPolicies",
    "ResolvedVariant",
    "resolve_policy",
]
