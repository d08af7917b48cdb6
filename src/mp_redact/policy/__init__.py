"""Policy model – redaction value types, annotations and the resolver."""
from mp_redact.policy.flags import RawFlags, redact
from mp_redact.policy.models import (
    LengthKind,
    RedactionLength,
    RedactionPolicy,
    RedactionStyle,
    StyleKind,
)
from mp_redact.policy.resolver import (
    PolicyResolver,
    ResolvedField,
    ResolvedPolicies,
    ResolvedVariant,
    resolve_policy,
)
from mp_redact.policy.schema import FieldDescriptor, ShapeKind, TypeSchema, VariantDescriptor

__all__ = [
    "FieldDescriptor",
    "LengthKind",
    "PolicyResolver",
    "RawFlags",
    "RedactionLength",
    "RedactionPolicy",
    "RedactionStyle",
    "ResolvedField",
    "ResolvedPolicies",
    "ResolvedVariant",
    "ShapeKind",
    "StyleKind",
    "TypeSchema",
    "VariantDescriptor",
    "redact",
    "resolve_policy",
]
