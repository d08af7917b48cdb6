"""Formatting – redacted representations of structured values."""
from mp_redact.formatting.formatter import (
    FieldRendering,
    RedactedFormatter,
    format_value,
)
from mp_redact.formatting.redactable import Redactable, redact_display
from mp_redact.formatting.reflection import (
    field,
    policies_of,
    pretty_repr,
    redactable,
    redactable_union,
    schema_for,
)

__all__ = [
    "FieldRendering",
    "Redactable",
    "RedactedFormatter",
    "field",
    "format_value",
    "policies_of",
    "pretty_repr",
    "redact_display",
    "redactable",
    "redactable_union",
    "schema_for",
]
