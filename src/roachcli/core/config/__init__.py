"""Option catalog, coercion and validation utilities."""

from .registry import (
    ALL_OPTIONS,
    CLIENT_OPTIONS,
    NODE_OPTIONS,
    FieldAccessor,
    OptionDescriptor,
    OptionKind,
    build_registry,
    infer_kind,
)
from .coercion import (
    coerce,
    format_duration,
    parse_bool,
    parse_duration,
    parse_int64,
)
from .validation import ValidationError, validate, validate_context

__all__ = [
    "ALL_OPTIONS",
    "CLIENT_OPTIONS",
    "NODE_OPTIONS",
    "FieldAccessor",
    "OptionDescriptor",
    "OptionKind",
    "ValidationError",
    "build_registry",
    "coerce",
    "format_duration",
    "infer_kind",
    "parse_bool",
    "parse_duration",
    "parse_int64",
    "validate",
    "validate_context",
]
