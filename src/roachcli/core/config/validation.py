"""Validation utilities for option values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List

from .registry import INT64_MAX, INT64_MIN, OptionDescriptor, OptionKind, build_registry


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


def _is_valid_kind(value: Any, kind: OptionKind) -> bool:
    if kind is OptionKind.BOOL:
        return isinstance(value, bool)
    if kind is OptionKind.INT64:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is OptionKind.DURATION:
        return isinstance(value, timedelta)
    return isinstance(value, str)


def validate(value: Any, descriptor: OptionDescriptor) -> List[ValidationError]:
    """Check that a value is usable as the value of ``descriptor``."""
    errors: List[ValidationError] = []
    field = descriptor.field.attr

    if value is None:
        errors.append(
            ValidationError(field, f"Expected {descriptor.kind.value}, got None.")
        )
        return errors

    if not _is_valid_kind(value, descriptor.kind):
        errors.append(
            ValidationError(
                field,
                f"Expected {descriptor.kind.value}, got {type(value).__name__}.",
            )
        )
        return errors

    if descriptor.kind is OptionKind.INT64 and not INT64_MIN <= value <= INT64_MAX:
        errors.append(ValidationError(field, "Value is out of range for int64."))
    return errors


def validate_context(context: Any) -> Dict[str, List[ValidationError]]:
    """Validate every catalogued field of a context and return errors keyed by option name."""
    errors: Dict[str, List[ValidationError]] = {}
    for name, descriptor in build_registry().items():
        field_errors = validate(descriptor.field.get(context), descriptor)
        if field_errors:
            errors[name] = field_errors
    return errors
