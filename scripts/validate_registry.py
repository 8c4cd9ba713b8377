#!/usr/bin/env python3
"""
Validate the option catalog and flag binding: every option points at a
context field of its kind, primary command groups are disjoint, and the
default registration passes bind every command without conflicts. Run from
repo root or with PYTHONPATH including src.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure src is on path when run as script
repo_root = Path(__file__).resolve().parents[1]
src = repo_root / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))

from roachcli.cli.binder import build_flag_sets
from roachcli.cli.errors import BindingError
from roachcli.cli.groups import (
    CERT_COMMANDS,
    CLIENT_SUBGROUPS,
    NODE_COMMANDS,
    CommandId,
    assert_disjoint,
)
from roachcli.core.config.registry import build_registry, infer_kind
from roachcli.core.config.validation import validate_context
from roachcli.core.context import Context


def main() -> int:
    errors: list[str] = []
    context = Context()

    try:
        registry = build_registry()
    except ValueError as exc:
        errors.append(str(exc))
        registry = {}

    for name, descriptor in registry.items():
        if not hasattr(context, descriptor.field.attr):
            errors.append(
                f"Option '{name}' targets unknown context field '{descriptor.field.attr}'"
            )
            continue
        actual = infer_kind(descriptor.field.get(context))
        if actual is not descriptor.kind:
            errors.append(
                f"Option '{name}' is {descriptor.kind.value} but its field holds {actual.value}"
            )

    for name, field_errors in validate_context(context).items():
        for error in field_errors:
            errors.append(f"Default for '{name}': {error.message}")

    try:
        assert_disjoint(NODE_COMMANDS, *CLIENT_SUBGROUPS, CERT_COMMANDS)
        flag_sets = build_flag_sets(context)
    except BindingError as exc:
        errors.append(str(exc))
    else:
        for command_id in CommandId:
            if command_id not in flag_sets:
                errors.append(f"Command '{command_id.display_name}' has no flags bound")

    if errors:
        for e in errors:
            print(e, file=sys.stderr)
        return 1
    print("Registry validation passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
