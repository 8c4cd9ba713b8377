"""
`cockroach flags`: show which options every command accepts.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from roachcli.core.config.coercion import format_duration
from roachcli.core.config.registry import OptionKind

from .binder import build_flag_sets
from .dispatch import context_from
from .exit_codes import CliExit
from .flagset import FlagSet
from .groups import CommandId

console = Console()


def _render_default(flag_set: FlagSet, name: str) -> str:
    bound = flag_set.get(name)
    if bound is None:
        return ""
    if bound.descriptor.kind is OptionKind.DURATION:
        return format_duration(bound.default)
    if bound.default == "":
        return '""'
    return str(bound.default)


def show_flags(
    ctx: typer.Context,
    commands: Optional[List[str]] = typer.Argument(
        None, help='Commands to show, e.g. "start" or "kv get" (default: all)'
    ),
) -> None:
    """Show the flags bound on each command and their defaults."""
    flag_sets = build_flag_sets(context_from(ctx))

    if commands:
        selected: Dict[CommandId, FlagSet] = {}
        for name in commands:
            try:
                command_id = CommandId.from_display_name(name)
            except ValueError:
                raise CliExit.error(f"Unknown command: {name}") from None
            flag_set = flag_sets.get(command_id)
            selected[command_id] = flag_set if flag_set is not None else FlagSet(command_id)
        flag_sets = selected

    table = Table(title="Command Flags")
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Flag", style="green", no_wrap=True)
    table.add_column("Default", style="magenta")

    for command_id, flag_set in flag_sets.items():
        label = command_id.display_name
        if not len(flag_set):
            table.add_row(label, "(none)", "")
        for name in flag_set.names():
            table.add_row(label, f"--{name}", _render_default(flag_set, name))
            label = ""

    console.print(table)
