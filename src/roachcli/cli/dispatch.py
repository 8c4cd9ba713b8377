"""
Hand-off from a parsed subcommand to the subsystem that runs it.

The node, KV, range, config-zone and certificate subsystems live outside
this package. A command here resolves the settings its flags bound into the
shared context and reports them as the request it hands over.
"""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

import click
import typer

from roachcli.core.config.coercion import format_duration
from roachcli.core.config.registry import OptionDescriptor, build_registry
from roachcli.core.context import Context, get_context
from roachcli.core.utils.logger import log_info

from .groups import CommandId


def context_from(ctx: click.Context) -> Context:
    """Return the shared context attached to a click context, or the process default."""
    obj = ctx.find_object(Context)
    return obj if obj is not None else get_context()


def bound_options(command: click.Command) -> List[OptionDescriptor]:
    """Option declarations installed on a command, in help order."""
    by_param = {
        descriptor.name.replace("-", "_"): descriptor
        for descriptor in build_registry().values()
    }
    return [
        by_param[param.name]
        for param in command.params
        if isinstance(param, click.Option) and param.name in by_param
    ]


def _render(value: Any) -> Any:
    if isinstance(value, timedelta):
        return format_duration(value)
    return value


def effective_settings(command: click.Command, context: Context) -> Dict[str, Any]:
    """Current context value of every option bound on ``command``, keyed by flag name."""
    return {
        descriptor.name: _render(descriptor.field.get(context))
        for descriptor in bound_options(command)
    }


def dispatch(
    command_id: CommandId, ctx: typer.Context, args: Optional[Sequence[str]] = None
) -> Dict[str, Any]:
    """Report the request for ``command_id`` and return it."""
    context = context_from(ctx)
    request = {
        "command": command_id.display_name,
        "args": list(args or []),
        "settings": effective_settings(ctx.command, context),
    }
    log_info(
        "DISPATCH",
        f"{command_id.display_name}",
        context=", ".join(f"{k}={v}" for k, v in request["settings"].items()),
    )
    typer.echo(json.dumps(request, indent=2))
    return request
