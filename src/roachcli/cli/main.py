"""
Typer-based command line for roachcli.

The Typer app below declares the command tree. ``build_cli`` turns it into
a click group, binds every shared option onto the commands that need it and
attaches the shared context, so that parsing a command line writes directly
into that context.

Usage Patterns:
1. Node: ``cockroach start --stores=ssd=/mnt/ssd01 --gossip=self=``
2. Client: ``cockroach kv get --addr=host:8080 --certs=certs some-key``
3. Inspection: ``cockroach flags "kv get" start``
"""

import sys
from typing import Dict, Optional

import click
import typer

from roachcli.core.context import Context, get_context, set_context
from roachcli.core.utils.logger import log_error, setup_logging

from .binder import bind_all
from .commands import (
    acct_app,
    cert_app,
    exterminate,
    kv_app,
    perm_app,
    quit_node,
    range_app,
    start,
    zone_app,
)
from .errors import BindingError
from .exit_codes import EXIT_CONFIG_ERROR, EXIT_USER_CANCEL, CliExit
from .flags_commands import show_flags
from .groups import CommandId
from .options import BoundCommand

app = typer.Typer(
    name="cockroach",
    help="Cockroach command-line interface and server.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("start", cls=BoundCommand)(start)
app.command("exterminate", cls=BoundCommand)(exterminate)
app.command("quit", cls=BoundCommand)(quit_node)

app.add_typer(kv_app, name="kv", help="Get, put, increment, delete and scan key/value pairs")
app.add_typer(range_app, name="range", help="List and split ranges")
app.add_typer(acct_app, name="acct", help="Accounting config commands")
app.add_typer(perm_app, name="perm", help="Permission config commands")
app.add_typer(zone_app, name="zone", help="Zone config commands")
app.add_typer(cert_app, name="cert", help="Certificate creation commands")

app.command("flags")(show_flags)


@app.callback()
def callback(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
    log_file: Optional[str] = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file",
    ),
) -> None:
    """Cockroach command-line interface and server."""
    try:
        setup_logging(level=log_level, log_file=log_file)
    except ValueError:
        raise CliExit.config_error(f"Invalid log level: {log_level}") from None


def resolve_commands(group: click.Group) -> Dict[CommandId, click.Command]:
    """Find the click command for every CommandId by walking its path."""
    commands: Dict[CommandId, click.Command] = {}
    for command_id in CommandId:
        node: click.Command = group
        for part in command_id.path:
            if not isinstance(node, click.Group) or part not in node.commands:
                raise BindingError(
                    f"command '{command_id.display_name}' is not declared"
                )
            node = node.commands[part]
        commands[command_id] = node
    return commands


def build_cli(context: Optional[Context] = None) -> click.Group:
    """
    Build the click command tree with every flag bound to ``context``.

    Each call returns a fresh tree, so binding happens exactly once per tree.
    """
    if context is None:
        context = get_context()
    else:
        set_context(context)

    group = typer.main.get_command(app)
    if not isinstance(group, click.Group):
        raise BindingError("root command is not a group")
    bind_all(context, resolve_commands(group))
    group.context_settings = {**(group.context_settings or {}), "obj": context}
    return group


def main() -> None:
    """Console-script entry point."""
    try:
        cli = build_cli()
    except BindingError as exc:
        log_error("CLI", f"Flag binding failed: {exc}", exception=exc)
        sys.exit(EXIT_CONFIG_ERROR)
    try:
        cli(prog_name="cockroach")
    except KeyboardInterrupt:
        sys.exit(EXIT_USER_CANCEL)


if __name__ == "__main__":
    main()
