"""
Subcommand declarations.

Only positional arguments are declared here. Every flag a command accepts is
bound later by :mod:`roachcli.cli.binder` according to the groups the
command belongs to.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import typer

from .dispatch import dispatch
from .groups import CommandId
from .options import BoundCommand

kv_app = typer.Typer(help="Get, put, increment, delete and scan key/value pairs")
range_app = typer.Typer(help="List and split ranges")
acct_app = typer.Typer(help="Get, set, list and remove accounting configs")
perm_app = typer.Typer(help="Get, set, list and remove permission configs")
zone_app = typer.Typer(help="Get, set, list and remove zone configs")
cert_app = typer.Typer(help="Create CA, node and client certificates")


# Node commands.


def start(ctx: typer.Context) -> None:
    """Start a node by joining the gossip network."""
    dispatch(CommandId.START, ctx)


def exterminate(ctx: typer.Context) -> None:
    """Destroy all data held by the node."""
    dispatch(CommandId.EXTERMINATE, ctx)


def quit_node(ctx: typer.Context) -> None:
    """Drain and shut down a node."""
    dispatch(CommandId.QUIT, ctx)


# KV commands.


@kv_app.command("get", cls=BoundCommand)
def kv_get(ctx: typer.Context, key: str = typer.Argument(...)) -> None:
    """Get the value for a key."""
    dispatch(CommandId.KV_GET, ctx, [key])


@kv_app.command("put", cls=BoundCommand)
def kv_put(
    ctx: typer.Context,
    pairs: List[str] = typer.Argument(..., help="key value [key value...]"),
) -> None:
    """Set the value for one or more keys."""
    if len(pairs) % 2:
        raise typer.BadParameter("expected key/value pairs", param_hint="PAIRS")
    dispatch(CommandId.KV_PUT, ctx, pairs)


@kv_app.command("cput", cls=BoundCommand)
def kv_cput(
    ctx: typer.Context,
    key: str = typer.Argument(...),
    value: str = typer.Argument(...),
    expected: Optional[str] = typer.Argument(None),
) -> None:
    """Set a key only if its current value matches the expected value."""
    args = [key, value] + ([expected] if expected is not None else [])
    dispatch(CommandId.KV_CPUT, ctx, args)


@kv_app.command("inc", cls=BoundCommand)
def kv_inc(
    ctx: typer.Context,
    key: str = typer.Argument(...),
    amount: int = typer.Argument(1),
) -> None:
    """Increment the integer value of a key."""
    dispatch(CommandId.KV_INC, ctx, [key, str(amount)])


@kv_app.command("del", cls=BoundCommand)
def kv_del(ctx: typer.Context, keys: List[str] = typer.Argument(...)) -> None:
    """Delete one or more keys."""
    dispatch(CommandId.KV_DEL, ctx, keys)


@kv_app.command("scan", cls=BoundCommand)
def kv_scan(
    ctx: typer.Context,
    start_key: Optional[str] = typer.Argument(None),
    end_key: Optional[str] = typer.Argument(None),
) -> None:
    """List keys in ascending order between start and end."""
    dispatch(CommandId.KV_SCAN, ctx, [k for k in (start_key, end_key) if k is not None])


@kv_app.command("reverse-scan", cls=BoundCommand)
def kv_reverse_scan(
    ctx: typer.Context,
    start_key: Optional[str] = typer.Argument(None),
    end_key: Optional[str] = typer.Argument(None),
) -> None:
    """List keys in descending order between start and end."""
    dispatch(
        CommandId.KV_REVERSE_SCAN,
        ctx,
        [k for k in (start_key, end_key) if k is not None],
    )


# Range commands.


@range_app.command("ls", cls=BoundCommand)
def range_ls(
    ctx: typer.Context, start_key: Optional[str] = typer.Argument(None)
) -> None:
    """List the ranges starting at an optional key."""
    dispatch(CommandId.RANGE_LS, ctx, [start_key] if start_key else [])


@range_app.command("split", cls=BoundCommand)
def range_split(ctx: typer.Context, key: str = typer.Argument(...)) -> None:
    """Split the range containing key."""
    dispatch(CommandId.RANGE_SPLIT, ctx, [key])


# Config commands: accounting, permissions and zones share one shape.


def _config_commands(app: typer.Typer, kind: str, ids: Dict[str, CommandId]) -> None:
    @app.command(
        "get",
        cls=BoundCommand,
        help=f"Fetch the {kind} config for a key prefix.",
    )
    def get_config(ctx: typer.Context, prefix: str = typer.Argument(...)) -> None:
        dispatch(ids["get"], ctx, [prefix])

    @app.command(
        "set",
        cls=BoundCommand,
        help=f"Create or update the {kind} config for a key prefix.",
    )
    def set_config(
        ctx: typer.Context,
        prefix: str = typer.Argument(...),
        config_file: str = typer.Argument(..., help="YAML or JSON config file"),
    ) -> None:
        dispatch(ids["set"], ctx, [prefix, config_file])

    @app.command(
        "ls",
        cls=BoundCommand,
        help=f"List {kind} configs, optionally filtered by a regex.",
    )
    def list_configs(
        ctx: typer.Context, pattern: Optional[str] = typer.Argument(None)
    ) -> None:
        dispatch(ids["ls"], ctx, [pattern] if pattern else [])

    @app.command(
        "rm",
        cls=BoundCommand,
        help=f"Remove the {kind} config for a key prefix.",
    )
    def remove_config(ctx: typer.Context, prefix: str = typer.Argument(...)) -> None:
        dispatch(ids["rm"], ctx, [prefix])


_config_commands(
    acct_app,
    "accounting",
    {
        "get": CommandId.ACCT_GET,
        "set": CommandId.ACCT_SET,
        "ls": CommandId.ACCT_LS,
        "rm": CommandId.ACCT_RM,
    },
)
_config_commands(
    perm_app,
    "permission",
    {
        "get": CommandId.PERM_GET,
        "set": CommandId.PERM_SET,
        "ls": CommandId.PERM_LS,
        "rm": CommandId.PERM_RM,
    },
)
_config_commands(
    zone_app,
    "zone",
    {
        "get": CommandId.ZONE_GET,
        "set": CommandId.ZONE_SET,
        "ls": CommandId.ZONE_LS,
        "rm": CommandId.ZONE_RM,
    },
)


# Certificate commands.


@cert_app.command("create-ca", cls=BoundCommand)
def create_ca(ctx: typer.Context) -> None:
    """Create a CA key and certificate in the certs directory."""
    dispatch(CommandId.CERT_CREATE_CA, ctx)


@cert_app.command("create-node", cls=BoundCommand)
def create_node_cert(
    ctx: typer.Context,
    hosts: List[str] = typer.Argument(..., help="host names or IPs for the node"),
) -> None:
    """Create a node key and certificate signed by the CA."""
    dispatch(CommandId.CERT_CREATE_NODE, ctx, hosts)


@cert_app.command("create-client", cls=BoundCommand)
def create_client_cert(ctx: typer.Context, username: str = typer.Argument(...)) -> None:
    """Create a client key and certificate signed by the CA."""
    dispatch(CommandId.CERT_CREATE_CLIENT, ctx, [username])
