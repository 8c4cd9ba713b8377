"""
click adapters for bound flags.

Each BoundFlag becomes a ``click.Option`` whose callback writes the parsed
value straight into the shared context. Values that only come from the
option's default are not written back, so the context keeps whatever it
holds at parse time.

Boolean options are switches (``--insecure`` / ``--no-insecure``). Commands
built with ``BoundCommand`` also accept ``--insecure=false`` style literals.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable, List, Optional

import click
from click.core import ParameterSource
from typer.core import TyperCommand

from roachcli.core.config.coercion import (
    format_duration,
    parse_bool,
    parse_duration,
    parse_int64,
)
from roachcli.core.config.registry import OptionKind
from roachcli.core.context import Context
from roachcli.core.utils.logger import log_configuration_change

from .flagset import BoundFlag


class DurationParamType(click.ParamType):
    """Duration literal such as ``250ms`` or ``1h30m``."""

    name = "duration"

    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> timedelta:
        if isinstance(value, timedelta):
            return value
        try:
            return parse_duration(str(value))
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


class Int64ParamType(click.ParamType):
    """Signed 64-bit integer."""

    name = "int64"

    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return parse_int64(str(value))
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


DURATION = DurationParamType()
INT64 = Int64ParamType()


def _write_through(
    bound: BoundFlag, context: Context
) -> Callable[[click.Context, click.Parameter, Any], Any]:
    accessor = bound.descriptor.field

    def callback(ctx: click.Context, param: click.Parameter, value: Any) -> Any:
        source = ctx.get_parameter_source(param.name) if param.name else None
        if source is None or source is ParameterSource.DEFAULT:
            return value
        previous = accessor.get(context)
        accessor.set(context, value)
        if previous != value:
            log_configuration_change(accessor.attr, previous, value)
        return value

    return callback


def make_option(bound: BoundFlag, context: Context) -> click.Option:
    """Build the click option for one bound flag."""
    descriptor = bound.descriptor
    callback = _write_through(bound, context)

    if descriptor.kind is OptionKind.BOOL:
        return click.Option(
            [f"{descriptor.flag}/--no-{descriptor.name}"],
            is_flag=True,
            default=bound.default,
            show_default=True,
            help=descriptor.help,
            callback=callback,
            expose_value=False,
        )

    if descriptor.kind is OptionKind.DURATION:
        return click.Option(
            [descriptor.flag],
            type=DURATION,
            default=bound.default,
            show_default=format_duration(bound.default),
            help=descriptor.help,
            callback=callback,
            expose_value=False,
        )

    if descriptor.kind is OptionKind.INT64:
        param_type: click.ParamType = INT64
    else:
        param_type = click.STRING
    return click.Option(
        [descriptor.flag],
        type=param_type,
        default=bound.default,
        show_default=True,
        help=descriptor.help,
        callback=callback,
        expose_value=False,
    )


def expand_bool_literals(
    ctx: click.Context, params: List[click.Parameter], args: List[str]
) -> List[str]:
    """
    Rewrite ``--name=<bool>`` for boolean switches into ``--name`` or ``--no-name``.

    Anything after ``--`` is passed through untouched.
    """
    switches = {
        param.opts[0]: param
        for param in params
        if isinstance(param, click.Option) and param.is_flag and param.secondary_opts
    }
    expanded: List[str] = []
    for index, arg in enumerate(args):
        if arg == "--":
            expanded.extend(args[index:])
            break
        name, sep, literal = arg.partition("=")
        param = switches.get(name) if sep else None
        if param is None:
            expanded.append(arg)
            continue
        try:
            value = parse_bool(literal)
        except ValueError as exc:
            raise click.BadParameter(str(exc), ctx=ctx, param=param) from None
        expanded.append(param.opts[0] if value else param.secondary_opts[0])
    return expanded


class BoundCommand(TyperCommand):
    """Typer command whose boolean switches also take ``=true``/``=false``."""

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        return super().parse_args(ctx, expand_bool_literals(ctx, self.params, args))
