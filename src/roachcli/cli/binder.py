"""
Flag binding for every subcommand.

Binding runs in two steps. ``build_flag_sets`` is pure: it walks a list of
registration passes and returns a fully populated FlagSet per command, with
every default read from the context. ``install_flags`` then turns those flag
sets into click options on the actual commands. ``bind_all`` does both.

Each pass names the groups it applies to and the options it registers, so
the pass list is the single place that says which options reach which
commands:

- node:     every server tuning flag on node commands
- client:   ``--addr`` (client wording) on client commands
- insecure: ``--insecure`` on node and client commands
- certs:    ``--certs`` on node, client and certificate commands
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Tuple

import click

from roachcli.core.config.registry import (
    CERTS,
    CLIENT_OPTIONS,
    INSECURE,
    NODE_OPTIONS,
    OptionDescriptor,
)
from roachcli.core.config.validation import validate
from roachcli.core.context import Context
from roachcli.core.utils.logger import log_debug, log_info

from .errors import (
    BindingError,
    ConflictingBindingError,
    DuplicateFlagError,
    InvalidDefaultError,
)
from .flagset import FlagSet
from .groups import (
    CERT_COMMANDS,
    CLIENT_COMMANDS,
    NODE_COMMANDS,
    CommandId,
    Group,
    union_groups,
)
from .options import make_option


@dataclass(frozen=True)
class RegistrationPass:
    """Options to register on every command of the given groups."""

    name: str
    groups: Tuple[Group, ...]
    options: Tuple[OptionDescriptor, ...]

    @property
    def scope(self) -> Group:
        """The pass's commands in group order, each command once."""
        return union_groups(*self.groups)


DEFAULT_PASSES: Tuple[RegistrationPass, ...] = (
    RegistrationPass("node", (NODE_COMMANDS,), NODE_OPTIONS),
    RegistrationPass("client", (CLIENT_COMMANDS,), CLIENT_OPTIONS),
    RegistrationPass("insecure", (NODE_COMMANDS, CLIENT_COMMANDS), (INSECURE,)),
    RegistrationPass(
        "certs", (NODE_COMMANDS, CLIENT_COMMANDS, CERT_COMMANDS), (CERTS,)
    ),
)


def _register(
    flag_set: FlagSet, option: OptionDescriptor, context: Context, pass_name: str
) -> None:
    default = option.field.get(context)
    existing = flag_set.get(option.name)
    if existing is not None:
        previous = existing.descriptor
        if previous.field != option.field or previous.kind != option.kind:
            raise ConflictingBindingError(
                flag_set.command,
                option.name,
                f"bound to '{previous.field.attr}' ({previous.kind.value}) and "
                f"'{option.field.attr}' ({option.kind.value})",
            )
        if existing.default != default:
            raise ConflictingBindingError(
                flag_set.command,
                option.name,
                f"defaults {existing.default!r} and {default!r}",
            )
        log_debug(
            "BINDER",
            f"--{option.name} already bound on '{flag_set.command.display_name}'",
            context=f"pass={pass_name}",
        )
        return

    errors = validate(default, option)
    if errors:
        raise InvalidDefaultError(option.name, [error.message for error in errors])
    flag_set.add(option, default)


def build_flag_sets(
    context: Context,
    passes: Sequence[RegistrationPass] = DEFAULT_PASSES,
) -> Dict[CommandId, FlagSet]:
    """
    Compute the flag set of every command touched by ``passes``.

    Commands are visited in each pass's group order. A command that already
    carries an option of the same name bound to the same field is skipped;
    the same name bound to a different field or default raises
    ConflictingBindingError.

    Args:
        context: Shared context; its current field values become the defaults.
        passes: Registration passes, applied in order.

    Returns:
        Mapping of command to its flag set, in first-touched order.
    """
    flag_sets: Dict[CommandId, FlagSet] = {}
    for registration in passes:
        for command in registration.scope:
            flag_set = flag_sets.get(command)
            if flag_set is None:
                flag_set = flag_sets[command] = FlagSet(command)
            for option in registration.options:
                _register(flag_set, option, context, registration.name)
    return flag_sets


def install_flags(
    commands: Mapping[CommandId, click.Command],
    flag_sets: Mapping[CommandId, FlagSet],
    context: Context,
) -> None:
    """Append a click option for every bound flag to its command."""
    for command_id, flag_set in flag_sets.items():
        command = commands.get(command_id)
        if command is None:
            raise BindingError(
                f"no command registered for '{command_id.display_name}'"
            )
        taken = {param.name for param in command.params}
        for bound in flag_set:
            option = make_option(bound, context)
            if option.name in taken:
                raise DuplicateFlagError(command_id, bound.name)
            taken.add(option.name)
            command.params.append(option)


def bind_all(
    context: Context,
    commands: Mapping[CommandId, click.Command],
    passes: Sequence[RegistrationPass] = DEFAULT_PASSES,
) -> None:
    """
    Bind every option onto every command that needs it.

    Must run once, before any command is parsed. Raises a BindingError
    subclass on any programmer error in group composition or pass layout.
    """
    flag_sets = build_flag_sets(context, passes)
    install_flags(commands, flag_sets, context)
    log_info(
        "BINDER",
        f"Bound {sum(len(fs) for fs in flag_sets.values())} flags "
        f"on {len(flag_sets)} commands",
    )
