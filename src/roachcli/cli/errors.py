"""Programmer errors raised while composing groups and binding flags."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .groups import CommandId


class BindingError(Exception):
    """Base class for errors in the flag-binding setup phase."""


class DuplicateFlagError(BindingError):
    """A flag name was registered twice on the same command."""

    def __init__(self, command: "CommandId", name: str):
        self.command = command
        self.name = name
        super().__init__(
            f"flag --{name} registered twice on command '{command.display_name}'"
        )


class ConflictingBindingError(BindingError):
    """A flag name would be bound to two different fields or defaults on one command."""

    def __init__(self, command: "CommandId", name: str, detail: str):
        self.command = command
        self.name = name
        super().__init__(
            f"flag --{name} on command '{command.display_name}' has conflicting "
            f"bindings: {detail}"
        )


class GroupOverlapError(BindingError):
    """Groups that must be disjoint share a command."""

    def __init__(self, shared: Iterable["CommandId"]):
        self.shared = tuple(shared)
        names = ", ".join(command.display_name for command in self.shared)
        super().__init__(f"command groups overlap on: {names}")


class InvalidDefaultError(BindingError):
    """A context field holds a value that does not fit its option's kind."""

    def __init__(self, name: str, messages: Iterable[str]):
        self.name = name
        self.messages = tuple(messages)
        super().__init__(f"flag --{name} has an invalid default: {'; '.join(self.messages)}")
