"""
Command identifiers and the groups they belong to.

Groups are ordered tuples of ``CommandId``. Primary groups list commands that
share a role; derived groups are unions of primary groups that keep the
first-appearance order and never contain a command twice.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Set, Tuple

from .errors import GroupOverlapError


class CommandId(Enum):
    """Every user-invocable subcommand, valued by its command path."""

    # Node
    START = ("start",)
    EXTERMINATE = ("exterminate",)
    QUIT = ("quit",)

    # KV
    KV_GET = ("kv", "get")
    KV_PUT = ("kv", "put")
    KV_CPUT = ("kv", "cput")
    KV_INC = ("kv", "inc")
    KV_DEL = ("kv", "del")
    KV_SCAN = ("kv", "scan")
    KV_REVERSE_SCAN = ("kv", "reverse-scan")

    # Range
    RANGE_LS = ("range", "ls")
    RANGE_SPLIT = ("range", "split")

    # Accounting, permission and zone configs
    ACCT_GET = ("acct", "get")
    ACCT_SET = ("acct", "set")
    ACCT_LS = ("acct", "ls")
    ACCT_RM = ("acct", "rm")
    PERM_GET = ("perm", "get")
    PERM_SET = ("perm", "set")
    PERM_LS = ("perm", "ls")
    PERM_RM = ("perm", "rm")
    ZONE_GET = ("zone", "get")
    ZONE_SET = ("zone", "set")
    ZONE_LS = ("zone", "ls")
    ZONE_RM = ("zone", "rm")

    # Certificates
    CERT_CREATE_CA = ("cert", "create-ca")
    CERT_CREATE_NODE = ("cert", "create-node")
    CERT_CREATE_CLIENT = ("cert", "create-client")

    @property
    def path(self) -> Tuple[str, ...]:
        return self.value

    @property
    def display_name(self) -> str:
        return " ".join(self.value)

    @classmethod
    def from_display_name(cls, name: str) -> "CommandId":
        parts = tuple(name.split())
        for command in cls:
            if command.value == parts:
                return command
        raise ValueError(f"unknown command {name!r}")


Group = Tuple[CommandId, ...]


def union_groups(*groups: Iterable[CommandId]) -> Group:
    """Concatenate groups in order, keeping only the first appearance of each command."""
    seen: Set[CommandId] = set()
    merged: List[CommandId] = []
    for group in groups:
        for command in group:
            if command not in seen:
                seen.add(command)
                merged.append(command)
    return tuple(merged)


def assert_disjoint(*groups: Iterable[CommandId]) -> None:
    """Raise GroupOverlapError if any command appears in more than one group."""
    seen: Set[CommandId] = set()
    shared: List[CommandId] = []
    for group in groups:
        for command in dict.fromkeys(group):
            if command in seen and command not in shared:
                shared.append(command)
            seen.add(command)
    if shared:
        raise GroupOverlapError(shared)


NODE_COMMANDS: Group = (
    CommandId.START,
    CommandId.EXTERMINATE,
    CommandId.QUIT,
)

KV_COMMANDS: Group = (
    CommandId.KV_GET,
    CommandId.KV_PUT,
    CommandId.KV_CPUT,
    CommandId.KV_INC,
    CommandId.KV_DEL,
    CommandId.KV_SCAN,
    CommandId.KV_REVERSE_SCAN,
)

RANGE_COMMANDS: Group = (
    CommandId.RANGE_LS,
    CommandId.RANGE_SPLIT,
)

ACCT_COMMANDS: Group = (
    CommandId.ACCT_GET,
    CommandId.ACCT_SET,
    CommandId.ACCT_LS,
    CommandId.ACCT_RM,
)

PERM_COMMANDS: Group = (
    CommandId.PERM_GET,
    CommandId.PERM_SET,
    CommandId.PERM_LS,
    CommandId.PERM_RM,
)

ZONE_COMMANDS: Group = (
    CommandId.ZONE_GET,
    CommandId.ZONE_SET,
    CommandId.ZONE_LS,
    CommandId.ZONE_RM,
)

CERT_COMMANDS: Group = (
    CommandId.CERT_CREATE_CA,
    CommandId.CERT_CREATE_NODE,
    CommandId.CERT_CREATE_CLIENT,
)

CLIENT_SUBGROUPS: Tuple[Group, ...] = (
    KV_COMMANDS,
    RANGE_COMMANDS,
    ACCT_COMMANDS,
    PERM_COMMANDS,
    ZONE_COMMANDS,
)

assert_disjoint(*CLIENT_SUBGROUPS)

CLIENT_COMMANDS: Group = union_groups(*CLIENT_SUBGROUPS)
