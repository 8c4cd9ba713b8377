"""Per-command flag sets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from roachcli.core.config.registry import OptionDescriptor

from .errors import DuplicateFlagError
from .groups import CommandId


@dataclass(frozen=True)
class BoundFlag:
    """An option declaration together with the default it was bound with."""

    descriptor: OptionDescriptor
    default: Any

    @property
    def name(self) -> str:
        return self.descriptor.name


class FlagSet:
    """
    Ordered mapping of flag name to BoundFlag for one command.

    Insertion order is the order flags are listed in help output. Adding a
    name that is already present is a programmer error and raises
    DuplicateFlagError.
    """

    def __init__(self, command: CommandId):
        self.command = command
        self._flags: Dict[str, BoundFlag] = {}

    def add(self, descriptor: OptionDescriptor, default: Any) -> BoundFlag:
        if descriptor.name in self._flags:
            raise DuplicateFlagError(self.command, descriptor.name)
        bound = BoundFlag(descriptor=descriptor, default=default)
        self._flags[descriptor.name] = bound
        return bound

    def get(self, name: str) -> Optional[BoundFlag]:
        return self._flags.get(name)

    def names(self) -> List[str]:
        return list(self._flags)

    def defaults(self) -> Dict[str, Any]:
        return {name: bound.default for name, bound in self._flags.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __iter__(self) -> Iterator[BoundFlag]:
        return iter(self._flags.values())

    def __len__(self) -> int:
        return len(self._flags)

    def __repr__(self) -> str:
        return f"FlagSet({self.command.display_name!r}, {self.names()!r})"
