"""
Shared runtime context for roachcli.

One ``Context`` exists per process. It starts out holding built-in defaults,
optionally overridden from ``COCKROACH_*`` environment variables, and is then
mutated in place by command-line parsing through the flags bound onto each
subcommand. Downstream subsystems read its fields directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional

from roachcli.core.config.coercion import coerce, format_duration
from roachcli.core.config.registry import infer_kind
from roachcli.core.utils.logger import log_configuration_change, log_warning

ENV_PREFIX = "COCKROACH_"

DEFAULT_ADDR = ":8080"
DEFAULT_MAX_OFFSET = timedelta(milliseconds=250)
DEFAULT_METRICS_FREQUENCY = timedelta(seconds=10)
DEFAULT_GOSSIP_INTERVAL = timedelta(seconds=2)
DEFAULT_CACHE_SIZE = 1 << 30  # 1 GiB
DEFAULT_SCAN_INTERVAL = timedelta(minutes=10)


@dataclass
class Context:
    """Every tunable value of a node or client process."""

    # Server
    addr: str = DEFAULT_ADDR
    stores: str = ""
    attrs: str = ""
    max_offset: timedelta = DEFAULT_MAX_OFFSET
    metrics_frequency: timedelta = DEFAULT_METRICS_FREQUENCY

    # Gossip
    gossip_bootstrap: str = ""
    gossip_interval: timedelta = DEFAULT_GOSSIP_INTERVAL

    # KV
    linearizable: bool = False

    # Engine
    cache_size: int = DEFAULT_CACHE_SIZE
    scan_interval: timedelta = DEFAULT_SCAN_INTERVAL

    # Security
    insecure: bool = False
    certs: str = ""

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None) -> "Context":
        """Create a context with defaults, then apply environment overrides."""
        context = cls()
        context._load_from_env(os.environ if environ is None else environ)
        return context

    def _load_from_env(self, environ: Mapping[str, str]) -> None:
        """
        Apply ``COCKROACH_<FIELD>`` overrides, e.g. ``COCKROACH_CACHE_SIZE``.

        A value that cannot be parsed for its field keeps the default and is
        reported as a warning.
        """
        for spec in fields(self):
            env_name = ENV_PREFIX + spec.name.upper()
            raw = environ.get(env_name)
            if raw is None:
                continue
            current = getattr(self, spec.name)
            kind = infer_kind(current)
            value = coerce(raw, kind)
            if isinstance(value, str) and not isinstance(current, str):
                log_warning(
                    "CONTEXT",
                    f"Ignoring {env_name}={raw!r}: not a valid {kind.value}",
                )
                continue
            setattr(self, spec.name, value)
            log_configuration_change(spec.name, current, value)

    def to_dict(self) -> Dict[str, Any]:
        """Render the fields for display, durations as duration literals."""
        rendered: Dict[str, Any] = {}
        for spec in fields(self):
            value = getattr(self, spec.name)
            if isinstance(value, timedelta):
                value = format_duration(value)
            rendered[spec.name] = value
        return rendered


_context: Optional[Context] = None


def get_context() -> Context:
    """Get the process-wide context, creating it on first use."""
    global _context
    if _context is None:
        _context = Context.load()
    return _context


def set_context(context: Context) -> None:
    """Set the process-wide context."""
    global _context
    _context = context


def reset_context_for_tests() -> None:
    """Drop the process-wide context so the next get_context() builds a fresh one."""
    global _context
    _context = None
