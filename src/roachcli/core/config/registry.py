"""Option catalog: every tunable is declared here exactly once."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, Tuple


class OptionKind(str, Enum):
    """Value kinds a command-line option can carry."""

    STRING = "string"
    DURATION = "duration"
    INT64 = "int64"
    BOOL = "bool"


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


@dataclass(frozen=True)
class FieldAccessor:
    """Reads and writes one named attribute of the shared runtime context."""

    attr: str

    def get(self, target: Any) -> Any:
        return getattr(target, self.attr)

    def set(self, target: Any, value: Any) -> None:
        setattr(target, self.attr, value)


@dataclass(frozen=True)
class OptionDescriptor:
    """
    Declaration of a single named option.

    The default is not stored here. It is read from the context through
    ``field`` at binding time.
    """

    name: str
    kind: OptionKind
    field: FieldAccessor
    help: str = ""

    @property
    def flag(self) -> str:
        return f"--{self.name}"


def infer_kind(value: Any) -> OptionKind:
    """Infer the option kind from a context value."""
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return OptionKind.BOOL
    if isinstance(value, int):
        return OptionKind.INT64
    if isinstance(value, timedelta):
        return OptionKind.DURATION
    return OptionKind.STRING


def _option(name: str, kind: OptionKind, attr: str, help: str) -> OptionDescriptor:
    return OptionDescriptor(name=name, kind=kind, field=FieldAccessor(attr), help=help)


# Server flags.

ADDR = _option(
    "addr",
    OptionKind.STRING,
    "addr",
    "the host:port to bind for HTTP/RPC traffic",
)

STORES = _option(
    "stores",
    OptionKind.STRING,
    "stores",
    "specify a comma-separated list of stores, specified by a colon-separated "
    "list of device attributes followed by '=' and either a filepath for a "
    "persistent store or an integer size in bytes for an in-memory store. "
    "Device attributes typically include whether the store is flash (ssd), "
    "spinny disk (hdd), fusion-io (fio), in-memory (mem); device attributes "
    "might also include speeds and other specs (7200rpm, 200kiops, etc.). "
    "For example, --stores=hdd:7200rpm=/mnt/hda1,ssd=/mnt/ssd01,ssd=/mnt/ssd02,"
    "mem=1073741824.",
)

ATTRS = _option(
    "attrs",
    OptionKind.STRING,
    "attrs",
    "specify an ordered, colon-separated list of node attributes. Attributes "
    "are arbitrary strings specifying topography or machine capabilities. "
    'Topography might include datacenter designation (e.g. "us-west-1a", '
    '"us-west-1b", "us-east-1c"). Machine capabilities might include '
    'specialized hardware or number of cores (e.g. "gpu", "x16c"). The '
    "relative geographic proximity of two nodes is inferred from the common "
    "prefix of the attributes list, so topographic attributes should be "
    "specified first and in the same order for all nodes. "
    "For example: --attrs=us-west-1b:gpu.",
)

MAX_OFFSET = _option(
    "max-offset",
    OptionKind.DURATION,
    "max_offset",
    "specify the maximum clock offset for the cluster. Clock offset is "
    "measured on all node-to-node links and if any node notices it has clock "
    "offset in excess of --max-offset, it will commit suicide. Setting this "
    "value too high may decrease transaction performance in the presence of "
    "contention.",
)

METRICS_FREQUENCY = _option(
    "metrics-frequency",
    OptionKind.DURATION,
    "metrics_frequency",
    "specify --metrics-frequency to adjust the frequency at which the server "
    "records its own internal metrics.",
)

# Gossip flags.

GOSSIP = _option(
    "gossip",
    OptionKind.STRING,
    "gossip_bootstrap",
    "specify a comma-separated list of gossip addresses or resolvers for "
    "gossip bootstrap. Each item in the list has an optional type prefix, "
    "written <type>=<address>. Unspecified type means ip address or dns. Type can "
    'also be a load balancer ("lb"), a unix socket ("unix") or, for '
    'single-node systems, "self".',
)

GOSSIP_INTERVAL = _option(
    "gossip-interval",
    OptionKind.DURATION,
    "gossip_interval",
    "approximate interval (duration) for gossiping new information to peers.",
)

# KV flags.

LINEARIZABLE = _option(
    "linearizable",
    OptionKind.BOOL,
    "linearizable",
    "enables linearizable behaviour of operations on this node by making sure "
    "that no commit timestamp is reported back to the client until all other "
    "node clocks have necessarily passed it.",
)

# Engine flags.

CACHE_SIZE = _option(
    "cache-size",
    OptionKind.INT64,
    "cache_size",
    "total size in bytes for caches, shared evenly if there are multiple "
    "storage devices.",
)

SCAN_INTERVAL = _option(
    "scan-interval",
    OptionKind.DURATION,
    "scan_interval",
    "specify --scan-interval to adjust the target for the duration of a single "
    "scan through a store's ranges. The scan is slowed as necessary to "
    "approximately achieve this duration.",
)

# Flags shared by everything that talks to a cluster.

CLIENT_ADDR = _option(
    "addr",
    OptionKind.STRING,
    "addr",
    "the address for connection to the cockroach cluster.",
)

INSECURE = _option(
    "insecure",
    OptionKind.BOOL,
    "insecure",
    "run over plain HTTP. WARNING: this is strongly discouraged.",
)

CERTS = _option(
    "certs",
    OptionKind.STRING,
    "certs",
    "directory containing RSA key and x509 certs. "
    "This flag is required if --insecure=false.",
)


NODE_OPTIONS: Tuple[OptionDescriptor, ...] = (
    ADDR,
    STORES,
    ATTRS,
    MAX_OFFSET,
    METRICS_FREQUENCY,
    GOSSIP,
    GOSSIP_INTERVAL,
    LINEARIZABLE,
    CACHE_SIZE,
    SCAN_INTERVAL,
)

CLIENT_OPTIONS: Tuple[OptionDescriptor, ...] = (CLIENT_ADDR,)

ALL_OPTIONS: Tuple[OptionDescriptor, ...] = NODE_OPTIONS + (
    CLIENT_ADDR,
    INSECURE,
    CERTS,
)


def build_registry() -> Dict[str, OptionDescriptor]:
    """
    Map every option name to its declaration.

    ``addr`` is declared twice (server and client wording) against the same
    field; the server declaration is the canonical one returned here.
    """
    registry: Dict[str, OptionDescriptor] = {}
    for descriptor in ALL_OPTIONS:
        existing = registry.get(descriptor.name)
        if existing is not None:
            if existing.field != descriptor.field or existing.kind != descriptor.kind:
                raise ValueError(
                    f"option '{descriptor.name}' declared against both "
                    f"'{existing.field.attr}' and '{descriptor.field.attr}'"
                )
            continue
        registry[descriptor.name] = descriptor
    return registry
