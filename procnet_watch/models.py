from __future__ import annotations
import enum
from dataclasses import dataclass, field
from ipaddress import IPv4Address, IPv6Address
from typing import Optional, Tuple, Union

Address = Union[IPv4Address, IPv6Address]
Endpoint = Tuple[Address, int]


class Protocol(enum.Enum):
    TCP = "TCP"
    UDP = "UDP"
    TCP6 = "TCPv6"
    UDP6 = "UDPv6"


class State(enum.Enum):
    NOT_APPLICABLE = ""
    CLOSE_WAIT = "CLOSE_WAIT"
    CLOSED = "CLOSED"
    CLOSING = "CLOSING"
    ESTABLISHED = "ESTABLISHED"
    FIN_WAIT_1 = "FIN_WAIT_1"
    FIN_WAIT_2 = "FIN_WAIT_2"
    LAST_ACK = "LAST_ACK"
    LISTENING = "LISTENING"
    SYN_RECEIVED = "SYN_RECEIVED"
    SYN_SENT = "SYN_SENT"
    TIME_WAIT = "TIME_WAIT"


class HostingKind(enum.Enum):
    SLOT = "slot"       # IIS application pool name
    DIRECT = "direct"   # plain process name
    UNKNOWN = "auto"    # direct first, then slot


@dataclass(frozen=True)
class ConnectionRecord:
    protocol: Protocol
    local: Endpoint
    remote: Optional[Endpoint]
    state: State
    pid: int


@dataclass(frozen=True)
class ProcessEntry:
    pid: int
    name: str


@dataclass(frozen=True)
class Change:
    name: str
    old_pid: int
    new_pid: int


@dataclass(eq=False)
class LogicalTarget:
    name: str
    pid: int = 0
    hosting: HostingKind = HostingKind.UNKNOWN
    short_name: str = field(init=False, default="")

    def __post_init__(self):
        self.refresh_short_name()

    def __setattr__(self, key, value):
        super().__setattr__(key, value)
        if key in ("name", "hosting") and "short_name" in self.__dict__:
            self.refresh_short_name()

    def refresh_short_name(self) -> None:
        from .tracking.shortname import derive_short_name
        object.__setattr__(self, "short_name", derive_short_name(self.name, self.hosting))

    @property
    def bound(self) -> bool:
        return self.pid != 0

    # pid is the identity; unresolved targets are never merged
    def __eq__(self, other):
        if not isinstance(other, LogicalTarget):
            return NotImplemented
        if self is other:
            return True
        return self.pid != 0 and self.pid == other.pid

    def __hash__(self):
        return hash(self.pid) if self.pid else id(self)

    def to_dict(self) -> dict:
        return {"name": self.name, "pid": self.pid, "hosting": self.hosting.value, "short_name": self.short_name}
